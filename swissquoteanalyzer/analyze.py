"""Dump page text and word positions of a statement PDF.

Used to measure the column bands of a new statement layout. Read-only: any
failure is logged and reported through the return value.
"""

import logging
import sys
from typing import Optional, TextIO

from .extractor import read_pages

logger = logging.getLogger(__name__)

RULE = "=" * 100


def analyze_structure(pdf_path, out: Optional[TextIO] = None, limit: int = 100) -> bool:
  out = out or sys.stdout
  try:
    pages = read_pages(pdf_path)
  except FileNotFoundError:
    logger.error(f"PDF file not found: {pdf_path}")
    return False
  except Exception as e:
    logger.exception(f"Failed to analyze {pdf_path}: {e}")
    return False

  print(f"Analyzing PDF structure: {pdf_path}", file=out)
  print(RULE, file=out)
  print(f"Total Pages: {len(pages)}\n", file=out)

  for page in pages:
    print(f"\n{RULE}", file=out)
    print(f"PAGE {page.number} (Size: {page.width:.1f} x {page.height:.1f})", file=out)
    print(f"{RULE}\n", file=out)

    print("--- FULL TEXT ---", file=out)
    print(page.text, file=out)

    print("\n--- LINE BY LINE ---", file=out)
    for idx, line in enumerate(page.text.split("\n")):
      if line.strip():
        print(f"[{idx:3d}] {line}", file=out)

    print(f"\n--- WORDS WITH POSITIONS (First {limit}) ---", file=out)
    for word in page.words[:limit]:
      print(f"[Y:{word.bottom:6.1f} X:{word.left:6.1f}] '{word.text}'", file=out)

    print(f"\n{'-' * 100}\n", file=out)

  return True
