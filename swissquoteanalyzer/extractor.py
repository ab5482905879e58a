"""Swissquote account statement PDF -> Statement."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import pdfplumber

from .errors import StatementNotFoundError
from .fields import extract_transaction
from .header import extract_account_header
from .layout import DEFAULT_LAYOUT, StatementLayout
from .models import Page, Statement, TransactionType, Word
from .resolver import resolve_identifiers
from .rows import segment_rows

logger = logging.getLogger(__name__)


def _to_word(raw: dict, page_height: float) -> Word:
  # pdfplumber measures from the top of the page, the layout from the bottom
  return Word(
    text=raw["text"],
    left=float(raw["x0"]),
    right=float(raw["x1"]),
    bottom=float(page_height) - float(raw["bottom"]),
    top=float(page_height) - float(raw["top"]),
  )


def read_pages(pdf_path, layout: StatementLayout = DEFAULT_LAYOUT) -> List[Page]:
  """Load every page of the PDF as text plus positioned words."""
  pages = []
  with pdfplumber.open(str(pdf_path)) as pdf:
    for page in pdf.pages:
      height = float(page.height)
      words = tuple(_to_word(w, height) for w in page.extract_words(x_tolerance=layout.word_gap))
      pages.append(Page(
        number=page.page_number,
        width=float(page.width),
        height=height,
        text=page.extract_text() or "",
        words=words,
      ))
  logger.info(f"Read {len(pages)} pages from {pdf_path}")
  return pages


def parse_pages(pages: Sequence[Page], layout: StatementLayout = DEFAULT_LAYOUT) -> Statement:
  statement = Statement()

  header_lines = [ln for page in pages if page.number <= layout.header_pages for ln in page.lines]
  header = extract_account_header(header_lines)
  statement.account_number = header.account_number
  statement.account_holder = header.account_holder
  statement.period_start = header.period_start
  statement.period_end = header.period_end
  statement.statement_date = header.statement_date

  transactions = []
  for page in pages:
    logger.info(f"Processing page {page.number}")
    rows = segment_rows(page.words, layout)
    page_count = 0
    for row in rows:
      tx = extract_transaction(row, layout)
      if tx is not None:
        transactions.append(tx)
        page_count += 1
    logger.info(f"Extracted {page_count} transactions from {len(rows)} rows on page {page.number}")

  statement.transactions = resolve_identifiers(transactions)

  opening = next((tx for tx in statement.transactions
                  if tx.transaction_type == TransactionType.OPENING_BALANCE), None)
  closing = next((tx for tx in reversed(statement.transactions)
                  if tx.transaction_type == TransactionType.CLOSING_BALANCE), None)
  if opening is not None:
    statement.opening_balance = opening.amount
  if closing is not None:
    statement.closing_balance = closing.amount

  logger.info(f"Total transactions extracted: {len(statement.transactions)}")
  return statement


def extract_statement(pdf_path, layout: Optional[StatementLayout] = None) -> Statement:
  path = Path(pdf_path)
  if not path.is_file():
    raise StatementNotFoundError(f"PDF file not found: {path}")
  logger.info(f"Extracting data from: {path}")
  layout = layout or DEFAULT_LAYOUT
  return parse_pages(read_pages(path, layout), layout)
