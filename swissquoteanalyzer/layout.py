"""Column bands and row tunables of the Swissquote account statement.

Positions are page coordinates (points) of a word's left edge. The defaults
were measured on the current statement layout and are not expected to hold
for other documents; ``load_layout`` lets a run override them.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple

from .errors import LayoutError
from .models import Word

logger = logging.getLogger(__name__)

BAND_NAMES = ("date", "description", "reference", "debit", "credit", "value_date")


@dataclass(frozen=True)
class ColumnBand:
  name: str
  left_min: float
  left_max: float

  def contains(self, word: Word) -> bool:
    return self.left_min <= word.left <= self.left_max


def _default_bands() -> Dict[str, ColumnBand]:
  return {
    "date": ColumnBand("date", 30, 35),
    "description": ColumnBand("description", 75, 200),
    "reference": ColumnBand("reference", 220, 270),
    "debit": ColumnBand("debit", 275, 340),
    "credit": ColumnBand("credit", 345, 420),
    "value_date": ColumnBand("value_date", 425, 475),
  }


@dataclass(frozen=True)
class StatementLayout:
  bands: Dict[str, ColumnBand] = field(default_factory=_default_bands)
  # Share of the gap to the next anchor that still belongs to a row.
  row_height_ratio: float = 0.9
  # Height of the last row on a page, which has no next anchor.
  last_row_span: float = 40.0
  # Words sitting slightly above the anchor's baseline still join the row.
  row_top_tolerance: float = 2.0
  # Max baseline offset for a word to count as the anchor's own line.
  type_line_tolerance: float = 0.5
  currencies: Tuple[str, ...] = ("USD", "CHF", "EUR")
  default_currency: str = "USD"
  header_pages: int = 2
  # Max horizontal gap (pt) between characters of one word. The date and
  # description columns are only about 1pt apart.
  word_gap: float = 0.5

  def band(self, name: str) -> ColumnBand:
    return self.bands[name]


DEFAULT_LAYOUT = StatementLayout()


def _number(key: str, value) -> float:
  # JSON true/false load as bool, an int subclass
  if isinstance(value, bool) or not isinstance(value, (int, float)):
    raise LayoutError(f"Layout setting {key!r} must be a number, got {value!r}")
  return float(value)


def _count(key: str, value) -> int:
  if isinstance(value, bool) or not isinstance(value, int) or value < 0:
    raise LayoutError(f"Layout setting {key!r} must be a non-negative integer, got {value!r}")
  return value


def _currency(key: str, value) -> str:
  if not isinstance(value, str) or not value:
    raise LayoutError(f"Layout setting {key!r} must be a currency code, got {value!r}")
  return value


def _currencies(key: str, value) -> Tuple[str, ...]:
  if not isinstance(value, list):
    raise LayoutError(f"Layout setting {key!r} must be a list of currency codes, got {value!r}")
  return tuple(_currency(key, v) for v in value)


# JSON key -> (StatementLayout attribute, converter)
_TUNABLES = {
  "rowHeightRatio": ("row_height_ratio", _number),
  "lastRowSpan": ("last_row_span", _number),
  "rowTopTolerance": ("row_top_tolerance", _number),
  "typeLineTolerance": ("type_line_tolerance", _number),
  "currencies": ("currencies", _currencies),
  "defaultCurrency": ("default_currency", _currency),
  "headerPages": ("header_pages", _count),
  "wordGap": ("word_gap", _number),
}


def _band(name: str, bounds) -> ColumnBand:
  if name not in BAND_NAMES:
    raise LayoutError(f"Unknown column band {name!r}")
  if not isinstance(bounds, list) or len(bounds) != 2:
    raise LayoutError(f"Band {name!r} must be a [min, max] pair, got {bounds!r}")
  left_min, left_max = (_number(f"bands.{name}", v) for v in bounds)
  if left_min > left_max:
    raise LayoutError(f"Band {name!r} has min {left_min} greater than max {left_max}")
  return ColumnBand(name, left_min, left_max)


def layout_from_dict(raw: dict, base: StatementLayout = DEFAULT_LAYOUT) -> StatementLayout:
  """Apply overrides such as ``{"bands": {"debit": [275, 340]}, "lastRowSpan": 40}``."""
  if not isinstance(raw, dict):
    raise LayoutError("Layout override must be a JSON object")

  raw_bands = raw.get("bands", {})
  if not isinstance(raw_bands, dict):
    raise LayoutError(f"Layout setting 'bands' must be an object, got {raw_bands!r}")
  bands = dict(base.bands)
  for name, bounds in raw_bands.items():
    bands[name] = _band(name, bounds)

  changes = {"bands": bands}
  for key, value in raw.items():
    if key == "bands":
      continue
    if key not in _TUNABLES:
      raise LayoutError(f"Unknown layout setting {key!r}")
    attr, convert = _TUNABLES[key]
    changes[attr] = convert(key, value)

  return dataclasses.replace(base, **changes)


def load_layout(path: Path) -> StatementLayout:
  try:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
  except FileNotFoundError as exc:
    raise LayoutError(f"Layout file not found: {path}") from exc
  except (json.JSONDecodeError, UnicodeDecodeError) as exc:
    raise LayoutError(f"Layout file {path} is not valid JSON: {exc}") from exc
  layout = layout_from_dict(raw)
  logger.info(f"Loaded layout overrides from {path}")
  return layout
