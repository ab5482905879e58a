"""Group the positioned words of a page into transaction rows.

The statement draws no grid. A row starts at a ``dd.mm.yyyy`` word in the date
column and extends downwards towards the next such anchor. Rows have variable
height (descriptions wrap onto several lines), so each row claims only part of
the gap to the next anchor; the last row of a page gets a fixed span.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .layout import DEFAULT_LAYOUT, StatementLayout
from .models import Word
from .parsers import is_swiss_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
  anchor: Word
  words: Tuple[Word, ...]


def find_anchors(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> List[Word]:
  """Date words inside the date band, in word-stream order."""
  date_band = layout.band("date")
  return [w for w in words if date_band.contains(w) and is_swiss_date(w.text)]


def row_floor(anchor: Word, next_anchor: Word | None, layout: StatementLayout) -> float:
  """Lowest ``bottom`` coordinate still belonging to the anchor's row."""
  if next_anchor is None:
    return anchor.bottom - layout.last_row_span
  row_height = abs(anchor.bottom - next_anchor.bottom)
  return anchor.bottom - row_height * layout.row_height_ratio


def segment_rows(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> List[Row]:
  anchors = find_anchors(words, layout)
  rows: List[Row] = []

  for idx, anchor in enumerate(anchors):
    next_anchor = anchors[idx + 1] if idx + 1 < len(anchors) else None
    ceiling = anchor.bottom + layout.row_top_tolerance
    floor = row_floor(anchor, next_anchor, layout)

    members = [w for w in words if floor <= w.bottom <= ceiling]
    # y grows upwards: top-to-bottom is descending bottom
    members.sort(key=lambda w: (-w.bottom, w.left))
    rows.append(Row(anchor=anchor, words=tuple(members)))

  logger.debug(f"Segmented {len(rows)} rows from {len(words)} words")
  return rows
