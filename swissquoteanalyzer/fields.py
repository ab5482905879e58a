"""Turn one segmented row into a Transaction.

Columns are assigned by the left edge of each word (see ``layout``). Where the
position alone is ambiguous the value is confirmed by its shape: references
must be integers, value dates must parse, ISINs must be ISIN-shaped.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from .layout import DEFAULT_LAYOUT, StatementLayout
from .matchers import GROSS_AMOUNT, TAX_AMOUNT, TYPE_KEYWORD, find_isin
from .models import Transaction, TransactionType, Word
from .parsers import is_swiss_date, parse_swiss_amount, parse_swiss_date
from .rows import Row

logger = logging.getLogger(__name__)


def _first_in_band(words: Sequence[Word], layout: StatementLayout, band: str) -> Optional[Word]:
  column = layout.band(band)
  return next((w for w in words if column.contains(w)), None)


def extract_reference(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> Optional[str]:
  word = _first_in_band(words, layout, "reference")
  if word is None:
    return None
  text = word.text.strip()
  if text.lstrip("+-").isdigit():
    return text
  logger.debug(f"Ignoring non-numeric reference {text!r}")
  return None


def extract_amount(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> Decimal:
  """Signed amount: the debit column negated, else the credit column, else 0."""
  debit_word = _first_in_band(words, layout, "debit")
  if debit_word is not None:
    debit = parse_swiss_amount(debit_word.text)
    if debit is not None:
      return -debit
    logger.debug(f"Unparsable debit amount {debit_word.text!r}")

  credit_word = _first_in_band(words, layout, "credit")
  if credit_word is not None:
    credit = parse_swiss_amount(credit_word.text)
    if credit is not None:
      return credit
    logger.debug(f"Unparsable credit amount {credit_word.text!r}")

  return Decimal("0")


def extract_value_date(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT):
  column = layout.band("value_date")
  for word in words:
    if column.contains(word) and is_swiss_date(word.text):
      return parse_swiss_date(word.text)
  return None


def extract_currency(words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> str:
  for word in words:
    if word.text in layout.currencies:
      return word.text
  return layout.default_currency


def extract_type(anchor: Word, description_words: Sequence[Word], layout: StatementLayout = DEFAULT_LAYOUT) -> Optional[str]:
  # Only the anchor's own line; wrapped description lines can contain the
  # same keywords (e.g. "... (AAPL) Dividende").
  same_line = [w for w in description_words if abs(w.bottom - anchor.bottom) < layout.type_line_tolerance]
  return TYPE_KEYWORD.match(same_line)


def extract_transaction(row: Row, layout: StatementLayout = DEFAULT_LAYOUT) -> Optional[Transaction]:
  """Build the Transaction of a row, or None if the anchor date does not parse."""
  tx_date = parse_swiss_date(row.anchor.text)
  if tx_date is None:
    logger.warning(f"Skipping row with invalid date {row.anchor.text!r}")
    return None

  words = row.words
  description_band = layout.band("description")
  description_words = [w for w in words if description_band.contains(w)]
  description = " ".join(w.text for w in description_words)

  tx_type = extract_type(row.anchor, description_words, layout) if description_words else None
  amount = extract_amount(words, layout)

  if tx_type == TransactionType.DIVIDEND:
    # The ledger columns hold the net payment; the gross is in the text.
    gross = GROSS_AMOUNT.match(description)
    if gross is not None:
      amount = gross
    else:
      logger.debug(f"No gross amount in dividend row {tx_date.isoformat()}")

  return Transaction(
    date=tx_date,
    value_date=extract_value_date(words, layout),
    transaction_type=tx_type,
    description=description,
    reference=extract_reference(words, layout),
    isin=find_isin(words, description),
    amount=amount,
    currency=extract_currency(words, layout),
    tax=TAX_AMOUNT.match(description),
  )
