"""Swiss locale parsers for statement amounts and dates."""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

DATE_FORMAT = "%d.%m.%Y"
DATE_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4}$")

# Signed decimal, '.' as decimal separator, no exponent, no grouping left.
_PLAIN_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$")


def is_swiss_date(text: str) -> bool:
  return bool(DATE_RE.match(text))


def parse_swiss_date(text: str) -> Optional[date]:
  """Parse ``dd.mm.yyyy``; returns None for anything else, including
  calendar-invalid dates such as 31.02.2024."""
  if not text or not is_swiss_date(text.strip()):
    return None
  try:
    return datetime.strptime(text.strip(), DATE_FORMAT).date()
  except ValueError:
    return None


def parse_swiss_amount(text: str) -> Optional[Decimal]:
  """Parse a Swiss formatted amount such as ``1'234.56`` or ``-2'658.75``.

  Apostrophe thousand separators and spaces are removed first. Returns None
  when the remainder is not a plain signed decimal.
  """
  if text is None:
    return None
  cleaned = text.replace("'", "").replace("’", "").replace(" ", "")
  if not _PLAIN_NUMBER_RE.match(cleaned):
    return None
  try:
    return Decimal(cleaned)
  except InvalidOperation:
    return None
