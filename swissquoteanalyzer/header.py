"""Account holder, IBAN and statement period from the statement's first pages."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from .parsers import parse_swiss_date

IBAN_RE = re.compile(r"IBAN\s*:\s*([A-Z]{2}\d{2}\s*\d{4}\s*\d{4}\s*\d{4}\s*\d{4}\s*\d)")
HOLDER_RE = re.compile(r"(Herrn|Frau)\s+([A-ZÄÖÜa-zäöü\s]+?)(?=IBAN|Vom)")
PERIOD_RE = re.compile(r"Vom\s+(\d{2}\.\d{2}\.\d{4})\s+bis\s+(\d{2}\.\d{2}\.\d{4})")


@dataclass(frozen=True)
class AccountHeader:
  account_number: str = ""
  account_holder: str = ""
  period_start: Optional[date] = None
  period_end: Optional[date] = None

  @property
  def statement_date(self) -> Optional[date]:
    return self.period_end


def extract_account_header(lines: Iterable[str]) -> AccountHeader:
  full_text = " ".join(ln.strip() for ln in lines if ln and ln.strip())

  account_number = ""
  m_iban = IBAN_RE.search(full_text)
  if m_iban:
    account_number = re.sub(r"\s+", "", m_iban.group(1))

  account_holder = ""
  m_holder = HOLDER_RE.search(full_text)
  if m_holder:
    account_holder = m_holder.group(0).strip()

  period_start = period_end = None
  m_period = PERIOD_RE.search(full_text)
  if m_period:
    period_start = parse_swiss_date(m_period.group(1))
    period_end = parse_swiss_date(m_period.group(2))

  return AccountHeader(
    account_number=account_number,
    account_holder=account_holder,
    period_start=period_start,
    period_end=period_end,
  )
