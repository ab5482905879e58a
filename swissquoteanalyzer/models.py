"""Data model shared by the extractor, the insights generator and the report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple


class TransactionType:
  """Transaction type keywords exactly as printed on the statement."""

  PURCHASE = "Kauf"
  SALE = "Verkauf"
  CURRENCY_EXCHANGE = "Währungsumtausch"
  DIVIDEND = "Dividende"
  DEBIT_INTEREST = "Sollzinsen"
  AUTOMATED = "Automatisierter"
  OPENING_BALANCE = "Anfangsbestand"
  CLOSING_BALANCE = "Schlussbilanz"
  CAPITAL_GAIN = "Kapitalgewinn"

  ALL: Tuple[str, ...] = (
    PURCHASE,
    SALE,
    CURRENCY_EXCHANGE,
    DIVIDEND,
    DEBIT_INTEREST,
    AUTOMATED,
    OPENING_BALANCE,
    CLOSING_BALANCE,
    CAPITAL_GAIN,
  )


@dataclass(frozen=True)
class Word:
  """A text fragment with its bounding box in PDF space (origin bottom-left)."""

  text: str
  left: float
  bottom: float
  right: Optional[float] = None
  top: Optional[float] = None


@dataclass(frozen=True)
class Page:
  number: int
  width: float
  height: float
  text: str
  words: Tuple[Word, ...] = ()

  @property
  def lines(self) -> List[str]:
    """Stripped, non-blank lines of the raw page text."""
    return [ln.strip() for ln in self.text.split("\n") if ln.strip()]


@dataclass(frozen=True)
class Transaction:
  date: date
  description: str = ""
  amount: Decimal = Decimal("0")
  currency: str = "USD"
  value_date: Optional[date] = None
  transaction_type: Optional[str] = None
  reference: Optional[str] = None
  isin: Optional[str] = None
  tax: Optional[Decimal] = None


@dataclass
class Statement:
  account_number: str = ""
  account_holder: str = ""
  statement_date: Optional[date] = None
  period_start: Optional[date] = None
  period_end: Optional[date] = None
  transactions: List[Transaction] = field(default_factory=list)
  opening_balance: Decimal = Decimal("0")
  closing_balance: Decimal = Decimal("0")
