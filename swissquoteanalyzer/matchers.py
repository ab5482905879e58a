"""Named text matchers used by the field extractor, resolver and insights.

Each matcher answers one question about a word list or a description string
and returns None when the answer is absent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from .models import TransactionType, Word
from .parsers import parse_swiss_amount

ISIN_RE = re.compile(r"^[A-Z]{2}[A-Z0-9]{10}$")
BARE_ISIN_RE = re.compile(r"\b([A-Z]{2}[A-Z0-9]{10})\b")
ISIN_MARKER = "ISIN:"


def is_isin(text: str) -> bool:
  return bool(text) and bool(ISIN_RE.match(text))


@dataclass(frozen=True)
class TypeKeywordMatcher:
  """Leftmost word that is one of the known transaction type keywords."""

  keywords: Sequence[str] = TransactionType.ALL

  def match(self, words: Iterable[Word]) -> Optional[str]:
    for word in sorted(words, key=lambda w: w.left):
      if word.text in self.keywords:
        return word.text
    return None


@dataclass(frozen=True)
class IsinAfterMarkerMatcher:
  """ISIN printed as the word right after an ``ISIN:`` word."""

  marker: str = ISIN_MARKER

  def match(self, words: Sequence[Word]) -> Optional[str]:
    for idx, word in enumerate(words[:-1]):
      if word.text == self.marker:
        candidate = words[idx + 1].text
        return candidate if is_isin(candidate) else None
    return None


@dataclass(frozen=True)
class BareIsinMatcher:
  """First ISIN-shaped token anywhere in a text."""

  def match(self, text: str) -> Optional[str]:
    if not text:
      return None
    m = BARE_ISIN_RE.search(text)
    return m.group(1) if m else None


@dataclass(frozen=True)
class LabeledAmountMatcher:
  """Amount following ``<label>: <CCY>`` in a description, e.g. ``Taxen: USD 15.00``."""

  label: str

  @property
  def pattern(self) -> re.Pattern:
    return re.compile(rf"{re.escape(self.label)}:\s+[A-Z]{{3}}\s+([\d']+\.?\d*)")

  def match(self, text: str) -> Optional[Decimal]:
    if not text:
      return None
    m = self.pattern.search(text)
    if not m:
      return None
    return parse_swiss_amount(m.group(1))

  def match_all(self, text: str) -> list:
    if not text:
      return []
    found = (parse_swiss_amount(raw) for raw in self.pattern.findall(text))
    return [amount for amount in found if amount is not None]


@dataclass(frozen=True)
class TickerMatcher:
  """Ticker from ``NAME (TICKER) <keyword>``, e.g. ``APPLE INC (AAPL) Dividende``."""

  keywords: Sequence[str]

  @property
  def pattern(self) -> re.Pattern:
    alternatives = "|".join(re.escape(k) for k in self.keywords)
    return re.compile(rf"([A-Z][A-Za-z0-9\s\.-]+)\s*\(([A-Z]{{2,6}})\)\s*(?:{alternatives})")

  def match(self, text: str) -> Optional[str]:
    if not text:
      return None
    m = self.pattern.search(text)
    return m.group(2) if m else None


SECURITY_NAME_RE = re.compile(r"([A-Z][A-Za-z0-9\s\.-]*\s+\([A-Z]{2,6}\))")

TYPE_KEYWORD = TypeKeywordMatcher()
ISIN_AFTER_MARKER = IsinAfterMarkerMatcher()
ISIN_BARE_TOKEN = BareIsinMatcher()
GROSS_AMOUNT = LabeledAmountMatcher("Betrag")
TAX_AMOUNT = LabeledAmountMatcher("Taxen")
COMMISSION_AMOUNT = LabeledAmountMatcher("Kommission")
TRADE_TICKER = TickerMatcher((TransactionType.PURCHASE, TransactionType.SALE))
DIVIDEND_TICKER = TickerMatcher((TransactionType.DIVIDEND,))


def find_isin(words: Sequence[Word], description: str) -> Optional[str]:
  """ISIN after an ``ISIN:`` marker, falling back to a bare token in the description."""
  return ISIN_AFTER_MARKER.match(words) or ISIN_BARE_TOKEN.match(description)


def security_name(description: str) -> Optional[str]:
  if not description:
    return None
  m = SECURITY_NAME_RE.search(description)
  return m.group(1).strip() if m else None
