"""Fill in missing ISINs of dividend rows from the statement's trades.

Dividend rows name the security by ticker only, while purchase and sale rows
carry both ticker and ISIN. The ticker map is built once over the whole
statement and then applied, so it must run after every page is parsed.
"""

from __future__ import annotations

import dataclasses
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .matchers import DIVIDEND_TICKER, TRADE_TICKER
from .models import Transaction, TransactionType

logger = logging.getLogger(__name__)


def build_ticker_map(transactions: Iterable[Transaction]) -> Mapping[str, str]:
  """Ticker -> ISIN from trades; the first ISIN seen for a ticker wins."""
  mapping: Dict[str, str] = {}
  for tx in transactions:
    if not tx.isin:
      continue
    ticker = TRADE_TICKER.match(tx.description)
    if ticker is None:
      continue
    known = mapping.get(ticker)
    if known is None:
      mapping[ticker] = tx.isin
    elif known != tx.isin:
      logger.warning(f"Ticker {ticker} seen with ISIN {tx.isin}, keeping {known}")
  return MappingProxyType(mapping)


def dividend_ticker(tx: Transaction) -> Optional[str]:
  if tx.transaction_type != TransactionType.DIVIDEND:
    return None
  return DIVIDEND_TICKER.match(tx.description)


def resolve_identifiers(
    transactions: Iterable[Transaction],
    ticker_map: Optional[Mapping[str, str]] = None) -> List[Transaction]:
  """Return the transactions with dividend ISINs filled in where resolvable.

  Inputs are left untouched and order is preserved.
  """
  transactions = list(transactions)
  if ticker_map is None:
    ticker_map = build_ticker_map(transactions)

  resolved: List[Transaction] = []
  filled = 0
  for tx in transactions:
    if not tx.isin:
      ticker = dividend_ticker(tx)
      isin = ticker_map.get(ticker) if ticker else None
      if isin:
        tx = dataclasses.replace(tx, isin=isin)
        filled += 1
      elif ticker:
        logger.debug(f"No ISIN known for dividend ticker {ticker}")
    resolved.append(tx)

  logger.info(f"Resolved ISIN for {filled} dividend transactions ({len(ticker_map)} tickers known)")
  return resolved
