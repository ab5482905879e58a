"""Portfolio insights derived from an extracted statement."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .matchers import COMMISSION_AMOUNT, DIVIDEND_TICKER, TAX_AMOUNT, security_name
from .models import Statement, Transaction, TransactionType
from .serialization import dumps

logger = logging.getLogger(__name__)

TICKER_PREFIX = "TICKER:"
ZERO = Decimal("0")


@dataclass
class SecurityInsights:
  isin: str
  security_name: str = ""
  total_transactions: int = 0
  buy_transactions: int = 0
  sell_transactions: int = 0
  dividend_transactions: int = 0
  total_buy_amount: Decimal = ZERO
  total_sell_amount: Decimal = ZERO
  net_amount: Decimal = ZERO
  total_dividends: Decimal = ZERO
  total_commissions: Decimal = ZERO
  total_taxes: Decimal = ZERO
  currency: str = ""
  transaction_dates: List[date] = field(default_factory=list)


@dataclass
class PortfolioInsights:
  account_number: str = ""
  account_holder: str = ""
  period_start: Optional[date] = None
  period_end: Optional[date] = None
  securities: List[SecurityInsights] = field(default_factory=list)
  transactions_by_type: Dict[str, int] = field(default_factory=dict)
  amount_by_currency: Dict[str, Decimal] = field(default_factory=dict)
  total_commissions: Decimal = ZERO
  total_taxes: Decimal = ZERO

  @property
  def total_dividends(self) -> Decimal:
    return sum((s.total_dividends for s in self.securities), ZERO)


def security_identifier(tx: Transaction) -> Optional[str]:
  """ISIN, or ``TICKER:<ticker>`` for a dividend whose ISIN could not be resolved."""
  if tx.isin:
    return tx.isin
  if tx.transaction_type == TransactionType.DIVIDEND:
    ticker = DIVIDEND_TICKER.match(tx.description)
    if ticker:
      return f"{TICKER_PREFIX}{ticker}"
  return None


def _decimal_sum(values) -> Decimal:
  return sum(values, ZERO)


def _security_insights(identifier: str, transactions: List[Transaction]) -> SecurityInsights:
  isin = None if identifier.startswith(TICKER_PREFIX) else identifier
  first = transactions[0]
  fallback_name = identifier if isin else identifier[len(TICKER_PREFIX):]
  insight = SecurityInsights(
    isin=identifier,
    security_name=security_name(first.description) or fallback_name,
    total_transactions=len(transactions),
    currency=first.currency or "USD",
    transaction_dates=sorted(tx.date for tx in transactions),
  )

  for tx in transactions:
    if tx.transaction_type == TransactionType.PURCHASE:
      insight.buy_transactions += 1
      insight.total_buy_amount += abs(tx.amount)
    elif tx.transaction_type == TransactionType.SALE:
      insight.sell_transactions += 1
      insight.total_sell_amount += tx.amount
    elif tx.transaction_type == TransactionType.DIVIDEND:
      insight.dividend_transactions += 1
      insight.total_dividends += abs(tx.amount)
      if tx.tax is not None:
        insight.total_taxes += tx.tax
      continue
    else:
      continue

    # fees only from trades of a real ISIN
    if isin is not None:
      insight.total_taxes += _decimal_sum(TAX_AMOUNT.match_all(tx.description))
      insight.total_commissions += _decimal_sum(COMMISSION_AMOUNT.match_all(tx.description))

  insight.net_amount = insight.total_sell_amount - insight.total_buy_amount
  return insight


def transactions_frame(statement: Statement) -> pd.DataFrame:
  rows = [
    {
      "position": idx,
      "identifier": security_identifier(tx),
      "transaction_type": tx.transaction_type,
      "currency": tx.currency,
      "abs_amount": abs(tx.amount),
    }
    for idx, tx in enumerate(statement.transactions)
  ]
  return pd.DataFrame(rows, columns=["position", "identifier", "transaction_type", "currency", "abs_amount"])


def generate_insights(statement: Statement) -> PortfolioInsights:
  insights = PortfolioInsights(
    account_number=statement.account_number,
    account_holder=statement.account_holder,
    period_start=statement.period_start,
    period_end=statement.period_end,
  )
  df = transactions_frame(statement)
  if df.empty:
    logger.info("Statement has no transactions")
    return insights

  securities = df[df["identifier"].notna()]
  for identifier, group in securities.groupby("identifier", sort=False):
    transactions = [statement.transactions[pos] for pos in group["position"]]
    insights.securities.append(_security_insights(identifier, transactions))

  typed = df[df["transaction_type"].notna()]
  insights.transactions_by_type = {str(k): int(v) for k, v in typed["transaction_type"].value_counts().items()}

  for currency, group in df.groupby("currency", sort=False):
    insights.amount_by_currency[str(currency)] = _decimal_sum(group["abs_amount"])

  for tx in statement.transactions:
    insights.total_commissions += COMMISSION_AMOUNT.match(tx.description) or ZERO
    insights.total_taxes += TAX_AMOUNT.match(tx.description) or ZERO

  logger.info(f"Generated insights for {len(insights.securities)} securities")
  return insights


def insights_to_dict(insights: PortfolioInsights) -> dict:
  def camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)

  def convert(value):
    if isinstance(value, dict):
      return {camel(k) if "_" in k else k: convert(v) for k, v in value.items()}
    if isinstance(value, list):
      return [convert(v) for v in value]
    return value

  data = convert(asdict(insights))
  data["totalDividends"] = insights.total_dividends
  return data


def save_insights(insights: PortfolioInsights, output_path) -> None:
  Path(output_path).write_text(dumps(insights_to_dict(insights)) + "\n", encoding="utf-8")
  logger.info(f"Insights saved to: {output_path}")
