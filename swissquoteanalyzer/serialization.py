"""Statement <-> JSON.

Keys are camelCase, dates ISO-8601 and amounts plain JSON numbers. Reading
matches keys case-insensitively and parses numbers as Decimal so amounts
survive a round trip unchanged.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import StatementLoadError, StatementNotFoundError
from .models import Statement, Transaction

logger = logging.getLogger(__name__)


def _iso(value: Optional[date]) -> Optional[str]:
  return value.isoformat() if value is not None else None


def _json_default(value):
  if isinstance(value, Decimal):
    # keep integral amounts as ints, everything else as float
    return int(value) if value == value.to_integral_value() else float(value)
  if isinstance(value, date):
    return value.isoformat()
  raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def transaction_to_dict(tx: Transaction) -> Dict[str, Any]:
  return {
    "date": _iso(tx.date),
    "valueDate": _iso(tx.value_date),
    "transactionType": tx.transaction_type,
    "description": tx.description,
    "reference": tx.reference,
    "isin": tx.isin,
    "amount": tx.amount,
    "currency": tx.currency,
    "tax": tx.tax,
  }


def statement_to_dict(statement: Statement) -> Dict[str, Any]:
  return {
    "accountNumber": statement.account_number,
    "accountHolder": statement.account_holder,
    "statementDate": _iso(statement.statement_date),
    "periodStart": _iso(statement.period_start),
    "periodEnd": _iso(statement.period_end),
    "transactions": [transaction_to_dict(tx) for tx in statement.transactions],
    "openingBalance": statement.opening_balance,
    "closingBalance": statement.closing_balance,
  }


def dumps(data: Any, indent: bool = True) -> str:
  return json.dumps(data, ensure_ascii=False, indent=2 if indent else None, default=_json_default)


def statement_to_json(statement: Statement, indent: bool = True) -> str:
  return dumps(statement_to_dict(statement), indent)


def save_statement(statement: Statement, output_path, indent: bool = True) -> None:
  Path(output_path).write_text(statement_to_json(statement, indent) + "\n", encoding="utf-8")
  logger.info(f"Successfully saved to: {output_path}")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _lower_keys(raw: Any, what: str) -> Dict[str, Any]:
  if not isinstance(raw, dict):
    raise StatementLoadError(f"Expected a JSON object for {what}, got {type(raw).__name__}")
  return {str(k).lower(): v for k, v in raw.items()}


def _date(raw: Any, field: str) -> Optional[date]:
  if raw in (None, ""):
    return None
  try:
    # tolerate full timestamps such as 2024-03-15T00:00:00
    return date.fromisoformat(str(raw)[:10])
  except ValueError as exc:
    raise StatementLoadError(f"Invalid date {raw!r} in field {field!r}") from exc


def _text(raw: Any, field: str) -> Optional[str]:
  if raw is None or isinstance(raw, str):
    return raw
  raise StatementLoadError(f"Expected a string in field {field!r}, got {raw!r}")


def _decimal(raw: Any, field: str, default: Optional[Decimal] = None) -> Optional[Decimal]:
  if raw is None:
    return default
  if isinstance(raw, bool):
    raise StatementLoadError(f"Invalid amount {raw!r} in field {field!r}")
  try:
    return Decimal(str(raw))
  except InvalidOperation as exc:
    raise StatementLoadError(f"Invalid amount {raw!r} in field {field!r}") from exc


def transaction_from_dict(raw: Any) -> Transaction:
  data = _lower_keys(raw, "transaction")
  tx_date = _date(data.get("date"), "date")
  if tx_date is None:
    raise StatementLoadError("Transaction without a date")
  return Transaction(
    date=tx_date,
    value_date=_date(data.get("valuedate"), "valueDate"),
    transaction_type=_text(data.get("transactiontype"), "transactionType"),
    description=_text(data.get("description"), "description") or "",
    reference=_text(data.get("reference"), "reference"),
    isin=_text(data.get("isin"), "isin"),
    amount=_decimal(data.get("amount"), "amount", Decimal("0")),
    currency=_text(data.get("currency"), "currency") or "",
    tax=_decimal(data.get("tax"), "tax"),
  )


def statement_from_dict(raw: Any) -> Statement:
  data = _lower_keys(raw, "statement")
  transactions = data.get("transactions")
  if transactions is None:
    transactions = []
  if not isinstance(transactions, list):
    raise StatementLoadError("Field 'transactions' must be a list")
  return Statement(
    account_number=_text(data.get("accountnumber"), "accountNumber") or "",
    account_holder=_text(data.get("accountholder"), "accountHolder") or "",
    statement_date=_date(data.get("statementdate"), "statementDate"),
    period_start=_date(data.get("periodstart"), "periodStart"),
    period_end=_date(data.get("periodend"), "periodEnd"),
    transactions=[transaction_from_dict(tx) for tx in transactions],
    opening_balance=_decimal(data.get("openingbalance"), "openingBalance", Decimal("0")),
    closing_balance=_decimal(data.get("closingbalance"), "closingBalance", Decimal("0")),
  )


def load_statement(json_path) -> Statement:
  path = Path(json_path)
  if not path.is_file():
    raise StatementNotFoundError(f"Input file not found: {path}")
  logger.info(f"Loading statement from: {path}")
  try:
    raw = json.loads(path.read_text(encoding="utf-8"), parse_float=Decimal)
  except (json.JSONDecodeError, UnicodeDecodeError) as exc:
    raise StatementLoadError(f"Failed to deserialize statement {path}: {exc}") from exc
  return statement_from_dict(raw)
