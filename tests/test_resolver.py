import itertools
import unittest
from datetime import date
from decimal import Decimal

from swissquoteanalyzer.models import Transaction
from swissquoteanalyzer.resolver import build_ticker_map, resolve_identifiers


def tx(description, transaction_type=None, isin=None, amount="0"):
  return Transaction(
    date=date(2024, 3, 15),
    description=description,
    transaction_type=transaction_type,
    isin=isin,
    amount=Decimal(amount),
  )


def statement_transactions():
  return [
    tx("10 NESTLE N (NESN) Kauf ISIN: CH0038863350", "Kauf", "CH0038863350", "-1000"),
    tx("APPLE INC (AAPL) Dividende Betrag: USD 10.00", "Dividende", amount="10"),
    tx("5 APPLE INC (AAPL) Verkauf ISIN: US0378331005", "Verkauf", "US0378331005", "900"),
    tx("NESTLE N (NESN) Dividende", "Dividende", amount="30"),
    tx("UNKNOWN CORP (UNKN) Dividende", "Dividende", amount="5"),
    tx("Sollzinsen", "Sollzinsen", amount="-3"),
  ]


class BuildTickerMapTest(unittest.TestCase):
  def test_map_from_trades(self):
    mapping = build_ticker_map(statement_transactions())
    self.assertEqual(dict(mapping), {"NESN": "CH0038863350", "AAPL": "US0378331005"})

  def test_first_seen_wins(self):
    mapping = build_ticker_map([
      tx("NESTLE N (NESN) Kauf", "Kauf", "CH0038863350"),
      tx("NESTLE N (NESN) Verkauf", "Verkauf", "CH0012345678"),
    ])
    self.assertEqual(mapping["NESN"], "CH0038863350")

  def test_trades_without_isin_are_ignored(self):
    self.assertEqual(len(build_ticker_map([tx("NESTLE N (NESN) Kauf", "Kauf")])), 0)

  def test_mapping_is_read_only(self):
    mapping = build_ticker_map(statement_transactions())
    with self.assertRaises(TypeError):
      mapping["MSFT"] = "US5949181045"


class ResolveIdentifiersTest(unittest.TestCase):
  def test_dividends_get_isin(self):
    resolved = resolve_identifiers(statement_transactions())
    self.assertEqual([t.isin for t in resolved], [
      "CH0038863350",
      "US0378331005",
      "US0378331005",
      "CH0038863350",
      None,
      None,
    ])

  def test_inputs_not_mutated_and_order_kept(self):
    original = statement_transactions()
    resolved = resolve_identifiers(original)
    self.assertIsNone(original[1].isin)
    self.assertEqual([t.description for t in resolved], [t.description for t in original])

  def test_only_dividends_are_filled(self):
    resolved = resolve_identifiers([
      tx("NESTLE N (NESN) Kauf", "Kauf", "CH0038863350"),
      tx("NESTLE N (NESN) Dividende", None),
    ])
    self.assertIsNone(resolved[1].isin)

  def test_existing_isin_is_kept(self):
    resolved = resolve_identifiers([
      tx("NESTLE N (NESN) Kauf", "Kauf", "CH0038863350"),
      tx("NESTLE N (NESN) Dividende", "Dividende", "CH9999999999"),
    ])
    self.assertEqual(resolved[1].isin, "CH9999999999")

  def test_order_independent(self):
    base = statement_transactions()
    expected_map = dict(build_ticker_map(base))
    expected = {t.description: t.isin for t in resolve_identifiers(base)}
    for perm in itertools.permutations(base):
      with self.subTest(order=[t.description[:10] for t in perm]):
        self.assertEqual(dict(build_ticker_map(perm)), expected_map)
        self.assertEqual({t.description: t.isin for t in resolve_identifiers(perm)}, expected)

  def test_explicit_map(self):
    resolved = resolve_identifiers([tx("MICROSOFT (MSFT) Dividende", "Dividende")], {"MSFT": "US5949181045"})
    self.assertEqual(resolved[0].isin, "US5949181045")


if __name__ == '__main__':
  unittest.main()
