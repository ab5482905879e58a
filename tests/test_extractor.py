import unittest
from datetime import date
from decimal import Decimal

from swissquoteanalyzer.errors import StatementNotFoundError
from swissquoteanalyzer.extractor import extract_statement, parse_pages
from swissquoteanalyzer.models import Page, Word


def page(number, text="", words=()):
  return Page(number=number, width=595, height=842, text=text, words=tuple(words))


class ParsePagesTest(unittest.TestCase):
  def test_pipeline(self):
    first = page(1, "Herrn Max Muster\nIBAN: CH93 0076 2011 6238 5295 7\nVom 01.01.2024 bis 31.03.2024", [
      Word("01.01.2024", 32, 700),
      Word("Anfangsbestand", 78, 700),
      Word("5'000.00", 350, 700),
      Word("05.01.2024", 32, 650),
      Word("NESTLE", 78, 650),
      Word("(NESN)", 120, 650),
      Word("Kauf", 160, 650),
      Word("1'000.00", 280, 650),
      Word("ISIN:", 78, 640),
      Word("CH0038863350", 100, 640),
    ])
    second = page(2, "Seite 2", [
      Word("10.02.2024", 32, 700),
      Word("NESTLE", 78, 700),
      Word("(NESN)", 120, 700),
      Word("Dividende", 160, 700),
      Word("20.00", 350, 700),
    ])
    third = page(3, "Frau Someone Else\nVom 01.04.2024 bis 30.06.2024", [
      Word("31.03.2024", 32, 700),
      Word("Schlussbilanz", 78, 700),
      Word("4'020.00", 350, 700),
    ])

    statement = parse_pages([first, second, third])

    self.assertEqual(statement.account_number, "CH9300762011623852957")
    self.assertEqual(statement.account_holder, "Herrn Max Muster")
    self.assertEqual(statement.period_start, date(2024, 1, 1))
    self.assertEqual(statement.statement_date, date(2024, 3, 31))
    self.assertEqual(
      [t.transaction_type for t in statement.transactions],
      ["Anfangsbestand", "Kauf", "Dividende", "Schlussbilanz"])
    self.assertEqual(statement.transactions[1].amount, Decimal("-1000.00"))
    # dividend on page 2 resolved from the purchase on page 1
    self.assertEqual(statement.transactions[2].isin, "CH0038863350")
    self.assertEqual(statement.opening_balance, Decimal("5000.00"))
    self.assertEqual(statement.closing_balance, Decimal("4020.00"))

  def test_first_opening_balance_wins_even_when_zero(self):
    statement = parse_pages([page(1, "", [
      Word("01.01.2024", 32, 700),
      Word("Anfangsbestand", 78, 700),
      Word("0.00", 350, 700),
      Word("01.01.2024", 32, 650),
      Word("Anfangsbestand", 78, 650),
      Word("100.00", 350, 650),
    ])])
    self.assertEqual(len(statement.transactions), 2)
    self.assertEqual(statement.opening_balance, Decimal("0.00"))
    self.assertEqual(statement.closing_balance, Decimal("0"))

  def test_empty_document(self):
    statement = parse_pages([page(1, "Nothing here")])
    self.assertEqual(statement.transactions, [])
    self.assertEqual(statement.account_number, "")
    self.assertIsNone(statement.period_start)

  def test_missing_pdf(self):
    with self.assertRaises(StatementNotFoundError):
      extract_statement("/nonexistent/statement.pdf")


if __name__ == '__main__':
  unittest.main()
