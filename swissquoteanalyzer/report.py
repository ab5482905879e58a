"""PDF report of the dividend insights."""

from __future__ import annotations

import logging
from itertools import groupby
from pathlib import Path

from fpdf import FPDF

from .insights import PortfolioInsights

logger = logging.getLogger(__name__)

TITLE = "Swissquote Kontoauszug Analyse"
# ISIN, security, dividend count, dividends, taxes (mm, sums to the A4 text width)
COLUMN_WIDTHS = (34, 60, 20, 28, 28)
ROW_HEIGHT = 7


def _latin1(text) -> str:
  # core PDF fonts only cover latin-1
  return str(text).encode("latin-1", "replace").decode("latin-1")


def _swiss_date(value) -> str:
  return value.strftime("%d.%m.%Y") if value else "-"


def _money(value) -> str:
  return f"{value:,.2f}".replace(",", "'")


class InsightsReport(FPDF):

  def header(self):
    self.set_font("Helvetica", style="B", size=20)
    self.set_text_color(30, 136, 229)
    self.cell(0, 12, TITLE, new_x="LMARGIN", new_y="NEXT")
    self.set_text_color(0, 0, 0)
    self.ln(4)

  def footer(self):
    self.set_y(-15)
    self.set_font("Helvetica", size=9)
    self.cell(0, 10, f"Seite {self.page_no()} von {{nb}}", align="C")

  def account_info(self, insights: PortfolioInsights):
    self.set_fill_color(238, 238, 238)
    self.set_font("Helvetica", style="B", size=14)
    self.cell(0, 9, "Kontoinformationen", fill=True, new_x="LMARGIN", new_y="NEXT")
    self.set_font("Helvetica", size=10)
    period = f"{_swiss_date(insights.period_start)} - {_swiss_date(insights.period_end)}"
    for line in (
        f"Kontoinhaber: {insights.account_holder}",
        f"IBAN: {insights.account_number}",
        f"Periode: {period}"):
      self.cell(0, 6, _latin1(line), fill=True, new_x="LMARGIN", new_y="NEXT")
    self.ln(6)

  def _row(self, cells, bold: bool = False):
    self.set_font("Helvetica", style="B" if bold else "", size=9)
    for idx, (width, text) in enumerate(zip(COLUMN_WIDTHS, cells)):
      self.cell(width, ROW_HEIGHT, _latin1(text), border="B", align="L" if idx < 2 else "R")
    self.ln(ROW_HEIGHT)

  def dividend_tables(self, insights: PortfolioInsights):
    self.set_font("Helvetica", style="B", size=14)
    self.cell(0, 9, _latin1("Dividenden-Übersicht"), new_x="LMARGIN", new_y="NEXT")

    with_dividends = sorted(
      (s for s in insights.securities if s.total_dividends > 0),
      key=lambda s: s.currency)
    for currency, group in groupby(with_dividends, key=lambda s: s.currency):
      securities = sorted(group, key=lambda s: s.total_dividends, reverse=True)
      self.ln(4)
      self.set_font("Helvetica", style="B", size=12)
      self.cell(0, 8, f"Dividenden in {currency}", new_x="LMARGIN", new_y="NEXT")
      self._row(("ISIN", "Wertpapier", "Div. Anz.", "Dividenden", "Taxen"), bold=True)
      for security in securities:
        self._row((
          security.isin,
          security.security_name,
          str(security.dividend_transactions),
          _money(security.total_dividends),
          _money(security.total_taxes),
        ))
      total_dividends = sum(s.total_dividends for s in securities)
      total_taxes = sum(s.total_taxes for s in securities)
      self._row((f"Gesamt {currency}", "", "", _money(total_dividends), _money(total_taxes)), bold=True)


def render_report(insights: PortfolioInsights, output_path) -> Path:
  pdf = InsightsReport(format="A4")
  pdf.set_margins(20, 20, 20)
  pdf.set_auto_page_break(auto=True, margin=20)
  pdf.alias_nb_pages()
  pdf.add_page()
  pdf.account_info(insights)
  pdf.dividend_tables(insights)
  pdf.output(str(output_path))
  logger.info(f"PDF report created: {output_path}")
  return Path(output_path)
