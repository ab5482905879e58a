"""
Swissquote Statement Analyzer

Reconstructs the transaction ledger of a Swissquote account statement PDF
from positioned words and derives portfolio insights from it.
"""

from .extractor import extract_statement, parse_pages, read_pages
from .insights import generate_insights
from .layout import DEFAULT_LAYOUT, StatementLayout, load_layout
from .models import Page, Statement, Transaction, TransactionType, Word
from .serialization import load_statement, save_statement

__version__ = "1.0.0"

__all__ = [
  "extract_statement",
  "parse_pages",
  "read_pages",
  "generate_insights",
  "load_statement",
  "save_statement",
  "load_layout",
  "DEFAULT_LAYOUT",
  "StatementLayout",
  "Page",
  "Statement",
  "Transaction",
  "TransactionType",
  "Word",
]
