import argparse
import logging
import sys
from pathlib import Path

from .analyze import analyze_structure
from .errors import StatementError
from .extractor import extract_statement
from .insights import generate_insights, save_insights
from .layout import load_layout
from .report import render_report
from .serialization import load_statement, save_statement

logger = logging.getLogger("swissquoteanalyzer")


def _extract(args) -> int:
  layout = load_layout(args.layout) if args.layout else None
  statement = extract_statement(args.input, layout)
  save_statement(statement, args.output, indent=not args.compact)
  print(f"Extracted {len(statement.transactions)} transactions to {args.output}")
  return 0


def _insights(args) -> int:
  statement = load_statement(args.input)
  insights = generate_insights(statement)
  render_report(insights, args.output)
  if args.json:
    save_insights(insights, args.json)

  start = insights.period_start.strftime("%d.%m.%Y") if insights.period_start else "-"
  end = insights.period_end.strftime("%d.%m.%Y") if insights.period_end else "-"
  with_dividends = sum(1 for s in insights.securities if s.total_dividends > 0)
  print("\nSummary:")
  print(f"  Account Holder: {insights.account_holder}")
  print(f"  IBAN: {insights.account_number}")
  print(f"  Period: {start} - {end}")
  print(f"  Securities analyzed: {len(insights.securities)}")
  print("\nDividends:")
  print(f"  Securities with dividends: {with_dividends}")
  print(f"  Total dividends: {insights.total_dividends:,.2f}")
  print("\nFees & Taxes:")
  print(f"  Total commissions: {insights.total_commissions:,.2f}")
  print(f"  Total taxes: {insights.total_taxes:,.2f}")
  print("\nTransaction types:")
  for tx_type, count in sorted(insights.transactions_by_type.items(), key=lambda kv: kv[1], reverse=True):
    print(f"  {tx_type}: {count}")
  print(f"\nPDF report created: {args.output}")
  return 0


def _analyze(args) -> int:
  return 0 if analyze_structure(args.input, limit=args.limit) else 1


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    prog="swissquoteanalyzer",
    description="Swissquote account statement analyzer: extract statements from PDF to JSON")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
  commands = parser.add_subparsers(dest="command", required=True)

  extract = commands.add_parser("extract", help="Extract a statement PDF to JSON")
  extract.add_argument("-i", "--input", type=Path, required=True, help="Path to the input PDF file")
  extract.add_argument("-o", "--output", type=Path, required=True, help="Path to the output JSON file")
  extract.add_argument("--layout", type=Path, help="JSON file overriding column bands")
  extract.add_argument("--compact", action="store_true", help="Write JSON without indentation")
  extract.set_defaults(handler=_extract)

  insights = commands.add_parser("insights", help="Generate insights from extracted transaction data")
  insights.add_argument("-i", "--input", type=Path, required=True,
                        help="Path to the input JSON file (from extract command)")
  insights.add_argument("-o", "--output", type=Path, required=True, help="Path to the output PDF file")
  insights.add_argument("--json", type=Path, help="Also write the insights as JSON")
  insights.set_defaults(handler=_insights)

  analyze = commands.add_parser("analyze", help="Print page text and word positions of a PDF")
  analyze.add_argument("-i", "--input", type=Path, required=True, help="Path to the input PDF file")
  analyze.add_argument("--limit", type=int, default=100, help="Words to list per page")
  analyze.set_defaults(handler=_analyze)

  return parser


def main(argv=None) -> int:
  args = build_parser().parse_args(argv)
  logging.basicConfig(
    level=logging.DEBUG if args.verbose else logging.INFO,
    format="%(levelname)s | %(message)s")

  try:
    return args.handler(args)
  except StatementError as e:
    logger.error(str(e))
    return 1


if __name__ == '__main__':
  sys.exit(main())
