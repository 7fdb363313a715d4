"""
Application Entry Point - Command Line Interface

This module serves as the composition root for the ezvrates command. It
configures logging, wires the rates service and dispatches subcommands.

Usage:
  ezvrates rate EUR --date 2020-06-28
  ezvrates currencies
  ezvrates avg USD --no-cache

Files that USE this module:
- ezvrates.__main__ (python -m ezvrates)
- pyproject.toml console script 'ezvrates'
- tests.test_app (unit tests)

Files that this module USES:
- ezvrates.shared.logging_conf (setup_logging for logging configuration)
- ezvrates.config (settings for logging options)
- ezvrates.application.rates_service (ExchangeRatesService)
- ezvrates.shared.validators (parse_date for --date, normalize_currency_code)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import argparse  # Command line parsing
import logging  # Standard library for logging messages and errors
import sys  # Standard streams for output
from typing import List, Optional  # Type hints

from ezvrates import __version__
from ezvrates.application.rates_service import ExchangeRatesService
from ezvrates.config import settings
from ezvrates.domain.errors import DomainError
from ezvrates.shared.logging_conf import setup_logging
from ezvrates.shared.validators import normalize_currency_code, parse_date

log = logging.getLogger(__name__)


def _date_arg(value: str):
    try:
        return parse_date(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ezvrates",
        description="Swiss customs exchange rates against CHF.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    rate = sub.add_parser("rate", help="rate of one currency on a day")
    rate.add_argument("currency", help="3-letter code, e.g. EUR")
    rate.add_argument("--date", type=_date_arg, default=None, help="YYYY-MM-DD, defaults to today")
    rate.add_argument("--no-cache", action="store_true", help="bypass the cache")

    currencies = sub.add_parser("currencies", help="list published currencies and base units")
    currencies.add_argument("--no-cache", action="store_true", help="bypass the cache")

    avg = sub.add_parser("avg", help="current monthly average rate of one currency")
    avg.add_argument("currency", help="3-letter code, e.g. EUR")
    avg.add_argument("--no-cache", action="store_true", help="bypass the cache")

    return parser


def run(args: argparse.Namespace, service: ExchangeRatesService) -> None:
    """Execute one parsed command and print its result to stdout."""
    use_cache = not args.no_cache
    if args.command == "rate":
        record = service.get_rate_record(args.currency, args.date, use_cache=use_cache)
        print(f"{record.base_unit} {record.currency} = {record.rate} CHF")
    elif args.command == "currencies":
        for code, base_unit in service.list_currencies(use_cache=use_cache).items():
            print(f"{code} {base_unit}")
    elif args.command == "avg":
        rate = service.get_monthly_average_rate(args.currency, use_cache=use_cache)
        print(f"{normalize_currency_code(args.currency)} {rate} CHF")


def main(argv: Optional[List[str]] = None, service: Optional[ExchangeRatesService] = None) -> int:
    """
    Parse arguments, set up logging and run the command.

    Returns:
        Process exit code (0 on success, 1 on lookup errors)
    """
    args = build_parser().parse_args(argv)

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    if service is None:
        service = ExchangeRatesService()

    try:
        run(args, service)
    except DomainError as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
