"""Fetch SBP M2M rate sheets and print the READY rates as JSON lines."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from sbp_fx import SBPFx
from sbp_fx.exceptions import RateSheetNotFoundError, SBPFxError
from sbp_fx.ingestion.models import Currency
from sbp_fx.utils.dates import iter_days, rate_sheet_filename, resolve_rate_date
from sbp_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--date",
        dest="rate_date",
        help="Rate sheet date (YYYY-MM-DD); defaults to today in UTC",
    )
    parser.add_argument(
        "--from",
        dest="start",
        help="Start of an inclusive date range (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--to",
        dest="end",
        help="End of an inclusive date range (YYYY-MM-DD); defaults to --from",
    )
    parser.add_argument(
        "--currency",
        dest="currencies",
        action="append",
        choices=[currency.value for currency in Currency],
        help="Only print these currencies (repeatable)",
    )
    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--download",
        dest="download_dir",
        help="Save the rate sheet PDF(s) into this directory instead of parsing",
    )
    mode_group.add_argument(
        "--url-only",
        dest="url_only",
        action="store_true",
        help="Print the rate sheet URL(s) without downloading",
    )
    args = parser.parse_args(argv)
    if args.rate_date and args.start:
        parser.error("--date cannot be combined with --from/--to")
    if args.end and not args.start:
        parser.error("--to requires --from")
    return args


def _resolve_days(args: argparse.Namespace) -> list[date]:
    if args.start:
        return list(iter_days(args.start, args.end or args.start))
    return [resolve_rate_date(args.rate_date)]


def _print_rates(fx: SBPFx, day: date, currencies: Iterable[str] | None) -> None:
    rates = fx.exchange_rates(day)
    wanted = set(currencies) if currencies else None
    for currency, rate in sorted(rates.items(), key=lambda item: item[0].value):
        if wanted is not None and currency.value not in wanted:
            continue
        print(json.dumps(rate.as_dict()))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    days = _resolve_days(args)
    range_mode = bool(args.start)

    with SBPFx() as fx:
        for day in days:
            if args.url_only:
                print(fx.url(day))
                continue
            try:
                if args.download_dir:
                    fx.download_rate_sheet(Path(args.download_dir) / rate_sheet_filename(day), day)
                else:
                    _print_rates(fx, day, args.currencies)
            except RateSheetNotFoundError as exc:
                if not range_mode:
                    LOGGER.error("%s", exc)
                    return 1
                LOGGER.warning("No rate sheet for %s: %s", day, exc)
            except SBPFxError as exc:
                LOGGER.error("Failed to process rate sheet for %s: %s", day, exc)
                return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
