"""Date helpers for addressing SBP rate sheets."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterator

from sbp_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

SBP_BASE_URL = "https://www.sbp.org.pk/ecodata/rates/m2m"

# English abbreviations regardless of the process locale (``%b`` is locale dependent).
_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def resolve_rate_date(value: str | date | datetime | None = None) -> date:
    """Normalise ``value`` to a calendar day in UTC.

    Strings must use ``YYYY-MM-DD``. An unparseable string is logged and
    replaced with today's UTC date rather than raising, so URL helpers can
    always produce an address.
    """

    if value is None:
        return today_utc()
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        LOGGER.warning(
            "Invalid date format %r, using default date. Expected format: YYYY-MM-DD", value
        )
        return today_utc()


def month_abbreviation(day: date) -> str:
    return _MONTH_ABBREVIATIONS[day.month - 1]


def rate_sheet_filename(day: date) -> str:
    """Return ``DD-Mon-YY.pdf`` for ``day``."""

    return f"{day.day:02d}-{month_abbreviation(day)}-{day.year % 100:02d}.pdf"


def rate_sheet_path(day: date) -> str:
    """Return the URL path of the rate sheet published for ``day``."""

    return f"/{day.year}/{month_abbreviation(day)}/{rate_sheet_filename(day)}"


def rate_sheet_url(day: date, base_url: str = SBP_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}{rate_sheet_path(day)}"


def iter_days(start: str | date, end: str | date) -> Iterator[date]:
    """Yield every day in the inclusive window ``start``..``end``."""

    start_date = start if isinstance(start, date) else datetime.strptime(start, "%Y-%m-%d").date()
    end_date = end if isinstance(end, date) else datetime.strptime(end, "%Y-%m-%d").date()
    if start_date > end_date:
        raise ValueError("start date must not be after end date")

    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


__all__ = [
    "SBP_BASE_URL",
    "iter_days",
    "month_abbreviation",
    "rate_sheet_filename",
    "rate_sheet_path",
    "rate_sheet_url",
    "resolve_rate_date",
    "today_utc",
]
