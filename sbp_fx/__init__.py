"""Public interface for the sbp_fx package."""

from __future__ import annotations

from datetime import date, datetime
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Optional

import requests

from sbp_fx.exceptions import (
    ExchangeRateNotFoundError,
    HeadersNotFoundError,
    NoExchangeRatesError,
    PDFExtractionError,
    RateSheetNotFoundError,
    RateSheetParseError,
    SBPFxError,
)
from sbp_fx.ingestion.models import Currency, ExchangeRate, ParseResult
from sbp_fx.ingestion.sbp_pdf import SBPPDFParser
from sbp_fx.ingestion.sbp_requests import DEFAULT_TIMEOUT, SBPRequestsClient
from sbp_fx.utils.dates import SBP_BASE_URL, resolve_rate_date

__all__ = [
    "__version__",
    "Currency",
    "ExchangeRate",
    "ExchangeRateNotFoundError",
    "HeadersNotFoundError",
    "NoExchangeRatesError",
    "ParseResult",
    "PDFExtractionError",
    "RateSheetNotFoundError",
    "RateSheetParseError",
    "SBPFx",
    "SBPFxError",
    "SBP_BASE_URL",
]

try:
    __version__ = importlib_metadata.version("sbp-fx")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

RateDate = str | date | datetime | None


class SBPFx:
    """Package facade tying the rate sheet downloader to the PDF parser."""

    __slots__ = ("client", "parser")

    __version__ = __version__

    def __init__(
        self,
        *,
        base_url: str = SBP_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.client = SBPRequestsClient(base_url=base_url, timeout=timeout, session=session)
        self.parser = SBPPDFParser()

    def url(self, rate_date: RateDate = None) -> str:
        """Return the rate sheet URL for ``rate_date`` (today in UTC by default)."""

        return self.client.url(resolve_rate_date(rate_date))

    def exchange_rates(self, rate_date: RateDate = None) -> ParseResult:
        """Download and parse the rate sheet for ``rate_date``."""

        day = resolve_rate_date(rate_date)
        content = self.client.fetch_pdf(day)
        return self.parser.parse(content, day, self.client.url(day))

    def exchange_rate(self, currency: Currency | str, rate_date: RateDate = None) -> ExchangeRate:
        """Return the record for ``currency`` from the rate sheet for ``rate_date``.

        ``currency`` must be one of the whitelisted codes; a ``ValueError`` is
        raised otherwise before any request is made.
        """

        code = Currency(currency)
        rates = self.exchange_rates(rate_date)
        try:
            return rates[code]
        except KeyError:
            raise ExchangeRateNotFoundError(code.value) from None

    def download_rate_sheet(self, destination: str | Path, rate_date: RateDate = None) -> Path:
        """Write the raw rate sheet PDF for ``rate_date`` to ``destination``."""

        return self.client.download(resolve_rate_date(rate_date), destination)

    def parse_pdf(
        self, content: bytes, rate_date: RateDate = None, url: str | None = None
    ) -> ParseResult:
        """Parse rate sheet bytes obtained elsewhere (e.g. a saved download)."""

        day = resolve_rate_date(rate_date)
        return self.parser.parse(content, day, url or self.client.url(day))

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "SBPFx":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
