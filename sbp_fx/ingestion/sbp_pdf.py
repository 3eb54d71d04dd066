"""Parse SBP M2M rate sheet PDFs into ``ExchangeRate`` records."""

from __future__ import annotations

import io
import math
import re
from datetime import date
from typing import Sequence

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from sbp_fx.exceptions import HeadersNotFoundError, NoExchangeRatesError, PDFExtractionError
from sbp_fx.ingestion.models import Currency, ExchangeRate, ParseResult
from sbp_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

CURRENCY_MARKER = "CURRENCY"
READY_MARKER = "READY"
# First line of the explanatory notes printed under the rate table.
FOOTER_MARKER = "EXCHANGE RATES FOR MARK"

_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def _is_positive_decimal(value: str) -> bool:
    if not _DECIMAL_PATTERN.fullmatch(value):
        return False
    number = float(value)
    return math.isfinite(number) and number > 0


def _is_footer(line: str) -> bool:
    return FOOTER_MARKER in line.upper()


class SBPPDFParser:
    """Convert the SBP rate sheet into ``{Currency: ExchangeRate}`` mappings.

    The extracted text lists the currency column and the READY column as two
    separate runs of lines. Both runs are collected independently and paired
    by position, so the i-th currency receives the i-th rate.
    """

    def parse(self, content: bytes, rate_date: date, url: str) -> ParseResult:
        text = self.extract_text(content)
        return self.parse_text(text, rate_date, url)

    def extract_text(self, content: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(content))
        except PdfReadError as exc:
            raise PDFExtractionError(f"failed to create PDF reader: {exc}") from exc

        # The page tree is resolved lazily, so a broken /Pages only fails here.
        try:
            page_count = len(reader.pages)
        except Exception as exc:
            raise PDFExtractionError(f"failed to read PDF page tree: {exc}") from exc

        texts: list[str] = []
        for index in range(page_count):
            try:
                text = reader.pages[index].extract_text()
            except Exception as exc:
                LOGGER.warning("Skipping page %s of rate sheet (%s)", index + 1, exc)
                continue
            if text:
                texts.append(text)
        return "\n".join(texts)

    def parse_text(self, text: str, rate_date: date, url: str) -> ParseResult:
        lines = text.splitlines()
        currency_index, ready_index = self._locate_headers(lines)
        currencies = self._collect_currencies(lines, currency_index + 1)
        rates = self._collect_rates(lines, ready_index + 1)
        return self._pair(currencies, rates, rate_date, url)

    @staticmethod
    def _locate_headers(lines: Sequence[str]) -> tuple[int, int]:
        currency_index: int | None = None
        ready_index: int | None = None
        for index, raw in enumerate(lines):
            line = raw.strip()
            if currency_index is None and line == CURRENCY_MARKER:
                currency_index = index
            if ready_index is None and line == READY_MARKER:
                ready_index = index
            if currency_index is not None and ready_index is not None:
                return currency_index, ready_index

        missing = tuple(
            marker
            for marker, index in ((CURRENCY_MARKER, currency_index), (READY_MARKER, ready_index))
            if index is None
        )
        raise HeadersNotFoundError(missing)

    @staticmethod
    def _collect_currencies(lines: Sequence[str], start: int) -> list[str]:
        currencies: list[str] = []
        for raw in lines[start:]:
            line = raw.strip()
            if not line or line == READY_MARKER:
                continue
            if _is_footer(line):
                break
            if len(line) == 3 and Currency.is_valid(line):
                currencies.append(line)
        return currencies

    @staticmethod
    def _collect_rates(lines: Sequence[str], start: int) -> list[str]:
        rates: list[str] = []
        for raw in lines[start:]:
            line = raw.strip()
            if not line:
                continue
            if _is_footer(line):
                break
            if _is_positive_decimal(line):
                rates.append(line)
        return rates

    @staticmethod
    def _pair(
        currencies: Sequence[str], rates: Sequence[str], rate_date: date, url: str
    ) -> ParseResult:
        # Forward tenor columns follow READY, so surplus rates are expected;
        # surplus currencies mean a column lost entries and pairs may be shifted.
        if len(currencies) > len(rates):
            LOGGER.warning(
                "Collected %s currencies but only %s READY rates from %s; pairing the first %s",
                len(currencies),
                len(rates),
                url,
                len(rates),
            )
        elif len(rates) > len(currencies):
            LOGGER.debug(
                "Ignoring %s trailing rate values from %s", len(rates) - len(currencies), url
            )

        result: ParseResult = {}
        for code, rate in zip(currencies, rates):
            if not _is_positive_decimal(rate):
                continue
            currency = Currency(code)
            result[currency] = ExchangeRate(
                currency=currency,
                rate_date=rate_date,
                url=url,
                ready=rate,
            )

        if not result:
            raise NoExchangeRatesError(url)
        return result


__all__ = ["CURRENCY_MARKER", "FOOTER_MARKER", "READY_MARKER", "SBPPDFParser"]
