"""Exception hierarchy raised by the sbp_fx package."""

from __future__ import annotations


class SBPFxError(Exception):
    """Base class for every error raised by sbp_fx."""


class RateSheetParseError(SBPFxError, ValueError):
    """The rate sheet could not be turned into exchange rate records."""


class PDFExtractionError(RateSheetParseError):
    """The document bytes could not be opened as a PDF."""


class HeadersNotFoundError(RateSheetParseError):
    """The CURRENCY and/or READY section markers are absent from the text."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(
            f"could not find CURRENCY or READY headers (missing: {', '.join(missing)})"
        )


class NoExchangeRatesError(RateSheetParseError):
    """Both markers were found but no currency/rate pair survived filtering."""

    def __init__(self, url: str | None = None) -> None:
        self.url = url
        suffix = f" for {url}" if url else ""
        super().__init__(f"no exchange rates found in PDF{suffix}")


class RateSheetNotFoundError(SBPFxError):
    """The rate sheet endpoint answered with a non-success status."""

    def __init__(self, status: int, path: str) -> None:
        self.status = status
        self.path = path
        super().__init__(f"PDF not found: status {status} for path: {path}")


class ExchangeRateNotFoundError(SBPFxError, LookupError):
    """A parsed rate sheet does not list the requested currency."""

    def __init__(self, currency: str) -> None:
        self.currency = currency
        super().__init__(f"exchange rate for {currency} not found")


__all__ = [
    "ExchangeRateNotFoundError",
    "HeadersNotFoundError",
    "NoExchangeRatesError",
    "PDFExtractionError",
    "RateSheetNotFoundError",
    "RateSheetParseError",
    "SBPFxError",
]
