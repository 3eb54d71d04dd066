"""Data models shared across ingestion modules."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict


class Currency(str, Enum):
    """Currencies quoted on the SBP M2M rate sheet."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CHF = "CHF"
    AUD = "AUD"
    CAD = "CAD"
    SEK = "SEK"
    NOK = "NOK"
    DKK = "DKK"
    SAR = "SAR"
    AED = "AED"
    KWD = "KWD"
    BHD = "BHD"
    QAR = "QAR"
    OMR = "OMR"
    CNY = "CNY"
    HKD = "HKD"
    SGD = "SGD"
    THB = "THB"
    MYR = "MYR"
    INR = "INR"
    KRW = "KRW"
    NZD = "NZD"
    ZAR = "ZAR"
    BDT = "BDT"
    BRL = "BRL"
    ARS = "ARS"
    LKR = "LKR"
    TRY = "TRY"
    IDR = "IDR"
    MXN = "MXN"
    RUB = "RUB"
    GNH = "GNH"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def is_valid(cls, code: str) -> bool:
        """Return True when ``code`` is one of the whitelisted codes (case-sensitive)."""

        return any(member.value == code for member in cls)


# Spot first, then forward tenors from one week to one year.
TENOR_FIELDS: tuple[str, ...] = (
    "ready",
    "one_week",
    "two_week",
    "one_month",
    "two_month",
    "three_month",
    "four_month",
    "five_month",
    "six_month",
    "nine_month",
    "one_year",
)


@dataclass(slots=True)
class ExchangeRate:
    """Rates for a single currency taken from one rate sheet.

    Tenor values are kept as the strings printed on the sheet so no precision
    is lost to binary floating point. Only ``ready`` (spot) is filled by the
    parser; the forward tenors stay ``None``.
    """

    currency: Currency
    rate_date: date
    url: str
    ready: str | None = None
    one_week: str | None = None
    two_week: str | None = None
    one_month: str | None = None
    two_month: str | None = None
    three_month: str | None = None
    four_month: str | None = None
    five_month: str | None = None
    six_month: str | None = None
    nine_month: str | None = None
    one_year: str | None = None

    @property
    def spot_rate(self) -> str | None:
        return self.ready

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "currency": self.currency.value,
            "date": self.rate_date.isoformat(),
            "url": self.url,
        }
        for field_name in TENOR_FIELDS:
            value = getattr(self, field_name)
            if value:
                payload[field_name] = value
        return payload


ParseResult = Dict[Currency, ExchangeRate]


__all__ = ["Currency", "ExchangeRate", "ParseResult", "TENOR_FIELDS"]
