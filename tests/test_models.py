from __future__ import annotations

from datetime import date

import pytest

from sbp_fx.ingestion.models import TENOR_FIELDS, Currency, ExchangeRate


def test_currency_whitelist() -> None:
    assert len(Currency) == 34
    assert Currency.is_valid("USD")
    assert Currency.is_valid("GNH")
    assert not Currency.is_valid("XXX")
    assert not Currency.is_valid("usd")
    assert not Currency.is_valid("USDT")


def test_currency_behaves_like_its_code() -> None:
    assert str(Currency.EUR) == "EUR"
    assert Currency("EUR") is Currency.EUR
    assert Currency.EUR == "EUR"
    with pytest.raises(ValueError):
        Currency("XXX")


def test_exchange_rate_as_dict_omits_empty_tenors() -> None:
    rate = ExchangeRate(
        currency=Currency.USD,
        rate_date=date(2025, 8, 27),
        url="https://example.test/27-Aug-25.pdf",
        ready="281.5000",
    )

    assert rate.as_dict() == {
        "currency": "USD",
        "date": "2025-08-27",
        "url": "https://example.test/27-Aug-25.pdf",
        "ready": "281.5000",
    }


def test_exchange_rate_has_eleven_tenors() -> None:
    rate = ExchangeRate(currency=Currency.GBP, rate_date=date(2025, 1, 1), url="u")

    assert TENOR_FIELDS[0] == "ready"
    assert len(TENOR_FIELDS) == 11
    assert all(getattr(rate, field) is None for field in TENOR_FIELDS)
    assert rate.spot_rate is None

    rate.one_month = "357.10"
    assert rate.as_dict()["one_month"] == "357.10"
