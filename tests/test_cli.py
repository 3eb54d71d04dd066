from __future__ import annotations

import json
import runpy
from datetime import date
from pathlib import Path

import pytest

from sbp_fx.exceptions import NoExchangeRatesError, RateSheetNotFoundError
from sbp_fx.ingestion.models import Currency, ExchangeRate
from sbp_fx import cli as script


class _FakeFx:
    instances: list["_FakeFx"] = []
    missing: set[date] = set()
    broken: set[date] = set()

    def __init__(self) -> None:
        self.downloads: list[tuple[Path, date]] = []
        _FakeFx.instances.append(self)

    def __enter__(self) -> "_FakeFx":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def url(self, rate_date: date) -> str:
        return f"https://sheets.test/{rate_date.isoformat()}.pdf"

    def exchange_rates(self, rate_date: date):
        if rate_date in self.missing:
            raise RateSheetNotFoundError(404, f"/{rate_date.isoformat()}.pdf")
        if rate_date in self.broken:
            raise NoExchangeRatesError(self.url(rate_date))
        return {
            currency: ExchangeRate(
                currency=currency, rate_date=rate_date, url=self.url(rate_date), ready=ready
            )
            for currency, ready in ((Currency.USD, "281.5"), (Currency.EUR, "305.1"))
        }

    def download_rate_sheet(self, destination: Path, rate_date: date) -> Path:
        if rate_date in self.missing:
            raise RateSheetNotFoundError(404, f"/{rate_date.isoformat()}.pdf")
        self.downloads.append((destination, rate_date))
        return destination


@pytest.fixture(autouse=True)
def _fake_facade(monkeypatch):
    _FakeFx.instances = []
    _FakeFx.missing = set()
    _FakeFx.broken = set()
    monkeypatch.setattr(script, "SBPFx", _FakeFx)


def _json_lines(output: str) -> list[dict]:
    return [json.loads(line) for line in output.splitlines()]


def test_main_prints_rates_as_json_lines(capsys) -> None:
    assert script.main(["--date", "2025-08-27"]) == 0

    rows = _json_lines(capsys.readouterr().out)
    assert [row["currency"] for row in rows] == ["EUR", "USD"]
    assert rows[1] == {
        "currency": "USD",
        "date": "2025-08-27",
        "url": "https://sheets.test/2025-08-27.pdf",
        "ready": "281.5",
    }


def test_main_filters_currencies(capsys) -> None:
    assert script.main(["--date", "2025-08-27", "--currency", "USD"]) == 0

    rows = _json_lines(capsys.readouterr().out)
    assert [row["currency"] for row in rows] == ["USD"]


def test_main_skips_missing_days_in_range(capsys) -> None:
    _FakeFx.missing = {date(2025, 8, 30)}

    assert script.main(["--from", "2025-08-29", "--to", "2025-08-31"]) == 0

    rows = _json_lines(capsys.readouterr().out)
    assert sorted({row["date"] for row in rows}) == ["2025-08-29", "2025-08-31"]


def test_main_fails_for_single_missing_day() -> None:
    _FakeFx.missing = {date(2030, 12, 25)}

    assert script.main(["--date", "2030-12-25"]) == 1


def test_main_skips_missing_day_for_one_day_range() -> None:
    _FakeFx.missing = {date(2025, 8, 30)}

    assert script.main(["--from", "2025-08-30"]) == 0
    assert script.main(["--from", "2025-08-30", "--to", "2025-08-30"]) == 0


def test_main_fails_on_parse_errors() -> None:
    _FakeFx.broken = {date(2025, 8, 27)}

    assert script.main(["--from", "2025-08-26", "--to", "2025-08-28"]) == 1


def test_main_downloads_into_directory(tmp_path: Path) -> None:
    assert script.main(["--date", "2025-08-27", "--download", str(tmp_path)]) == 0

    (fx,) = _FakeFx.instances
    assert fx.downloads == [(tmp_path / "27-Aug-25.pdf", date(2025, 8, 27))]


def test_main_url_only(capsys) -> None:
    assert script.main(["--from", "2025-08-27", "--to", "2025-08-28", "--url-only"]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "https://sheets.test/2025-08-27.pdf",
        "https://sheets.test/2025-08-28.pdf",
    ]


def test_parse_args_rejects_mixed_date_options() -> None:
    with pytest.raises(SystemExit):
        script.parse_args(["--date", "2025-08-27", "--from", "2025-08-01"])
    with pytest.raises(SystemExit):
        script.parse_args(["--to", "2025-08-01"])


def test_script_module_invokes_main(monkeypatch) -> None:
    called = {"value": False}

    def _fake_main(argv=None) -> int:
        called["value"] = True
        return 0

    monkeypatch.setattr(script, "main", _fake_main)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("sbp_fx.scripts.fetch_sbp_rates", run_name="__main__")

    assert excinfo.value.code == 0
    assert called["value"] is True
