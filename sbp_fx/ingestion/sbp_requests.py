"""requests-based downloader for SBP M2M rate sheet PDFs."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import requests

from sbp_fx.exceptions import RateSheetNotFoundError
from sbp_fx.utils.dates import SBP_BASE_URL, rate_sheet_path, rate_sheet_url
from sbp_fx.utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_TIMEOUT = 30
USER_AGENT = "sbp-fx-rate-sheet-client/0.1"
HTTP_STATUS_OK = 200


class SBPRequestsClient:
    """Fetch the daily rate sheet published under ``base_url``.

    Network errors raised by ``requests`` are not wrapped; a response with a
    status other than 200 raises :class:`RateSheetNotFoundError`.
    """

    def __init__(
        self,
        *,
        base_url: str = SBP_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.setdefault("User-Agent", USER_AGENT)

    def url(self, rate_date: date) -> str:
        return rate_sheet_url(rate_date, self.base_url)

    def fetch_pdf(self, rate_date: date) -> bytes:
        """Return the raw PDF bytes for ``rate_date``."""

        response = self._get(rate_date, stream=False)
        LOGGER.info("Fetched SBP rate sheet %s (%s bytes)", response.url, len(response.content))
        return response.content

    def download(self, rate_date: date, destination: str | Path) -> Path:
        """Stream the PDF for ``rate_date`` into ``destination``."""

        response = self._get(rate_date, stream=True)
        destination_path = Path(destination)
        destination_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(destination_path, "wb") as handle:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        handle.write(chunk)
        except Exception:
            destination_path.unlink(missing_ok=True)
            raise
        finally:
            response.close()
        LOGGER.info("Saved SBP rate sheet → %s", destination_path)
        return destination_path

    def _get(self, rate_date: date, *, stream: bool) -> requests.Response:
        path = rate_sheet_path(rate_date)
        response = self.session.get(self.url(rate_date), timeout=self.timeout, stream=stream)
        if response.status_code != HTTP_STATUS_OK:
            response.close()
            raise RateSheetNotFoundError(response.status_code, path)
        return response

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "SBPRequestsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["DEFAULT_TIMEOUT", "HTTP_STATUS_OK", "SBPRequestsClient", "USER_AGENT"]
