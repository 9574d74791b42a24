from __future__ import annotations

import logging
from typing import Any

import requests

from ..errors import NetworkError
from ..logging.error_log import ErrorLogBuffer
from ..models.catalog_entry import CatalogEntry, CatalogStatus
from ..models.error_record import NETWORK_ERROR, ErrorRecord

"""Remote product catalog loader.

The catalog is fetched with exactly one HTTP GET per session (no pagination,
no retry, no timeout unless configured) and kept in memory as an immutable
snapshot. Join lookups in the label renderer read that snapshot only.
"""

__all__ = [
    "NetworkError",
    "load_catalog",
    "parse_catalog",
    "CatalogCache",
]

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def _to_price(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def parse_catalog(payload: Any) -> list[CatalogEntry]:
    """Decode the catalog JSON payload into CatalogEntry objects.

    Objects without an integer style_code are skipped; missing style_name
    becomes "" and a missing/non-numeric mrp becomes None.

    Raises:
        NetworkError: payload is not a JSON array
    """
    if not isinstance(payload, list):
        raise NetworkError(f"catalog payload must be a JSON array, got {type(payload).__name__}")

    entries: list[CatalogEntry] = []
    skipped = 0
    for item in payload:
        if not isinstance(item, dict):
            skipped += 1
            continue
        code = _to_int(item.get("style_code"))
        if code is None:
            skipped += 1
            continue
        name = item.get("style_name")
        entries.append(
            CatalogEntry(
                style_code=code,
                style_name=name if isinstance(name, str) else "",
                mrp=_to_price(item.get("mrp")),
            )
        )
    if skipped:
        logger.debug(f"catalog: skipped {skipped} item(s) without a usable style_code")
    return entries


def load_catalog(
    url: str,
    *,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> list[CatalogEntry]:
    """Fetch and decode the full product list.

    Raises:
        NetworkError: connection failure, HTTP status >= 400, non-JSON body
            or a body that is not a JSON array
    """
    http = session or requests.Session()
    try:
        resp = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise NetworkError(f"catalog fetch failed: {e}", url=url) from e
    if resp.status_code >= 400:
        raise NetworkError(f"catalog fetch failed: HTTP {resp.status_code}", url=url)
    try:
        payload = resp.json()
    except ValueError as e:
        raise NetworkError(f"catalog response is not JSON: {e}", url=url) from e
    return parse_catalog(payload)


class CatalogCache:
    """Session-scoped catalog with lifecycle uninitialized → loading → ready|failed.

    load() performs the fetch at most once. A failure does not propagate:
    the cache ends up FAILED with no entries, so downstream joins never match
    and labels fall back to the placeholder name and price marker.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session
        self._error_log = error_log
        self._entries: tuple[CatalogEntry, ...] = ()
        self._status = CatalogStatus.UNINITIALIZED
        self.error: str | None = None

    @property
    def status(self) -> CatalogStatus:
        return self._status

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """Read-only snapshot of the fetched entries (empty unless READY)."""
        return self._entries

    def load(self) -> CatalogStatus:
        if self._status is not CatalogStatus.UNINITIALIZED:
            return self._status

        self._status = CatalogStatus.LOADING
        logger.info(f"Loading product catalog from: {self.url}")
        try:
            entries = load_catalog(self.url, timeout=self.timeout, session=self._session)
        except NetworkError as e:
            self.error = str(e)
            self._status = CatalogStatus.FAILED
            logger.warning(f"catalog: {e}; labels will use fallback name and price")
            if self._error_log is not None:
                self._error_log.append(ErrorRecord.create(self.url, -1, NETWORK_ERROR, str(e)))
            return self._status

        self._entries = tuple(entries)
        self._status = CatalogStatus.READY
        logger.info(f"catalog: {len(self._entries)} products loaded")
        return self._status
