from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""CatalogEntry domain model and CatalogStatus enum.

A CatalogEntry is one product record from the remote catalog, keyed by a
numeric style code. Entries are fetched once per session and never mutated.
"""

__all__ = [
    "CatalogEntry",
    "CatalogStatus",
]


class CatalogStatus(Enum):
    """Lifecycle of the session catalog cache.

    State transitions: uninitialized → loading → (ready | failed)

    - UNINITIALIZED: No fetch attempted yet
    - LOADING: Fetch in flight
    - READY: Entries fetched and decoded
    - FAILED: Fetch or decode failed, entries stay empty
    """
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class CatalogEntry:
    """Product price/name record from the catalog API."""
    style_code: int
    style_name: str
    mrp: float | None = None  # 価格未設定の場合 None
