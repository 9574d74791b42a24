from __future__ import annotations

from dataclasses import dataclass

from .row_record import RowRecord

"""LabelView model: one RowRecord joined with at most one CatalogEntry.

Derived on every render, never persisted.
"""

__all__ = [
    "LabelView",
]


@dataclass(frozen=True)
class LabelView:
    """Everything a tag shows that depends on the row or the catalog match."""
    row: RowRecord
    product_name: str  # matched style_name or the configured placeholder
    sku: str  # style_number-color-size, raw values
    color: str
    size: str
    price_text: str  # formatted mrp or the fallback marker ("NA")
    order_id: str
    qr_payload: str
    matched: bool = False
