from __future__ import annotations

import math
from collections.abc import Iterable

from ..models.catalog_entry import CatalogEntry
from ..models.config_models import LabelSettings
from ..models.label_view import LabelView
from ..models.row_record import RowRecord

"""Label view construction: catalog join and derived fields.

Join key: CatalogEntry.style_code == numeric value of RowRecord.style_number.
The first matching entry wins. Everything else on the tag is either the raw
row value or boilerplate from LabelSettings.
"""

__all__ = [
    "parse_style_code",
    "find_catalog_entry",
    "format_price",
    "build_sku",
    "build_label_view",
]


def parse_style_code(text: str) -> float | None:
    """Numeric interpretation of a style number, None when not a finite number.

    Surrounding whitespace is ignored; an empty string is not a number.
    Digit-group underscores ("1_000") are not accepted.
    """
    stripped = text.strip()
    if not stripped or "_" in stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def find_catalog_entry(row: RowRecord, catalog: Iterable[CatalogEntry]) -> CatalogEntry | None:
    code = parse_style_code(row.style_number)
    if code is None:
        return None
    for entry in catalog:
        if entry.style_code == code:
            return entry
    return None


def format_price(mrp: float | None, fallback: str = "NA") -> str:
    """Render an mrp for display; integral values lose their decimals.

    A missing or zero price shows the fallback marker.
    """
    if not mrp or not math.isfinite(mrp):
        return fallback
    if mrp == int(mrp):
        return str(int(mrp))
    return str(mrp)


def build_sku(row: RowRecord) -> str:
    return f"{row.style_number}-{row.color}-{row.size}"


def build_label_view(
    row: RowRecord,
    catalog: Iterable[CatalogEntry],
    settings: LabelSettings | None = None,
) -> LabelView:
    settings = settings or LabelSettings()
    entry = find_catalog_entry(row, catalog)

    if entry is not None:
        product_name = entry.style_name or settings.fallback_name
        price_text = format_price(entry.mrp, settings.price_fallback)
    else:
        product_name = settings.fallback_name
        price_text = settings.price_fallback

    return LabelView(
        row=row,
        product_name=product_name,
        sku=build_sku(row),
        color=row.color,
        size=row.size,
        price_text=price_text,
        order_id=row.order_id,
        qr_payload=row.order_id,
        matched=entry is not None,
    )
