from __future__ import annotations

import pytest

from taglabels.labels.view import (
    build_label_view,
    build_sku,
    find_catalog_entry,
    format_price,
    parse_style_code,
)
from taglabels.models.catalog_entry import CatalogEntry
from taglabels.models.config_models import LabelSettings
from taglabels.models.row_record import RowRecord

CATALOG = (
    CatalogEntry(1001, "Flared Midi Dress", 1299.0),
    CatalogEntry(1045, "Ribbed Co-ord Set", 1899.5),
    CatalogEntry(1001, "Duplicate Should Not Win", 1.0),
    CatalogEntry(1100, "", 0.0),
    CatalogEntry(1200, "No Price", None),
)


def _row(style: str = "1001", size: str = "M", color: str = "Red", order_id: str = "ORD1") -> RowRecord:
    return RowRecord(style_number=style, size=size, color=color, order_id=order_id, line_number=1)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1001", 1001.0),
        (" 1001 ", 1001.0),
        ("1001.0", 1001.0),
        ("1e3", 1000.0),
        ("0042", 42.0),
        ("", None),
        ("   ", None),
        ("QRV1", None),
        ("12-A", None),
        ("1_000", None),
        ("1_001", None),
        ("inf", None),
        ("nan", None),
    ],
)
def test_parse_style_code(text, expected):
    assert parse_style_code(text) == expected


def test_join_first_match_wins():
    entry = find_catalog_entry(_row("1001"), CATALOG)
    assert entry is not None
    assert entry.style_name == "Flared Midi Dress"


def test_join_requires_exact_numeric_equality():
    assert find_catalog_entry(_row("1001.5"), CATALOG) is None
    assert find_catalog_entry(_row("1001.0"), CATALOG) is CATALOG[0]


def test_underscored_style_number_never_matches():
    catalog = (CatalogEntry(1000, "Thousand", 10.0),)
    assert find_catalog_entry(_row("1_000"), catalog) is None


def test_empty_style_number_never_matches():
    # 数値 0 の style_code が存在しても空文字とは突き合わせない
    catalog = (CatalogEntry(0, "Zero", 10.0),)
    assert find_catalog_entry(_row(""), catalog) is None
    assert find_catalog_entry(_row("0"), catalog) is catalog[0]


@pytest.mark.parametrize(
    "mrp,expected",
    [
        (1299.0, "1299"),
        (1899.5, "1899.5"),
        (0.99, "0.99"),
        (0.0, "NA"),
        (None, "NA"),
        (float("nan"), "NA"),
    ],
)
def test_format_price(mrp, expected):
    assert format_price(mrp) == expected


def test_format_price_custom_fallback():
    assert format_price(None, fallback="--") == "--"


def test_build_sku_is_verbatim_concatenation():
    assert build_sku(_row("1001", " M ", "navy blue")) == "1001-navy blue- M "
    assert build_sku(_row("", "", "")) == "--"


def test_matched_view():
    view = build_label_view(_row("1001", "M", "Red", "ORD1001"), CATALOG)
    assert view.matched is True
    assert view.product_name == "Flared Midi Dress"
    assert view.price_text == "1299"
    assert view.sku == "1001-Red-M"
    assert view.color == "Red"
    assert view.size == "M"
    assert view.order_id == "ORD1001"
    assert view.qr_payload == "ORD1001"


def test_unmatched_style_uses_fallbacks():
    view = build_label_view(_row("QRV1", "M", "Red", "ORD1001"), CATALOG)
    assert view.matched is False
    assert view.product_name == "Qurvii Product"
    assert view.price_text == "NA"
    assert view.sku == "QRV1-Red-M"
    assert view.qr_payload == "ORD1001"


def test_matched_entry_with_empty_name_and_zero_price():
    view = build_label_view(_row("1100"), CATALOG)
    assert view.matched is True
    assert view.product_name == "Qurvii Product"
    assert view.price_text == "NA"


def test_matched_entry_without_price():
    view = build_label_view(_row("1200"), CATALOG)
    assert view.product_name == "No Price"
    assert view.price_text == "NA"


def test_empty_catalog_never_matches():
    view = build_label_view(_row("1001"), ())
    assert view.matched is False
    assert view.product_name == "Qurvii Product"


def test_custom_settings_fallbacks():
    settings = LabelSettings(fallback_name="Unnamed", price_fallback="-")
    view = build_label_view(_row("9999"), CATALOG, settings)
    assert view.product_name == "Unnamed"
    assert view.price_text == "-"


def test_empty_order_id_is_kept():
    view = build_label_view(_row(order_id=""), CATALOG)
    assert view.order_id == ""
    assert view.qr_payload == ""
