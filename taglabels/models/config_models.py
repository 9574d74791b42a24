from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the cut-piece tag label generator.

These are the typed views of config/tags.yml produced by
taglabels.config.loader. Every field has a default so that the tool runs
without any config file at all.
"""

DEFAULT_CATALOG_URL = "https://inventorybackend-m1z8.onrender.com/api/product"


@dataclass(frozen=True)
class CatalogConfig:
    """Remote product catalog endpoint.

    timeout_seconds=None means requests waits indefinitely (no timeout).
    """
    url: str = DEFAULT_CATALOG_URL
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class CsvColumns:
    """Header names of the four logical columns in the cutting list."""
    style_number: str = "Style Number"
    size: str = "Size"
    color: str = "Color"
    order_id: str = "(Do not touch) Order Id"

    @property
    def names(self) -> list[str]:
        return [self.style_number, self.size, self.color, self.order_id]


@dataclass(frozen=True)
class LabelSettings:
    """Boilerplate text and geometry of one tag.

    Geometry is in label units (378x189 matches the printed 100x50mm page);
    raster_scale multiplies it when the label is turned into pixels.
    """
    brand: str = "Qurvii"
    fallback_name: str = "Qurvii Product"
    price_fallback: str = "NA"
    currency_symbol: str = "₹"
    net_quantity: str = "Net Qty: 1 | Unit: 1 Pcs"
    manufacturer_lines: tuple[str, ...] = (
        "MFG & MKT BY: Qurvii, 2nd Floor, B-149",
        "Sector-6, Noida, UP, 201301",
    )
    contact: str = "Contact: support@qurvii.com"
    width: int = 378
    height: int = 189
    padding: int = 10
    font_size: int = 12
    qr_size: int = 80
    raster_scale: int = 2


@dataclass(frozen=True)
class PdfSettings:
    """Page geometry and file name of the exported document."""
    page_width_mm: float = 100.0
    page_height_mm: float = 50.0
    filename: str = "tag-labels.pdf"


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object."""
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    columns: CsvColumns = field(default_factory=CsvColumns)
    label: LabelSettings = field(default_factory=LabelSettings)
    pdf: PdfSettings = field(default_factory=PdfSettings)
