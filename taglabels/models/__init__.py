"""Domain models for the cut-piece tag label generator.

This package contains the dataclasses passed between the catalog loader,
the CSV ingestor, the label renderer and the PDF exporter.
"""

from .catalog_entry import CatalogEntry, CatalogStatus
from .config_models import AppConfig, CatalogConfig, CsvColumns, LabelSettings, PdfSettings
from .error_record import ErrorRecord
from .export_state import ExportResult, ExportState
from .label_view import LabelView
from .row_record import RowRecord

__all__ = [
    # Configuration models
    "AppConfig",
    "CatalogConfig",
    "CsvColumns",
    "LabelSettings",
    "PdfSettings",
    # Processing models
    "CatalogEntry",
    "CatalogStatus",
    "RowRecord",
    "LabelView",
    "ExportState",
    "ExportResult",
    "ErrorRecord",
]
