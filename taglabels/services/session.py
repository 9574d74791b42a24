from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import requests
from PIL import Image

from ..catalog.loader import CatalogCache
from ..csvio.reader import CsvSource, describe_source, read_cutting_list
from ..errors import CsvParseError, RenderError
from ..labels.render import render_label_image
from ..labels.view import build_label_view
from ..logging.error_log import ErrorLogBuffer
from ..models.catalog_entry import CatalogStatus
from ..models.config_models import AppConfig
from ..models.error_record import PARSE_ERROR, RENDER_ERROR, ErrorRecord
from ..models.export_state import ExportResult, ExportState
from ..models.label_view import LabelView
from ..models.row_record import RowRecord
from ..pdf.exporter import PdfExporter

"""Session state controller.

TagSession holds the ingested rows, the catalog cache and the export state,
and exposes exactly two mutating operations: ingest() and export().

- ingest() replaces the previous rows wholesale, or leaves them untouched on failure
- export() runs one sequential rasterize -> append page -> publish progress loop
- a second export() while one is running is rejected (no-op)
- the export state always returns to idle (in_progress=False, 0%)
"""

__all__ = [
    "TagSession",
]

logger = logging.getLogger(__name__)

ProgressListener = Callable[[int], Any]


class TagSession:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        error_log: ErrorLogBuffer | None = None,
        http_session: requests.Session | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self.catalog = CatalogCache(
            self.config.catalog.url,
            timeout=self.config.catalog.timeout_seconds,
            session=http_session,
            error_log=self.error_log,
        )
        self.exporter = PdfExporter(self.config.pdf)
        self.export_state = ExportState()
        self.source_name: str | None = None
        self._rows: tuple[RowRecord, ...] = ()
        self._listeners: list[ProgressListener] = []

    @property
    def rows(self) -> tuple[RowRecord, ...]:
        return self._rows

    def start(self) -> CatalogStatus:
        """Load the catalog (at most once per session)."""
        return self.catalog.load()

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def remove_progress_listener(self, listener: ProgressListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def ingest(self, source: CsvSource) -> tuple[RowRecord, ...]:
        """Parse a cutting list and make it the session's row sequence.

        Raises:
            CsvParseError: the file could not be read; previous rows are kept
        """
        name = describe_source(source)
        try:
            rows = read_cutting_list(source, self.config.columns)
        except CsvParseError as e:
            self.error_log.append(ErrorRecord.create(name, -1, PARSE_ERROR, str(e)))
            raise

        self._rows = tuple(rows)
        self.source_name = name
        logger.info(f"{name} uploaded successfully: {len(self._rows)} rows")
        return self._rows

    def label_views(self) -> list[LabelView]:
        entries = self.catalog.entries
        return [build_label_view(row, entries, self.config.label) for row in self._rows]

    def rasterize(self, view: LabelView) -> Image.Image:
        return render_label_image(view, self.config.label)

    def _publish(self, percent: int) -> None:
        self.export_state.percent_complete = percent
        for listener in list(self._listeners):
            listener(percent)

    def export(self, output_path: Path) -> ExportResult | None:
        """Render every row to the PDF at output_path.

        Returns None when the request is rejected (export already running or
        nothing ingested).

        Raises:
            RenderError: a label failed or the file could not be written; no
                file is left at output_path
        """
        if self.export_state.in_progress:
            logger.warning("export already in progress; request ignored")
            return None
        if not self._rows:
            logger.warning("no rows to export")
            return None

        self.export_state.in_progress = True
        self.export_state.percent_complete = 0
        start_time = datetime.now(UTC)
        try:
            self.start()
            views = self.label_views()
            data = self.exporter.export_all(views, self.rasterize, self._publish)
            self._write(output_path, data)
        except RenderError as e:
            self.error_log.append(
                ErrorRecord.create(self.source_name or "<rows>", e.row, RENDER_ERROR, str(e))
            )
            raise
        finally:
            self.export_state.reset()

        end_time = datetime.now(UTC)
        matched = sum(1 for v in views if v.matched)
        return ExportResult(
            output_path=output_path,
            page_count=len(views),
            matched_labels=matched,
            unmatched_labels=len(views) - matched,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
        )

    @staticmethod
    def _write(output_path: Path, data: bytes) -> None:
        # 途中まで書かれた PDF を残さない (.part に書いてから置換)
        part = output_path.with_name(output_path.name + ".part")
        try:
            part.write_bytes(data)
            part.replace(output_path)
        except OSError as e:
            part.unlink(missing_ok=True)
            raise RenderError(f"cannot write {output_path}: {e}") from e
