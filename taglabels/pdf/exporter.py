from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from io import BytesIO
from typing import Any

from PIL import Image
from reportlab.lib.pagesizes import landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..errors import RenderError
from ..models.config_models import PdfSettings
from ..models.label_view import LabelView

"""Multi-page PDF assembly with reportlab.

One label per page, pages in label order. Each label is rasterized only when
its page is reached, so at most one bitmap is alive at a time, and the
integer percent progress is published after every page.
"""

__all__ = [
    "PdfExporter",
    "RenderError",
    "percent_complete",
]

logger = logging.getLogger(__name__)

Rasterizer = Callable[[LabelView], Image.Image]
ProgressCallback = Callable[[int], Any]


def percent_complete(done: int, total: int) -> int:
    """floor(done / total * 100) in integer arithmetic."""
    if total <= 0:
        return 0
    return (done * 100) // total


class PdfExporter:
    """Builds the tag PDF: landscape pages of page_width_mm x page_height_mm."""

    def __init__(self, settings: PdfSettings | None = None) -> None:
        self.settings = settings or PdfSettings()

    @property
    def page_size(self) -> tuple[float, float]:
        return landscape((self.settings.page_width_mm * mm, self.settings.page_height_mm * mm))

    def export_all(
        self,
        labels: Sequence[LabelView],
        rasterize: Rasterizer,
        on_progress: ProgressCallback | None = None,
    ) -> bytes:
        """Rasterize every label and return the assembled PDF bytes.

        Raises:
            RenderError: any label failed to rasterize or be placed; nothing
                is returned in that case
        """
        total = len(labels)
        buffer = BytesIO()
        page_w, page_h = self.page_size
        c = canvas.Canvas(buffer, pagesize=(page_w, page_h))
        c.setTitle(self.settings.filename)

        for i, label in enumerate(labels):
            try:
                image = rasterize(label)
                if i > 0:
                    c.showPage()
                c.drawImage(ImageReader(image), 0, 0, width=page_w, height=page_h)
                # listener failures abort the export like render failures
                if on_progress is not None:
                    on_progress(percent_complete(i + 1, total))
            except Exception as e:
                raise RenderError(f"label {i + 1}/{total} failed: {e}", row=i + 1) from e

        try:
            c.save()
        except Exception as e:
            raise RenderError(f"pdf assembly failed: {e}") from e
        logger.debug(f"pdf: {total} page(s) assembled")
        return buffer.getvalue()
