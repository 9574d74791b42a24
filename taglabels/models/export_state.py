from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

"""Export state and result models.

ExportState is the mutable in-memory indicator shown while a PDF export runs.
ExportResult aggregates one finished export for the SUMMARY line.
"""


@dataclass
class ExportState:
    """Progress indicator for the export run (in-memory only).

    Mutated only by the session while an export runs; reset to idle
    (in_progress=False, percent_complete=0) on completion or failure.
    """
    in_progress: bool = False
    percent_complete: int = 0  # 0..100

    def reset(self) -> None:
        self.in_progress = False
        self.percent_complete = 0


@dataclass(frozen=True)
class ExportResult:
    """Aggregated result of one successful export."""
    output_path: Path  # 出力 PDF
    page_count: int  # == 入力行数
    matched_labels: int  # カタログ一致数
    unmatched_labels: int  # フォールバック表示数
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
