from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Run error log (JSON Lines).

Catalog, parse and render failures are collected during a run and written
once at the end to logs/errors-YYYYMMDD-HHMMSS.log (UTC stamp). A run without
failures leaves no file and no logs/ directory behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
STAMP_FORMAT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects ErrorRecords in memory; flush() appends them to the run's file."""

    def __init__(self, logs_dir: Path = DEFAULT_LOGS_DIR) -> None:
        self.logs_dir = logs_dir
        self._pending: list[ErrorRecord] = []
        self._target: Path | None = None

    @property
    def file_path(self) -> Path:
        # 1 実行 1 ファイル: 最初の flush で名前を確定
        if self._target is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            name = f"errors-{datetime.now(UTC).strftime(STAMP_FORMAT)}.log"
            self._target = self.logs_dir / name
        return self._target

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._pending)

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Write pending records; None (and nothing on disk) when there are none."""
        if not self._pending:
            return None
        target = self.file_path
        lines = "".join(f"{r.to_json_line()}\n" for r in self._pending)
        with target.open("a", encoding="utf-8") as fh:
            fh.write(lines)
        self._pending.clear()
        return target
