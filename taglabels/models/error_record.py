from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

"""Error log entry for failed catalog fetches, CSV reads and tag renders.

One ErrorRecord becomes one JSON line in logs/errors-*.log. row is -1 when
the failure is not tied to a single cutting list row (catalog fetch,
unreadable file, PDF write).
"""

__all__ = [
    "ErrorRecord",
    "NETWORK_ERROR",
    "PARSE_ERROR",
    "RENDER_ERROR",
]

NETWORK_ERROR = "NETWORK_ERROR"
PARSE_ERROR = "PARSE_ERROR"
RENDER_ERROR = "RENDER_ERROR"


def _utc_now_iso() -> str:
    # 例: 2024-05-01T09:30:00.123456Z
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: str
    source: str  # CSV ファイル名 or カタログ URL
    row: int  # 1-based, -1 = 行に紐付かない
    error_type: str  # NETWORK_ERROR | PARSE_ERROR | RENDER_ERROR
    message: str

    @staticmethod
    def create(source: str, row: int, error_type: str, message: str) -> ErrorRecord:
        """Stamp a new record with the current UTC time."""
        return ErrorRecord(_utc_now_iso(), source, row, error_type, message)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_json_line(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)
