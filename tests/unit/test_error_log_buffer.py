from __future__ import annotations

import json
import re
from pathlib import Path

from taglabels.logging.error_log import ErrorLogBuffer
from taglabels.models.error_record import NETWORK_ERROR, PARSE_ERROR, ErrorRecord


def test_flush_without_records_creates_nothing(tmp_path: Path):
    logs = tmp_path / "logs"
    buf = ErrorLogBuffer(logs)
    assert buf.flush() is None
    assert not logs.exists()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("cutting_list.csv", -1, PARSE_ERROR, "Error parsing CSV: bad"))
    buf.append(ErrorRecord.create("https://catalog.example.test", -1, NETWORK_ERROR, "HTTP 500"))
    assert len(buf) == 2

    path = buf.flush()
    assert path is not None
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert set(first) == {"timestamp", "source", "row", "error_type", "message"}
    assert first["source"] == "cutting_list.csv"
    assert first["row"] == -1
    assert first["error_type"] == "PARSE_ERROR"
    assert first["timestamp"].endswith("Z")

    # flush 後はバッファが空
    assert len(buf) == 0
    assert buf.flush() is None


def test_second_flush_appends_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("a.csv", 1, PARSE_ERROR, "first"))
    p1 = buf.flush()
    buf.append(ErrorRecord.create("a.csv", 2, PARSE_ERROR, "second"))
    p2 = buf.flush()
    assert p1 == p2
    assert len(p1.read_text(encoding="utf-8").splitlines()) == 2


def test_non_ascii_message_is_kept(tmp_path: Path):
    rec = ErrorRecord.create("タグ.csv", 3, PARSE_ERROR, "列が足りません")
    line = rec.to_json_line()
    assert "タグ.csv" in line
    assert json.loads(line)["message"] == "列が足りません"
