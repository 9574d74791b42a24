from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import pytest

from taglabels.models.export_state import ExportResult
from taglabels.services.summary import render_summary_line


def _result(elapsed: float, pages: int = 3, matched: int = 2) -> ExportResult:
    now = datetime.now(UTC)
    return ExportResult(
        output_path=Path("/tmp/out/tag-labels.pdf"),
        page_count=pages,
        matched_labels=matched,
        unmatched_labels=pages - matched,
        start_time=now,
        end_time=now,
        elapsed_seconds=elapsed,
    )


def test_summary_with_result():
    line = render_summary_line(3, _result(1.25))
    assert line == "SUMMARY rows=3 pages=3 matched=2 unmatched=1 output=tag-labels.pdf elapsed_sec=1.25"


def test_summary_without_export():
    assert render_summary_line(0, None) == (
        "SUMMARY rows=0 pages=0 matched=0 unmatched=0 output=- elapsed_sec=0"
    )


@pytest.mark.parametrize(
    "elapsed,expected",
    [(0.0, "0"), (2.0, "2"), (0.5, "0.5"), (1.23456, "1.235"), (0.000123, "0.000123")],
)
def test_elapsed_formatting(elapsed, expected):
    assert render_summary_line(1, _result(elapsed, pages=1, matched=1)).endswith(f"elapsed_sec={expected}")


def test_summary_key_order():
    line = render_summary_line(5, _result(0.1, pages=5, matched=0))
    keys = [part.split("=")[0] for part in line.split()[1:]]
    assert keys == ["rows", "pages", "matched", "unmatched", "output", "elapsed_sec"]
