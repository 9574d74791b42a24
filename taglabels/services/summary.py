from __future__ import annotations

from ..models.export_state import ExportResult

"""Summary line rendering service.

Format:
SUMMARY rows={rows} pages={pages} matched={matched} unmatched={unmatched}
output={file} elapsed_sec={elapsed}
"""

__all__ = [
    "render_summary_line",
]


def _format_seconds(value: float) -> str:
    # Handle very small numbers and integer values appropriately
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(total_rows: int, result: ExportResult | None) -> str:
    """Render the SUMMARY line for one run.

    result is None when nothing was exported (zero rows); pages and label
    counts are then all zero and output is "-".

    Examples:
        >>> render_summary_line(0, None)
        'SUMMARY rows=0 pages=0 matched=0 unmatched=0 output=- elapsed_sec=0'
    """
    if result is None:
        return f"SUMMARY rows={total_rows} pages=0 matched=0 unmatched=0 output=- elapsed_sec=0"

    return (
        f"SUMMARY rows={total_rows} "
        f"pages={result.page_count} "
        f"matched={result.matched_labels} "
        f"unmatched={result.unmatched_labels} "
        f"output={result.output_path.name} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
