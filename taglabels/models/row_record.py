from __future__ import annotations

from dataclasses import dataclass

"""RowRecord model for the cut-piece tag label generator.

RowRecord represents one data line of the uploaded cutting list CSV, i.e.
one physical cut piece that needs a tag.
"""

__all__ = [
    "RowRecord",
]


@dataclass(frozen=True)
class RowRecord:
    """One parsed CSV line with the four extracted fields.

    Field values are kept exactly as read (no trimming, no case change);
    a missing or empty cell is an empty string.
    """
    style_number: str
    size: str
    color: str
    order_id: str
    line_number: int = 0  # 1-based data row index (header excluded)
