from __future__ import annotations

import csv
import logging
import warnings
from pathlib import Path
from typing import IO, Any

import pandas as pd

from ..errors import CsvParseError
from ..models.config_models import CsvColumns
from ..models.row_record import RowRecord

"""Cutting list CSV reader.

- 1行目をヘッダ行として扱い、2行目以降をデータ行
- values stay raw strings: no NA conversion, no trimming, no type inference
- missing column / empty cell -> "" (a data line is never dropped)
- completely empty lines are skipped
- lines wider than the header are truncated (WARN), shorter ones padded with ""
"""

__all__ = [
    "CsvParseError",
    "CsvSource",
    "describe_source",
    "read_csv_file",
    "to_row_records",
    "read_cutting_list",
]

logger = logging.getLogger(__name__)

CsvSource = str | Path | IO[bytes] | IO[str]


def describe_source(source: CsvSource) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    return str(getattr(source, "name", "<stream>"))


def read_csv_file(source: CsvSource) -> pd.DataFrame:
    """Read a CSV into a DataFrame of raw strings.

    Parameters
    ----------
    source: CSV ファイルパス or 読み込み可能なストリーム

    Raises
    ------
    CsvParseError: file missing/unreadable, undecodable, or not tokenizable
    """
    name = describe_source(source)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            # index_col=False: 余分なフィールドは pandas 側で切り捨て (ParserWarning)
            df = pd.read_csv(
                source,
                dtype=object,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
                index_col=False,
                encoding="utf-8-sig",
                engine="python",
            )
    except pd.errors.EmptyDataError:
        # 空ファイル: ヘッダすら無い -> 0 行扱い
        logger.debug(f"csv: {name} is empty")
        return pd.DataFrame()
    except (OSError, ValueError, csv.Error) as e:
        raise CsvParseError(f"Error parsing CSV: {e}") from e

    if any(issubclass(w.category, pd.errors.ParserWarning) for w in caught):
        logger.warning(f"csv: {name} has line(s) with more fields than the header; extra fields ignored")
    # short lines are padded with None
    return df.fillna("")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def to_row_records(df: pd.DataFrame, columns: CsvColumns | None = None) -> list[RowRecord]:
    """Extract the four logical fields of every data row, in file order."""
    columns = columns or CsvColumns()
    present = set(str(c) for c in df.columns)
    missing = [c for c in columns.names if c not in present]
    if missing and len(df.columns) > 0:
        logger.warning(f"csv: missing columns {missing}; their values default to empty")

    def column_values(col: str) -> list[str]:
        if col not in present:
            return [""] * len(df)
        return [_cell(v) for v in df[col].tolist()]

    style_numbers = column_values(columns.style_number)
    sizes = column_values(columns.size)
    colors = column_values(columns.color)
    order_ids = column_values(columns.order_id)

    return [
        RowRecord(
            style_number=style_numbers[i],
            size=sizes[i],
            color=colors[i],
            order_id=order_ids[i],
            line_number=i + 1,
        )
        for i in range(len(df))
    ]


def read_cutting_list(source: CsvSource, columns: CsvColumns | None = None) -> list[RowRecord]:
    """Parse a cutting list CSV into RowRecords (one per non-empty data line)."""
    df = read_csv_file(source)
    rows = to_row_records(df, columns)
    logger.debug(f"csv: {describe_source(source)} -> {len(rows)} rows")
    return rows
