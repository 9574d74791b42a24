#!/usr/bin/env python3
"""Synthetic cutting list generator for manual load checks.

Generates a CSV in the layout the tag generator expects:
- Row 1: header (Style Number, Size, Color, (Do not touch) Order Id)
- Row 2+: one cut piece per row

A share of the style numbers can be made non-numeric so that they never match
the catalog (labels fall back to the placeholder name and "NA" price), and
blank lines can be sprinkled in to exercise the blank-line skipping.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

COLUMNS = ["Style Number", "Size", "Color", "(Do not touch) Order Id"]
SIZES = ["XS", "S", "M", "L", "XL", "XXL"]
COLORS = ["Red", "Black", "navy blue", "White", "Olive", "mustard yellow"]


def generate_cutting_list(
    rows: int,
    style_codes: list[int],
    unmatched_ratio: float = 0.1,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate a DataFrame of cut pieces.

    Args:
        rows: Number of data rows
        style_codes: Numeric style codes to draw matched rows from
        unmatched_ratio: Share of rows whose style number is not numeric
        seed: Random seed for reproducible data
    """
    rng = np.random.default_rng(seed)

    styles = rng.choice(style_codes, rows).astype(str).tolist()
    unmatched = rng.random(rows) < unmatched_ratio
    styles = [f"QRV{s}" if u else s for s, u in zip(styles, unmatched, strict=True)]

    return pd.DataFrame(
        {
            COLUMNS[0]: styles,
            COLUMNS[1]: rng.choice(SIZES, rows).tolist(),
            COLUMNS[2]: rng.choice(COLORS, rows).tolist(),
            COLUMNS[3]: [f"ORD{100000 + i}" for i in range(rows)],
        }
    )


def write_csv(df: pd.DataFrame, path: Path, blank_every: int = 0) -> None:
    """Write df as CSV, optionally inserting an empty line every N data rows."""
    text = df.to_csv(index=False, lineterminator="\n")
    if blank_every > 0:
        header, *lines = text.splitlines()
        out = [header]
        for i, line in enumerate(lines, start=1):
            out.append(line)
            if i % blank_every == 0:
                out.append("")
        text = "\n".join(out) + "\n"
    path.write_text(text, encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Generate a synthetic cutting list CSV")
    p.add_argument("output", help="Target CSV path")
    p.add_argument("--rows", type=int, default=500, help="Number of data rows (default: 500)")
    p.add_argument(
        "--styles",
        default="1001,1002,1045,1100",
        help="Comma separated numeric style codes (default: 1001,1002,1045,1100)",
    )
    p.add_argument("--unmatched-ratio", type=float, default=0.1, help="Share of non-numeric styles")
    p.add_argument("--blank-every", type=int, default=0, help="Insert a blank line every N rows")
    p.add_argument("--seed", type=int, default=42)
    args = p.parse_args(argv)

    if args.rows < 0:
        print("--rows must be >= 0", file=sys.stderr)
        return 1
    try:
        codes = [int(s) for s in args.styles.split(",") if s.strip()]
    except ValueError:
        print(f"invalid --styles: {args.styles}", file=sys.stderr)
        return 1
    if not codes:
        print("--styles must name at least one code", file=sys.stderr)
        return 1

    df = generate_cutting_list(args.rows, codes, args.unmatched_ratio, args.seed)
    out = Path(args.output)
    write_csv(df, out, args.blank_every)
    print(f"Wrote {len(df)} rows to {out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
