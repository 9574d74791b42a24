from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import load_config
from ..csvio.reader import read_csv_file
from ..errors import ConfigError, CsvParseError, RenderError
from ..labels.view import build_label_view
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import enable_debug, log_summary, setup_logging
from ..services.progress import ProgressTracker
from ..services.session import TagSession
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (overrides process env) and config
- Ingest the cutting list CSV (before the catalog fetch, so parse errors show up at once)
- Load the catalog once
- Export every row as one page of tag-labels.pdf, progress bar on TTY
- SUMMARY line, error log flush, exit code
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

SAMPLE_CSV = Path(__file__).resolve().parent.parent / "data" / "tag_sample.csv"
RENDER_FAILURE_MESSAGE = "Failed to download Tag."


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; its values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="taglabels",
        description="Render one product tag per cutting list row and export them as a PDF",
    )
    p.add_argument("csv", nargs="?", help="Sorted cutting list (.csv)")
    p.add_argument("-o", "--output", help="Output PDF file or directory (default: ./tag-labels.pdf)")
    p.add_argument("-c", "--config", help="Config file (default: config/tags.yml if present)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print CSV header & first rows with their catalog match, then exit",
    )
    p.add_argument("--write-sample", metavar="PATH", help="Write the sample CSV template to PATH")
    return p.parse_args(argv)


def _resolve_output(output: str | None, filename: str) -> Path:
    if output is None:
        return Path(filename)
    path = Path(output)
    if path.is_dir():
        return path / filename
    return path


def _write_sample(target: str) -> Path:
    path = Path(target)
    if path.is_dir():
        path = path / SAMPLE_CSV.name
    shutil.copyfile(SAMPLE_CSV, path)
    return path


def _inspect_data(session: TagSession, csv_path: Path, limit: int = 3) -> int:
    df = read_csv_file(csv_path)
    print(f"FILE: {csv_path.name} rows={len(session.rows)}")
    print(f"  cols={[str(c) for c in df.columns]}")
    print(f"  catalog={session.catalog.status.value} products={len(session.catalog.entries)}")
    for row in session.rows[:limit]:
        view = build_label_view(row, session.catalog.entries, session.config.label)
        status = "matched" if view.matched else "fallback"
        print(
            f"    row={row.line_number} sku={view.sku} order_id={view.order_id} "
            f"name={view.product_name} mrp={view.price_text} ({status})"
        )
    return EXIT_SUCCESS


def _flush_error_log(error_log: ErrorLogBuffer, logger) -> None:
    try:
        path = error_log.flush()
    except OSError as e:
        logger.warning(f"error log could not be written: {e}")
        return
    if path is not None:
        logger.info(f"error log: {path}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] が渡された場合に sys.argv が混入しないよう None のときだけ読む
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug()

    _load_env_file(Path(".env"), override=True)

    if args.write_sample:
        try:
            sample = _write_sample(args.write_sample)
        except OSError as e:
            logger.error(f"sample: {e}")
            return EXIT_FATAL
        logger.info(f"sample file written: {sample}")
        if not args.csv:
            return EXIT_SUCCESS

    if not args.csv:
        logger.error("no CSV file given")
        return EXIT_FATAL

    try:
        cfg = load_config(Path(args.config) if args.config else None)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    csv_path = Path(args.csv)
    error_log = ErrorLogBuffer()
    session = TagSession(cfg, error_log=error_log)

    try:
        rows = session.ingest(csv_path)
    except CsvParseError as e:
        logger.error(f"ingest: {e}")
        _flush_error_log(error_log, logger)
        return EXIT_FATAL

    session.start()

    if args.inspect_data:
        code = _inspect_data(session, csv_path)
        _flush_error_log(error_log, logger)
        return code

    output = _resolve_output(args.output, cfg.pdf.filename)
    with ProgressTracker(len(rows), description="Generating") as progress:
        session.add_progress_listener(progress)
        session.add_progress_listener(lambda pct: logger.debug(f"Generating: {pct}% completed"))
        try:
            result = session.export(output)
        except RenderError as e:
            logger.debug(f"render: {e}")
            logger.error(RENDER_FAILURE_MESSAGE)
            _flush_error_log(error_log, logger)
            return EXIT_FATAL

    if result is not None:
        logger.info(f"{result.page_count} tag(s) written to: {result.output_path}")

    # log_summary adds the "SUMMARY " prefix itself
    summary_line = render_summary_line(len(rows), result)
    log_summary(summary_line[len("SUMMARY "):])

    _flush_error_log(error_log, logger)
    return EXIT_SUCCESS
