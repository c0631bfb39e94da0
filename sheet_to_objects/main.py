#!/usr/bin/env python
"""
Sheet-to-Objects – CLI entry point.

Usage:
    # Bind a workbook (or a directory of CSV sheets) against a YAML schema
    python -m sheet_to_objects.main bind <source> --schema schema.yaml [--output out.json]

    # Show the frozen column headers of a sheet
    python -m sheet_to_objects.main headers <source> [--sheet Sheet1]
"""

import argparse
import logging
import os
import sys

from sheet_to_objects.binder import SchemaBinder
from sheet_to_objects.config import load_config, setup_logging
from sheet_to_objects.errors import SheetBindingError
from sheet_to_objects.formatters import FORMATTERS, errors_to_plain
from sheet_to_objects.headers import header_names
from sheet_to_objects.schema_config import load_schema
from sheet_to_objects.sources import CsvFetcher, WorkbookFetcher

logger = logging.getLogger(__name__)


def make_fetcher(source: str, config: dict):
    """CSV directories and ``.xlsx`` files get their own fetcher."""
    if os.path.isdir(source):
        return CsvFetcher(config["frozen_rows"], config["frozen_cols"])
    return WorkbookFetcher(config["frozen_rows"], config["frozen_cols"])


def _write(text: str, output_path):
    if output_path is None:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Wrote {output_path}")


def cmd_bind(args, config) -> int:
    schema = load_schema(args.schema)
    binder = SchemaBinder(make_fetcher(args.source, config))
    try:
        result = binder.bind(schema, spreadsheet_id=args.source)
    except SheetBindingError as exc:
        logger.error(f"Bind aborted: {exc}")
        return 2

    fmt = args.format or config["output_format"]
    payload = {"data": result.destination}
    if result.errors:
        payload["errors"] = errors_to_plain(result.errors)
    _write(FORMATTERS[fmt](payload), args.output)

    if result.errors:
        logger.warning(f"{len(result.errors)} member(s) could not be bound")
        strict = args.strict or config["strict"]
        return 1 if strict else 0
    logger.info("All members bound")
    return 0


def cmd_headers(args, config) -> int:
    fetcher = make_fetcher(args.source, config)
    try:
        grid = fetcher.get_sheet(args.source, args.sheet)
    except SheetBindingError as exc:
        logger.error(str(exc))
        return 2
    for name in header_names(grid):
        print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bind spreadsheet sheets to objects using a declarative schema"
    )
    parser.add_argument("--config", default=None, help="Path to config YAML file")
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level: DEBUG, INFO, WARNING, ERROR",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ---- bind ----
    p_bind = sub.add_parser("bind", help="Bind a workbook against a YAML schema")
    p_bind.add_argument("source", help="Workbook (.xlsx) or directory of CSV sheets")
    p_bind.add_argument("--schema", required=True, help="Path to schema YAML file")
    p_bind.add_argument("--output", default=None, help="Output path (default: stdout)")
    p_bind.add_argument("--format", choices=sorted(FORMATTERS), default=None,
                        help="Output format (default from config: json)")
    p_bind.add_argument("--strict", action="store_true",
                        help="Exit with status 1 when any member fails to bind")

    # ---- headers ----
    p_hdr = sub.add_parser("headers", help="List the frozen column headers of a sheet")
    p_hdr.add_argument("source", help="Workbook (.xlsx) or directory of CSV sheets")
    p_hdr.add_argument("--sheet", default=None, help="Sheet name (default: first sheet)")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level or config["log_level"])

    if not os.path.exists(args.source):
        logger.error(f"Source '{args.source}' not found.")
        return 1
    if args.command == "bind" and not os.path.exists(args.schema):
        logger.error(f"Schema '{args.schema}' not found.")
        return 1

    if args.command == "bind":
        return cmd_bind(args, config)
    return cmd_headers(args, config)


if __name__ == "__main__":
    sys.exit(main())
