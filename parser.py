"""
Shift-sheet parser — entry points and CLI.

Usage:
    python parser.py <excel_file> [--type GAS] [--department <name>]
                     [--roster <roster.json>] [--output <output.json>]

Loads a scheduling workbook, extracts one shift per operative per date
from the GAS worksheet, and writes the shifts and the itemised failures as
a single JSON file.  With --roster, raw operative names are also matched
against a JSON list of known operatives.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter

from detection.errors import GasParseError, UnsupportedImportTypeError
from detection.settings import ParserSettings
from dto.output import ParseResult
from dto.region import SheetGrid
from dto.roster import OperativeEntry
from extractors.gas import GasSheetExtractor
from extractors.sheet import read_sheet_grid
from extractors.workbook import WorkbookSource, load_workbook_bytes, select_worksheet
from utils.matching import resolve_operatives

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Main pipeline
# -------------------------------------------------------------------


def parse_gas_sheet(
    grid: SheetGrid,
    settings: Optional[ParserSettings] = None,
    department: str = "",
) -> ParseResult:
    """
    Parse an already-read worksheet grid.

    Sheet-level failures (too few divider rows) come back as a single
    failure record with no shifts.
    """
    extractor = GasSheetExtractor(settings=settings, department=department)
    try:
        result = extractor.extract(grid)
    except GasParseError as exc:
        logger.warning("Sheet '%s' not parsed: %s", grid.sheet_name, exc)
        return ParseResult.failed(exc.to_failure())

    logger.info(
        "  -> %d shift(s), %d failure(s) on '%s'",
        len(result.parsed),
        len(result.failures),
        grid.sheet_name,
    )
    return result


def parse_gas_workbook(
    source: WorkbookSource,
    settings: Optional[ParserSettings] = None,
    department: str = "",
) -> ParseResult:
    """
    Parse a GAS workbook buffer into shifts and failures.

    Only an unreadable buffer raises (``WorkbookLoadError``); every other
    problem is reported in ``ParseResult.failures``.
    """
    settings = settings or ParserSettings()
    workbook = load_workbook_bytes(source)
    try:
        ws = select_worksheet(workbook, settings.preferred_sheet_name)
        logger.info("Processing sheet: %s", ws.title)
        grid = read_sheet_grid(ws)
    except GasParseError as exc:
        logger.warning("Workbook not parsed: %s", exc)
        return ParseResult.failed(exc.to_failure())
    finally:
        workbook.close()

    return parse_gas_sheet(grid, settings=settings, department=department)


def parse_workbook_by_type(
    source: WorkbookSource,
    import_type: str,
    settings: Optional[ParserSettings] = None,
    department: str = "",
) -> ParseResult:
    """Route a workbook to the parser for its import type."""
    if import_type.upper() == "GAS":
        return parse_gas_workbook(source, settings=settings, department=department)
    raise UnsupportedImportTypeError(
        f"No parser in this package for import type {import_type!r}"
    )


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def _load_roster(path: str) -> List[OperativeEntry]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return TypeAdapter(List[OperativeEntry]).validate_python(raw)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Parse a scheduling workbook into shift records (JSON).",
    )
    parser.add_argument(
        "excel_file",
        help="Path to the .xlsx file to parse",
    )
    parser.add_argument(
        "-t",
        "--type",
        default="GAS",
        help="Import type of the workbook (default: GAS)",
    )
    parser.add_argument(
        "-d",
        "--department",
        default="",
        help="Department recorded on every parsed shift",
    )
    parser.add_argument(
        "-r",
        "--roster",
        default=None,
        help="JSON list of operatives to match raw names against",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON file path (default: <input_name>_shifts.json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-block detail",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    excel_path = args.excel_file
    if not os.path.isfile(excel_path):
        logger.error("File not found: %s", excel_path)
        return 1

    output_path = args.output or f"{Path(excel_path).stem}_shifts.json"

    logger.info("Loading workbook: %s", excel_path)
    with open(excel_path, "rb") as f:
        buffer = f.read()

    try:
        result = parse_workbook_by_type(
            buffer, args.type, department=args.department
        )
    except UnsupportedImportTypeError as exc:
        logger.error("%s", exc)
        return 2

    if args.roster:
        resolved = resolve_operatives(result, _load_roster(args.roster))
        json_str = resolved.model_dump_json(indent=2, exclude_none=True)
        failures = resolved.failures
    else:
        json_str = result.model_dump_json(indent=2, exclude_none=True)
        failures = result.failures

    with open(output_path, "w", encoding="utf-8") as f:
        f.write(json_str)

    for failure in failures:
        logger.warning("  %s", failure.describe())
    logger.info("Output written to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
