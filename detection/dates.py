"""
Date-cell classification, date-row location and date-column mapping.

A cell is date-like if, in priority order:
  1. its native value is a date / datetime
  2. its native value is a number inside the Excel serial window
     (20000-60000), converted from the 1899-12-30 epoch; a number outside
     the window is never a date
  3. its text reads ``DD/MM/YY`` or ``DD/MM/YYYY`` (``.`` and ``-`` also
     accepted as separators), with impossible dates such as 31/02 rejected
  4. the general date parser reads its text as a date after 2000

The date row of a block is the first row with at least ``min_date_run``
date-like cells side by side.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import re
from typing import Optional, Tuple

from dateutil import parser as dateparser

from detection import constants
from detection.errors import DateRowNotFoundError, NoDateColumnsFoundError
from detection.settings import ParserSettings
from dto.cell_data import CellData
from dto.coordinate import SiteBlock
from dto.region import SheetGrid
from dto.shifts import DateColumn

logger = logging.getLogger(__name__)

_ORDINAL_SUFFIX = re.compile(r"(\d+)(st|nd|rd|th)\b", re.IGNORECASE)
_DMY = re.compile(r"^(\d{1,2})[./-](\d{1,2})[./-](\d{4}|\d{2})$")
_DIGIT = re.compile(r"\d")

_UNIX_EPOCH = dt.date(1970, 1, 1)


# ------------------------------------------------------------------
# Classifier
# ------------------------------------------------------------------


def excel_serial_to_date(serial: float) -> dt.date:
    """Convert an Excel (1900 date system) serial number to a date."""
    days = math.floor(serial - constants.EXCEL_EPOCH_OFFSET_DAYS)
    return _UNIX_EPOCH + dt.timedelta(days=days)


def to_iso_date(value: dt.date) -> str:
    return value.strftime("%Y-%m-%d")


def _parse_dmy(text: str) -> Optional[dt.date]:
    match = _DMY.match(text)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    if year < 100:
        year += 2000
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def _parse_fallback(text: str) -> Optional[dt.date]:
    # Bare weekday or month names would otherwise resolve to today.
    if not _DIGIT.search(text):
        return None
    try:
        parsed = dateparser.parse(text, dayfirst=True)
    except (ValueError, OverflowError):
        return None
    if parsed.year <= constants.MIN_FALLBACK_YEAR:
        return None
    return parsed.date()


def parse_cell_date(cell: CellData) -> Optional[dt.date]:
    """Return the date a cell represents, or ``None`` if it is not date-like."""
    value = cell.value
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not constants.SERIAL_DATE_MIN <= value <= constants.SERIAL_DATE_MAX:
            return None
        return excel_serial_to_date(value)

    text = cell.text.strip()
    if not text:
        return None
    text = _ORDINAL_SUFFIX.sub(r"\1", text)

    if _DMY.match(text):
        return _parse_dmy(text)
    return _parse_fallback(text)


def is_date_like(cell: CellData) -> bool:
    return parse_cell_date(cell) is not None


# ------------------------------------------------------------------
# Date row + date columns
# ------------------------------------------------------------------


def longest_date_run(grid: SheetGrid, row: int) -> int:
    run = best = 0
    for cd in grid.row_cells(row):
        run = run + 1 if is_date_like(cd) else 0
        best = max(best, run)
    return best


def find_date_row(
    grid: SheetGrid,
    block: SiteBlock,
    settings: Optional[ParserSettings] = None,
    site_address: Optional[str] = None,
) -> int:
    """Return the first row in *block* holding a run of date-like cells."""
    settings = settings or ParserSettings()
    for row in range(block.start_row, block.end_row + 1):
        if longest_date_run(grid, row) >= settings.min_date_run:
            return row

    bounds = grid.bounds
    raise DateRowNotFoundError(
        sheet_name=grid.sheet_name,
        site_address=site_address,
        cell_ref=(
            f"{grid.cell_at(block.start_row, bounds.start_col).coordinate}:"
            f"{grid.cell_at(block.end_row, bounds.end_col).coordinate}"
        ),
    )


def map_date_columns(
    grid: SheetGrid, date_row: int, site_address: Optional[str] = None
) -> Tuple[DateColumn, ...]:
    """Map every date-like cell on *date_row* to its ISO date."""
    columns = []
    for cd in grid.row_cells(date_row):
        parsed = parse_cell_date(cd)
        if parsed is None:
            continue
        columns.append(DateColumn(col=cd.col, iso_date=to_iso_date(parsed)))

    if not columns:
        bounds = grid.bounds
        raise NoDateColumnsFoundError(
            sheet_name=grid.sheet_name,
            site_address=site_address,
            cell_ref=(
                f"{grid.cell_at(date_row, bounds.start_col).coordinate}:"
                f"{grid.cell_at(date_row, bounds.end_col).coordinate}"
            ),
        )
    logger.debug(
        "Date row %d: %s", date_row, [(c.col, c.iso_date) for c in columns]
    )
    return tuple(columns)
