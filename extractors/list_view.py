"""
List-view GAS sheets.

Some teams export the schedule as a flat list instead of the colour-coded
matrix.  Such a sheet is recognised by its first non-empty row, which must
contain the headers ``date``, ``user`` (or ``operative``), ``task`` and
``address``; every following row is one entry.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from pydantic import BaseModel

from detection.dates import parse_cell_date, to_iso_date
from detection.names import split_operative_names
from detection.settings import ParserSettings
from dto.output import ParseResult
from dto.region import SheetGrid
from dto.shifts import FailureCode, ImportFailure, RawParsedShift, ShiftSource
from utils.text import normalize_whitespace

logger = logging.getLogger(__name__)


class ListViewColumns(BaseModel):
    header_row: int
    date: int
    user: int
    task: int
    address: int

    model_config = {"frozen": True}


def find_list_header(grid: SheetGrid) -> Optional[ListViewColumns]:
    """Return the list-view column layout, or ``None`` for a matrix sheet."""
    for row in grid.row_numbers:
        headers: Dict[str, int] = {}
        for cd in grid.row_cells(row):
            if cd.text:
                headers.setdefault(cd.text.strip().lower(), cd.col)
        if not headers:
            continue

        user_col = headers.get("user", headers.get("operative"))
        required = ("date", "task", "address")
        if user_col is None or not all(key in headers for key in required):
            return None
        return ListViewColumns(
            header_row=row,
            date=headers["date"],
            user=user_col,
            task=headers["task"],
            address=headers["address"],
        )
    return None


def parse_list_view(
    grid: SheetGrid,
    columns: ListViewColumns,
    settings: Optional[ParserSettings] = None,
    department: str = "",
) -> ParseResult:
    settings = settings or ParserSettings()
    sheet_name = grid.sheet_name
    parsed = []
    failures = []

    for row in range(columns.header_row + 1, grid.bounds.end_row + 1):
        if all(cd.is_blank for cd in grid.row_cells(row)):
            continue

        date = parse_cell_date(grid.cell_at(row, columns.date))
        user_cell = grid.cell_at(row, columns.user)
        task = normalize_whitespace(grid.text_at(row, columns.task))
        address = normalize_whitespace(grid.text_at(row, columns.address))
        names = split_operative_names(user_cell.text, settings)

        if date is None or not names or not task or not address:
            if not (user_cell.text or task or address):
                continue
            failures.append(
                ImportFailure(
                    reason="Missing required data (Date, User, Task, or Address).",
                    code=FailureCode.MISSING_REQUIRED_DATA,
                    site_address=address or None,
                    operative_name_raw=user_cell.text or None,
                    sheet_name=sheet_name,
                    cell_ref=grid.cell_at(row, grid.bounds.start_col).coordinate,
                )
            )
            continue

        for name in names:
            parsed.append(
                RawParsedShift(
                    site_address=address,
                    shift_date=to_iso_date(date),
                    operative_name_raw=name,
                    task=task,
                    department=department,
                    source=ShiftSource(
                        sheet_name=sheet_name, cell_ref=user_cell.coordinate
                    ),
                    contract=sheet_name,
                )
            )

    logger.info(
        "  List view on '%s': %d shift(s), %d failure(s)",
        sheet_name,
        len(parsed),
        len(failures),
    )
    return ParseResult(parsed=parsed, failures=failures)
