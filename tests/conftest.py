from __future__ import annotations

import io
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from openpyxl import Workbook
from openpyxl.styles import PatternFill

from dto.cell_data import CellData
from dto.region import SheetGrid, build_grid
from extractors.sheet import cell_text, find_used_bounds

DIVIDER_COLOR = "FF4472C4"
ADDRESS_COLOR = "FFFFF2CC"

Fills = Dict[Tuple[int, int], str]
Rows = Sequence[Sequence[Any]]


def fill_row(row: int, ncols: int, color: str = DIVIDER_COLOR) -> Fills:
    """Fill columns 1..ncols of *row* with one colour."""
    return {(row, col): color for col in range(1, ncols + 1)}


def _grid(rows: Rows, fills: Optional[Fills] = None, sheet_name: str = "UNITAS") -> SheetGrid:
    fills = fills or {}
    positions = {
        (r, c)
        for r, values in enumerate(rows, start=1)
        for c, value in enumerate(values, start=1)
        if value not in (None, "")
    } | set(fills)

    cells: List[CellData] = []
    for r, c in sorted(positions):
        value = rows[r - 1][c - 1] if r <= len(rows) and c <= len(rows[r - 1]) else None
        cells.append(
            CellData(
                row=r,
                col=c,
                text=cell_text(value),
                value=value,
                fill_color=fills.get((r, c)),
            )
        )
    return build_grid(sheet_name, cells, find_used_bounds(cells))


def _workbook_bytes(
    rows: Rows,
    fills: Optional[Fills] = None,
    sheet_name: str = "UNITAS",
) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    for r, values in enumerate(rows, start=1):
        for c, value in enumerate(values, start=1):
            if value not in (None, ""):
                ws.cell(row=r, column=c, value=value)
    for (r, c), color in (fills or {}).items():
        ws.cell(row=r, column=c).fill = PatternFill(
            fill_type="solid", start_color=color, end_color=color
        )
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_grid() -> Callable[..., SheetGrid]:
    """Build a synthetic ``SheetGrid`` from row lists and a fill map."""
    return _grid


@pytest.fixture
def make_workbook() -> Callable[..., bytes]:
    """Build an .xlsx buffer from row lists and a fill map."""
    return _workbook_bytes


@pytest.fixture
def gas_sheet() -> Tuple[List[List[Any]], Fills]:
    """
    A three-site GAS matrix over columns A-H.

    Site 1 (rows 2-5) parses, site 2 (rows 7-8) has no address, site 3
    (rows 10-12) uses native dates, a serial number and ordinal text.
    """
    rows: List[List[Any]] = [[None] * 8 for _ in range(13)]

    def put(row: int, col: int, value: Any) -> None:
        rows[row - 1][col - 1] = value

    put(2, 1, "12 High Street, Leeds LS1 4AB")
    put(2, 4, "Sam Manager")
    put(3, 6, "16/06/2025")
    put(3, 7, "17/06/2025")
    put(3, 8, "18/06/2025")
    put(4, 6, "John Smith, Jane Doe")
    put(4, 7, "AM Boiler service - John Smith")
    put(4, 8, "Job Manager")
    put(5, 6, "Tel 07700 900123")

    put(7, 1, "Yard")

    put(10, 1, "4 Park Road, York YO1 7HH E12345")
    put(11, 6, datetime(2025, 6, 16))
    put(11, 7, 45825)
    put(11, 8, "18th June 2025")
    put(12, 6, "Bob Jones")
    put(12, 5, "Bring ladders")
    put(12, 8, "PM Meter fit - Ann Lee & Tom Fox")

    fills: Fills = {}
    for divider in (1, 6, 9, 13):
        fills.update(fill_row(divider, 8))
    fills[(2, 1)] = ADDRESS_COLOR
    fills[(10, 1)] = ADDRESS_COLOR
    return rows, fills
