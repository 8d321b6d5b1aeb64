"""
Worksheet reader — converts an openpyxl worksheet into a ``SheetGrid``.

Responsibilities:
  1. Resolve each cell's display text and fill colour.  A cell without
     its own fill takes the fill of its merge anchor, then its row style,
     then its column style (a divider drawn by filling the whole row is
     only stored as a row style).
  2. Compute the used range from text-bearing cells and filled cells
     separately, then take their union, so textless coloured divider rows
     are never clipped.
  3. Materialise every meaningful cell of that range into the grid.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Tuple

from openpyxl.cell.cell import Cell, MergedCell
from openpyxl.styles.fills import Fill
from openpyxl.utils import column_index_from_string, get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from detection.errors import SheetAppearsEmptyError
from dto.cell_data import CellData
from dto.coordinate import UsedBounds
from dto.region import SheetGrid, build_grid

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coord(col: int, row: int) -> str:
    """Return an A1-style coordinate from 1-based col/row indices."""
    return f"{get_column_letter(col)}{row}"


def fill_color(fill: Optional[Fill]) -> Optional[str]:
    """Best-effort colour code for a cell fill, ``None`` when unfilled."""
    if fill is None or not getattr(fill, "fill_type", None):
        return None
    color_obj = getattr(fill, "fgColor", None)
    if color_obj is None:
        return None
    if color_obj.type == "rgb" and isinstance(color_obj.rgb, str):
        return color_obj.rgb.upper()
    if color_obj.type == "theme":
        return f"THEME:{color_obj.theme}"
    if color_obj.type == "indexed":
        idx = color_obj.indexed
        # 64 is the system foreground placeholder, not a colour
        if idx is not None and idx != 64:
            return f"INDEXED:{idx}"
    return None


def cell_text(value: Any) -> str:
    """Display text for a native cell value, trimmed."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def build_merge_map(ws: Worksheet) -> Dict[Tuple[int, int], Tuple[int, int]]:
    """Return ``{(row, col): (anchor_row, anchor_col)}`` for merged cells."""
    merge_map: Dict[Tuple[int, int], Tuple[int, int]] = {}
    for mr in ws.merged_cells.ranges:
        anchor = (mr.min_row, mr.min_col)
        for r in range(mr.min_row, mr.max_row + 1):
            for c in range(mr.min_col, mr.max_col + 1):
                if (r, c) != anchor:
                    merge_map[(r, c)] = anchor
    return merge_map


def row_style_fills(ws: Worksheet) -> Dict[int, str]:
    """Return ``{row: colour}`` for rows formatted with a whole-row fill."""
    fills: Dict[int, str] = {}
    for row, dim in ws.row_dimensions.items():
        color = fill_color(dim.fill)
        if color is not None:
            fills[row] = color
    return fills


def column_style_fills(ws: Worksheet) -> Dict[int, str]:
    """Return ``{col: colour}`` for columns formatted with a whole-column fill."""
    fills: Dict[int, str] = {}
    for key, dim in ws.column_dimensions.items():
        color = fill_color(dim.fill)
        if color is None:
            continue
        low = dim.min or column_index_from_string(key)
        high = dim.max or low
        for col in range(low, high + 1):
            fills[col] = color
    return fills


def read_cell(
    cell: Cell,
    ws: Worksheet,
    merge_map: Dict[Tuple[int, int], Tuple[int, int]],
    row_fills: Optional[Dict[int, str]] = None,
    col_fills: Optional[Dict[int, str]] = None,
) -> CellData:
    row, col = cell.row, cell.column
    color = fill_color(cell.fill)

    anchor = merge_map.get((row, col))
    if color is None and anchor is not None:
        color = fill_color(ws.cell(row=anchor[0], column=anchor[1]).fill)
    if color is None:
        color = (row_fills or {}).get(row) or (col_fills or {}).get(col)

    value = None if isinstance(cell, MergedCell) else cell.value
    return CellData(
        row=row,
        col=col,
        text=cell_text(value),
        value=value,
        fill_color=color,
    )


# ---------------------------------------------------------------------------
# Used range
# ---------------------------------------------------------------------------


class _BoundsTracker:
    def __init__(self) -> None:
        self.min_row = self.min_col = None
        self.max_row = self.max_col = 0

    def add(self, row: int, col: int) -> None:
        self.min_row = row if self.min_row is None else min(self.min_row, row)
        self.min_col = col if self.min_col is None else min(self.min_col, col)
        self.max_row = max(self.max_row, row)
        self.max_col = max(self.max_col, col)

    def bounds(self) -> Optional[UsedBounds]:
        if self.min_row is None:
            return None
        return UsedBounds(
            start_row=self.min_row,
            end_row=self.max_row,
            start_col=self.min_col,
            end_col=self.max_col,
        )


def find_used_bounds(cells: List[CellData]) -> Optional[UsedBounds]:
    """
    Return the rectangle holding every text-bearing or filled cell, or
    ``None`` if the sheet has neither.
    """
    text_bounds = _BoundsTracker()
    fill_bounds = _BoundsTracker()
    for cd in cells:
        if not cd.is_blank:
            text_bounds.add(cd.row, cd.col)
        if cd.fill_color is not None:
            fill_bounds.add(cd.row, cd.col)

    by_text, by_fill = text_bounds.bounds(), fill_bounds.bounds()
    if by_text is None or by_fill is None:
        return by_text or by_fill
    return by_text.union(by_fill)


def _row_style_cells(
    cells: List[CellData], row_fills: Dict[int, str]
) -> List[CellData]:
    """
    Filled blank cells for row-styled rows that hold no stored cells.

    Spread over the column range of the cells already read; a row style
    alone nominally covers every column up to XFD.
    """
    bounds = find_used_bounds(cells)
    if bounds is None or not row_fills:
        return []
    seen = {(cd.row, cd.col) for cd in cells}
    return [
        CellData(row=row, col=col, fill_color=color)
        for row, color in sorted(row_fills.items())
        for col in range(bounds.start_col, bounds.end_col + 1)
        if (row, col) not in seen
    ]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def read_sheet_grid(ws: Worksheet) -> SheetGrid:
    """
    Read *ws* into a ``SheetGrid``.

    Raises ``SheetAppearsEmptyError`` when the sheet holds no text and no
    fill anywhere.
    """
    merge_map = build_merge_map(ws)
    row_fills = row_style_fills(ws)
    col_fills = column_style_fills(ws)
    cells: List[CellData] = []
    for row in ws.iter_rows():
        for cell in row:
            cd = read_cell(cell, ws, merge_map, row_fills, col_fills)
            if not cd.is_blank or cd.fill_color is not None:
                cells.append(cd)
    cells.extend(_row_style_cells(cells, row_fills))

    bounds = find_used_bounds(cells)
    if bounds is None:
        raise SheetAppearsEmptyError(sheet_name=ws.title)

    logger.info(
        "  Used range on '%s': %s:%s",
        ws.title,
        _coord(bounds.start_col, bounds.start_row),
        _coord(bounds.end_col, bounds.end_row),
    )
    return build_grid(ws.title, cells, bounds)
