"""
SheetGrid: the in-memory view of one worksheet that every GAS stage reads.

It bundles the cells of the used range together with the bounds so the
heuristics never touch openpyxl objects directly.  Any spreadsheet source
can build one (see ``extractors/sheet.py`` for the openpyxl reader and
``build_grid`` for synthetic grids).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from pydantic import BaseModel

from dto.cell_data import CellData
from dto.coordinate import UsedBounds


class SheetGrid(BaseModel):
    """Read-only grid of cells for a single worksheet."""

    sheet_name: str

    # Bounds of the meaningful content, computed by the used-range analyzer
    bounds: UsedBounds

    # Fast (row, col) -> CellData lookup.  Cells that were never written
    # are simply missing.
    grid: Dict[Tuple[int, int], CellData] = {}

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    def cell_at(self, row: int, col: int) -> CellData:
        """Return the cell at (row, col), or a blank cell if none exists."""
        cd = self.grid.get((row, col))
        if cd is None:
            return CellData(row=row, col=col)
        return cd

    def text_at(self, row: int, col: int) -> str:
        return self.cell_at(row, col).text

    def row_cells(self, row: int) -> List[CellData]:
        """Return every cell of *row* across the used column range."""
        return [
            self.cell_at(row, col)
            for col in range(self.bounds.start_col, self.bounds.end_col + 1)
        ]

    @property
    def row_numbers(self) -> range:
        return range(self.bounds.start_row, self.bounds.end_row + 1)


def build_grid(
    sheet_name: str,
    cells: Iterable[CellData],
    bounds: UsedBounds,
) -> SheetGrid:
    """Build a ``SheetGrid`` from a flat cell list."""
    grid: Dict[Tuple[int, int], CellData] = {}
    for cd in cells:
        grid[(cd.row, cd.col)] = cd
    return SheetGrid(sheet_name=sheet_name, bounds=bounds, grid=grid)
