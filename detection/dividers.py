"""
Divider-row detection.

A divider row marks the boundary between two site blocks.  It carries no
data, only colour.  Heuristic rules (all must hold, measured over the used
column range):
  - No cell in the row has text
  - At least ``divider_fill_ratio`` of the columns have a non-white fill
  - At least ``divider_color_ratio`` of the filled cells share the first
    fill colour seen on the row

Runs of consecutive divider rows collapse to their first row.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from detection.colors import color_consistency, fill_coverage
from detection.settings import ParserSettings
from dto.region import SheetGrid

logger = logging.getLogger(__name__)


def is_divider_row(
    grid: SheetGrid, row: int, settings: Optional[ParserSettings] = None
) -> bool:
    settings = settings or ParserSettings()
    cells = grid.row_cells(row)

    if any(not cd.is_blank for cd in cells):
        return False

    colors = [cd.fill_color for cd in cells]
    if fill_coverage(colors) < settings.divider_fill_ratio:
        return False
    if color_consistency(colors) < settings.divider_color_ratio:
        return False
    return True


def collapse_consecutive(rows: Tuple[int, ...]) -> Tuple[int, ...]:
    """Keep only the first row of every run of adjacent row numbers."""
    return tuple(
        row for idx, row in enumerate(rows) if idx == 0 or row != rows[idx - 1] + 1
    )


def find_divider_rows(
    grid: SheetGrid, settings: Optional[ParserSettings] = None
) -> Tuple[int, ...]:
    """Return divider row numbers in ascending order, runs collapsed."""
    settings = settings or ParserSettings()
    raw = tuple(row for row in grid.row_numbers if is_divider_row(grid, row, settings))
    dividers = collapse_consecutive(raw)
    logger.debug(
        "Divider rows on '%s': %s (%d before collapsing)",
        grid.sheet_name,
        list(dividers),
        len(raw),
    )
    return dividers
