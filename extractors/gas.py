"""
GasSheetExtractor — the per-sheet orchestrator for GAS workbooks.

Responsibilities:
  1. Route list-view sheets to ``extractors.list_view``; an unexpected
     error there becomes a single failure record.
  2. Find the coloured divider rows and split the sheet into site blocks.
  3. For each block: pick the site address, find the date row, map date
     columns, then scan every date column for operative cells.
  4. Collect shifts and failures.  A block that cannot be parsed adds one
     failure and never stops the remaining blocks.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel

from detection import constants
from detection.address import extract_site_address, split_e_number
from detection.dates import find_date_row, map_date_columns
from detection.dividers import find_divider_rows
from detection.errors import BlockSkippedError, InsufficientDividersError
from detection.names import (
    extract_task_and_type,
    scan_column,
    split_operative_names,
)
from detection.settings import ParserSettings
from dto.cell_data import CellData
from dto.coordinate import SiteBlock
from dto.output import ParseResult
from dto.region import SheetGrid
from dto.shifts import (
    DateColumn,
    FailureCode,
    ImportFailure,
    RawParsedShift,
    ShiftSource,
)
from extractors.list_view import (
    ListViewColumns,
    find_list_header,
    parse_list_view,
)
from grouping import segment_site_blocks

logger = logging.getLogger(__name__)


class _SiteContext(BaseModel):
    """What a block resolves to before its shifts are scanned."""

    address: str
    e_number: Optional[str] = None
    manager: str
    date_row: int
    date_columns: Tuple[DateColumn, ...]

    model_config = {"frozen": True}


# =====================================================================
# GasSheetExtractor
# =====================================================================


class GasSheetExtractor:
    """
    Extracts shifts from a single GAS worksheet grid.

    Usage::

        extractor = GasSheetExtractor(department="Gas")
        result = extractor.extract(grid)

    Raises ``InsufficientDividersError`` for a matrix sheet without at
    least two divider rows; everything narrower becomes a failure record.
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        department: str = "",
    ) -> None:
        self.settings = settings or ParserSettings()
        self.department = department

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract(self, grid: SheetGrid) -> ParseResult:
        columns = find_list_header(grid)
        if columns is not None:
            logger.info("  '%s' looks like a list view", grid.sheet_name)
            return self._extract_list(grid, columns)
        return self._extract_matrix(grid)

    # ------------------------------------------------------------------
    # List view
    # ------------------------------------------------------------------

    def _extract_list(self, grid: SheetGrid, columns: ListViewColumns) -> ParseResult:
        try:
            return parse_list_view(grid, columns, self.settings, self.department)
        except Exception:
            logger.exception(
                "List-view extraction failed on '%s' — skipping", grid.sheet_name
            )
            return ParseResult.failed(
                ImportFailure(
                    reason="List view skipped — unexpected error while parsing.",
                    code=FailureCode.UNEXPECTED_BLOCK_ERROR,
                    sheet_name=grid.sheet_name,
                    cell_ref=grid.cell_at(
                        columns.header_row, grid.bounds.start_col
                    ).coordinate,
                )
            )

    # ------------------------------------------------------------------
    # Matrix view
    # ------------------------------------------------------------------

    def _extract_matrix(self, grid: SheetGrid) -> ParseResult:
        divider_rows = find_divider_rows(grid, self.settings)
        if len(divider_rows) < 2:
            raise InsufficientDividersError(sheet_name=grid.sheet_name)

        blocks = segment_site_blocks(divider_rows)
        logger.info(
            "  %d divider row(s), %d site block(s)", len(divider_rows), len(blocks)
        )

        parsed: List[RawParsedShift] = []
        failures: List[ImportFailure] = []
        for block in blocks:
            try:
                parsed.extend(self._extract_block(grid, block, divider_rows))
            except BlockSkippedError as exc:
                logger.warning(
                    "Rows %d-%d skipped: %s", block.start_row, block.end_row, exc
                )
                failures.append(exc.to_failure())
            except Exception:
                logger.exception(
                    "Extraction failed for rows %d-%d — skipping",
                    block.start_row,
                    block.end_row,
                )
                failures.append(
                    ImportFailure(
                        reason="Block skipped — unexpected error while parsing.",
                        code=FailureCode.UNEXPECTED_BLOCK_ERROR,
                        sheet_name=grid.sheet_name,
                        cell_ref=f"A{block.start_row}:A{block.end_row}",
                    )
                )

        return ParseResult(parsed=parsed, failures=failures)

    def _resolve_site(self, grid: SheetGrid, block: SiteBlock) -> _SiteContext:
        candidate = extract_site_address(grid, block, self.settings)
        address, e_number = split_e_number(candidate.text)
        manager = grid.text_at(candidate.row, constants.MANAGER_COLUMN)

        date_row = find_date_row(grid, block, self.settings, site_address=address)
        date_columns = map_date_columns(grid, date_row, site_address=address)
        return _SiteContext(
            address=address,
            e_number=e_number,
            manager=manager or grid.sheet_name,
            date_row=date_row,
            date_columns=date_columns,
        )

    def _extract_block(
        self,
        grid: SheetGrid,
        block: SiteBlock,
        divider_rows: Sequence[int],
    ) -> List[RawParsedShift]:
        site = self._resolve_site(grid, block)

        shifts: List[RawParsedShift] = []
        for date_col in site.date_columns:
            for cd in scan_column(
                grid,
                date_col.col,
                site.date_row + 1,
                block.end_row,
                divider_rows,
                self.settings,
            ):
                shifts.extend(self._shifts_from_cell(grid, cd, site, date_col))

        logger.debug(
            "Rows %d-%d (%s): %d shift(s)",
            block.start_row,
            block.end_row,
            site.address,
            len(shifts),
        )
        return shifts

    def _shifts_from_cell(
        self,
        grid: SheetGrid,
        cd: CellData,
        site: _SiteContext,
        date_col: DateColumn,
    ) -> List[RawParsedShift]:
        task, shift_type, names_text = extract_task_and_type(
            cd.text, self.settings.default_task
        )
        notes = "; ".join(
            text
            for col in constants.NOTE_COLUMNS
            if col != cd.col and (text := grid.text_at(cd.row, col))
        )
        source = ShiftSource(sheet_name=grid.sheet_name, cell_ref=cd.coordinate)
        return [
            RawParsedShift(
                site_address=site.address,
                shift_date=date_col.iso_date,
                operative_name_raw=name,
                task=task,
                type=shift_type,
                department=self.department,
                source=source,
                manager=site.manager,
                notes=notes or None,
                e_number=site.e_number,
                contract=grid.sheet_name,
            )
            for name in split_operative_names(names_text, self.settings)
        ]
