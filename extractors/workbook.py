"""
Workbook loading and worksheet selection.

GAS workbooks name their schedule sheet ``UNITAS``; older copies renamed
or hid it, so selection falls back to the first visible sheet and then to
the first sheet of any kind.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Union

import openpyxl
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from detection import constants
from detection.errors import NoWorksheetFoundError, WorkbookLoadError

logger = logging.getLogger(__name__)

WorkbookSource = Union[bytes, bytearray, BinaryIO]


def load_workbook_bytes(source: WorkbookSource) -> Workbook:
    """
    Open a workbook from an in-memory buffer or binary file object.

    Formula cells resolve to the values Excel cached when the file was
    saved.  Anything openpyxl cannot open is re-raised as
    ``WorkbookLoadError``.
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        return openpyxl.load_workbook(stream, data_only=True)
    except Exception as exc:
        raise WorkbookLoadError(f"Could not open workbook: {exc}") from exc


def select_worksheet(
    workbook: Workbook, preferred_name: str = constants.PREFERRED_SHEET_NAME
) -> Worksheet:
    """Pick the preferred sheet, else the first visible one, else the first."""
    sheets = workbook.worksheets
    if not sheets:
        raise NoWorksheetFoundError()

    for ws in sheets:
        if ws.title == preferred_name:
            return ws

    for ws in sheets:
        if ws.sheet_state == "visible":
            logger.info(
                "Worksheet '%s' not found — using first visible sheet '%s'",
                preferred_name,
                ws.title,
            )
            return ws

    logger.warning(
        "Worksheet '%s' not found and every sheet is hidden — using '%s'",
        preferred_name,
        sheets[0].title,
    )
    return sheets[0]
