"""
Exceptions raised by the GAS pipeline stages.

Every ``GasParseError`` carries a ``FailureCode`` and a human-readable
message; the sheet extractor catches them and turns them into
``ImportFailure`` records, so none of these escape ``parse_gas_workbook``.
``WorkbookLoadError`` and ``UnsupportedImportTypeError`` are the only
errors callers see.
"""

from __future__ import annotations

from typing import Optional

from dto.shifts import FailureCode, ImportFailure


class GasParseError(Exception):
    """Base class for anticipated GAS parse failures."""

    code: FailureCode = FailureCode.UNEXPECTED_BLOCK_ERROR
    default_reason = "GAS parse failed."

    def __init__(
        self,
        reason: Optional[str] = None,
        *,
        sheet_name: Optional[str] = None,
        site_address: Optional[str] = None,
        cell_ref: Optional[str] = None,
    ) -> None:
        self.reason = reason or self.default_reason
        self.sheet_name = sheet_name
        self.site_address = site_address
        self.cell_ref = cell_ref
        super().__init__(self.reason)

    def to_failure(self) -> ImportFailure:
        return ImportFailure(
            reason=self.reason,
            code=self.code,
            sheet_name=self.sheet_name,
            site_address=self.site_address,
            cell_ref=self.cell_ref,
        )


# -------------------------------------------------------------------
# Fatal to the whole parse
# -------------------------------------------------------------------


class NoWorksheetFoundError(GasParseError):
    code = FailureCode.NO_WORKSHEET_FOUND
    default_reason = "No worksheet found"


class SheetAppearsEmptyError(GasParseError):
    code = FailureCode.SHEET_APPEARS_EMPTY
    default_reason = "Sheet appears empty"


class InsufficientDividersError(GasParseError):
    code = FailureCode.INSUFFICIENT_DIVIDERS
    default_reason = (
        "Could not detect matrix format: coloured divider rows not found."
    )


# -------------------------------------------------------------------
# Fatal to one site block
# -------------------------------------------------------------------


class BlockSkippedError(GasParseError):
    """A single site block could not be parsed; the rest of the sheet can."""


class AddressNotFoundError(BlockSkippedError):
    code = FailureCode.ADDRESS_NOT_FOUND
    default_reason = "Block skipped — site address not found."


class DateRowNotFoundError(BlockSkippedError):
    code = FailureCode.DATE_ROW_NOT_FOUND
    default_reason = "Block skipped — date header row not found."


class NoDateColumnsFoundError(BlockSkippedError):
    code = FailureCode.NO_DATE_COLUMNS_FOUND
    default_reason = "Block skipped — no valid date columns found on date row."


# -------------------------------------------------------------------
# Caller-facing
# -------------------------------------------------------------------


class WorkbookLoadError(Exception):
    """The buffer could not be opened as an Excel workbook."""


class UnsupportedImportTypeError(ValueError):
    """No parser in this package handles the requested import type."""
