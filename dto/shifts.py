"""
Shift DTOs produced by the GAS parser.

``RawParsedShift`` is the core output unit: one operative on one site on
one date.  ``ImportFailure`` records anything that could not be resolved;
all of its location fields are optional so partial context is kept.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel

ShiftType = Literal["am", "pm", "all-day"]
ImportType = Literal["BUILD", "GAS"]


class FailureCode(str, Enum):
    # Fatal to the whole parse
    NO_WORKSHEET_FOUND = "no_worksheet_found"
    SHEET_APPEARS_EMPTY = "sheet_appears_empty"
    INSUFFICIENT_DIVIDERS = "insufficient_dividers"
    # Fatal to one site block
    ADDRESS_NOT_FOUND = "address_not_found"
    DATE_ROW_NOT_FOUND = "date_row_not_found"
    NO_DATE_COLUMNS_FOUND = "no_date_columns_found"
    UNEXPECTED_BLOCK_ERROR = "unexpected_block_error"
    # List-view rows and roster reconciliation
    MISSING_REQUIRED_DATA = "missing_required_data"
    OPERATIVE_NOT_MATCHED = "operative_not_matched"


class ShiftSource(BaseModel):
    sheet_name: str
    cell_ref: str

    model_config = {"frozen": True}


class RawParsedShift(BaseModel):
    site_address: str
    shift_date: str  # ISO yyyy-mm-dd
    operative_name_raw: str
    task: str
    type: ShiftType = "all-day"
    department: str = ""
    import_type: ImportType = "GAS"
    source: ShiftSource
    manager: Optional[str] = None
    notes: Optional[str] = None
    e_number: Optional[str] = None
    contract: Optional[str] = None

    model_config = {"frozen": True}


class ImportFailure(BaseModel):
    reason: str
    code: Optional[FailureCode] = None
    site_address: Optional[str] = None
    shift_date: Optional[str] = None
    operative_name_raw: Optional[str] = None
    sheet_name: Optional[str] = None
    cell_ref: Optional[str] = None

    model_config = {"frozen": True}

    def describe(self) -> str:
        """One human-readable line for an operator's failure list."""
        where = " ".join(
            part for part in (self.sheet_name, self.cell_ref) if part
        )
        prefix = f"[{where}] " if where else ""
        extra = [
            value
            for value in (self.site_address, self.shift_date, self.operative_name_raw)
            if value
        ]
        suffix = f" ({', '.join(extra)})" if extra else ""
        return f"{prefix}{self.reason}{suffix}"


class AddressCandidate(BaseModel):
    text: str
    score: int
    row: int
    col: int

    model_config = {"frozen": True}


class DateColumn(BaseModel):
    col: int
    iso_date: str

    model_config = {"frozen": True}
