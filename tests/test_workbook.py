import io

import pytest
from openpyxl import Workbook

from detection.errors import NoWorksheetFoundError, WorkbookLoadError
from extractors.workbook import load_workbook_bytes, select_worksheet


def _workbook(*titles, hidden=()):
    wb = Workbook()
    wb.remove(wb.active)
    for title in titles:
        ws = wb.create_sheet(title)
        ws["A1"] = title
        if title in hidden:
            ws.sheet_state = "hidden"
    return wb


def test_preferred_sheet_wins_even_when_hidden():
    wb = _workbook("Summary", "UNITAS", hidden=("UNITAS",))
    assert select_worksheet(wb, "UNITAS").title == "UNITAS"


def test_falls_back_to_first_visible_sheet():
    wb = _workbook("Old", "Schedule", "Notes", hidden=("Old",))
    assert select_worksheet(wb, "UNITAS").title == "Schedule"


def test_falls_back_to_first_sheet_when_all_hidden():
    wb = _workbook("Sheet A", "Sheet B", hidden=("Sheet A", "Sheet B"))
    assert select_worksheet(wb, "UNITAS").title == "Sheet A"


def test_workbook_without_sheets():
    wb = Workbook()
    wb.remove(wb.active)
    with pytest.raises(NoWorksheetFoundError):
        select_worksheet(wb, "UNITAS")


def test_load_from_bytes_and_file_object(make_workbook):
    data = make_workbook([["12 High Street"]])
    for source in (data, io.BytesIO(data)):
        wb = load_workbook_bytes(source)
        assert wb.active["A1"].value == "12 High Street"
        wb.close()


def test_corrupt_buffer_raises_load_error():
    with pytest.raises(WorkbookLoadError):
        load_workbook_bytes(b"not a spreadsheet")
