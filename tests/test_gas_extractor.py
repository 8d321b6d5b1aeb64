import pytest

from conftest import ADDRESS_COLOR, fill_row

import extractors.gas as gas_module
from detection.dates import map_date_columns
from detection.errors import InsufficientDividersError
from detection.settings import ParserSettings
from dto.shifts import FailureCode
from extractors.gas import GasSheetExtractor


@pytest.fixture
def gas_grid(make_grid, gas_sheet):
    rows, fills = gas_sheet
    return make_grid(rows, fills)


def _summary(result):
    return [
        (s.source.cell_ref, s.operative_name_raw, s.shift_date, s.type, s.task)
        for s in result.parsed
    ]


def test_extracts_shifts_in_block_column_row_order(gas_grid):
    result = GasSheetExtractor().extract(gas_grid)

    assert _summary(result) == [
        ("F4", "John Smith", "2025-06-16", "all-day", "Task not specified"),
        ("F4", "Jane Doe", "2025-06-16", "all-day", "Task not specified"),
        ("G4", "John Smith", "2025-06-17", "am", "Boiler service"),
        ("F12", "Bob Jones", "2025-06-16", "all-day", "Task not specified"),
        ("H12", "Ann Lee", "2025-06-18", "pm", "Meter fit"),
        ("H12", "Tom Fox", "2025-06-18", "pm", "Meter fit"),
    ]


def test_site_context_is_carried_on_every_shift(gas_grid):
    result = GasSheetExtractor(department="Gas").extract(gas_grid)
    first, bob = result.parsed[0], result.parsed[3]

    assert first.site_address == "12 High Street, Leeds LS1 4AB"
    assert first.manager == "Sam Manager"
    assert first.e_number is None
    assert first.notes is None
    assert first.contract == "UNITAS"
    assert first.department == "Gas"
    assert first.import_type == "GAS"
    assert first.source.sheet_name == "UNITAS"

    assert bob.site_address == "4 Park Road, York YO1 7HH"
    assert bob.e_number == "E12345"
    assert bob.manager == "UNITAS"
    assert bob.notes == "Bring ladders"


def test_unparseable_block_becomes_one_failure(gas_grid):
    result = GasSheetExtractor().extract(gas_grid)

    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.code == FailureCode.ADDRESS_NOT_FOUND
    assert failure.cell_ref == "A7:B8"
    assert failure.sheet_name == "UNITAS"


def test_furniture_and_contact_cells_yield_nothing(gas_grid):
    result = GasSheetExtractor().extract(gas_grid)
    refs = {s.source.cell_ref for s in result.parsed}
    assert "H4" not in refs
    assert "F5" not in refs


def test_block_without_date_row_fails(make_grid):
    rows = [
        [None] * 6,
        ["12 High Street, Leeds LS1 4AB", None, None, None, None, None],
        [None, None, "16/06/2025", "17/06/2025", None, None],
        [None, None, "John Smith", None, None, None],
        [None] * 6,
    ]
    fills = {**fill_row(1, 6), **fill_row(5, 6), (2, 1): ADDRESS_COLOR}
    result = GasSheetExtractor().extract(make_grid(rows, fills))

    assert result.parsed == []
    assert [f.code for f in result.failures] == [FailureCode.DATE_ROW_NOT_FOUND]
    assert result.failures[0].site_address == "12 High Street, Leeds LS1 4AB"
    assert result.failures[0].cell_ref == "A2:F4"


def test_single_site_with_two_dates(make_grid):
    rows = [
        [None, None, None],
        ["123 Main St", None, None],
        [None, "16/06/2025", "17/06/2025"],
        [None, "John Doe", "John Doe"],
        [None, None, None],
    ]
    fills = {**fill_row(1, 3), **fill_row(5, 3), (2, 1): ADDRESS_COLOR}
    extractor = GasSheetExtractor(settings=ParserSettings(min_date_run=2))
    result = extractor.extract(make_grid(rows, fills))

    assert result.failures == []
    found = [(s.site_address, s.shift_date, s.operative_name_raw) for s in result.parsed]
    assert found == [
        ("123 Main St", "2025-06-16", "John Doe"),
        ("123 Main St", "2025-06-17", "John Doe"),
    ]


def test_dividers_with_nothing_between_give_empty_result(make_grid):
    rows = [[None] * 4 for _ in range(3)]
    fills = {**fill_row(1, 4), **fill_row(3, 4)}
    result = GasSheetExtractor().extract(make_grid(rows, fills))
    assert result.parsed == []
    assert result.failures == []


def test_single_divider_is_insufficient(make_grid):
    rows = [[None] * 4, ["12 High Street, Leeds", None, None, None]]
    with pytest.raises(InsufficientDividersError):
        GasSheetExtractor().extract(make_grid(rows, fill_row(1, 4)))


def test_unexpected_error_skips_only_that_block(gas_grid, monkeypatch):
    original = gas_module.extract_site_address

    def flaky(grid, block, settings=None):
        if block.start_row == 2:
            raise RuntimeError("boom")
        return original(grid, block, settings)

    monkeypatch.setattr(gas_module, "extract_site_address", flaky)
    result = GasSheetExtractor().extract(gas_grid)

    codes = [f.code for f in result.failures]
    assert codes == [
        FailureCode.UNEXPECTED_BLOCK_ERROR,
        FailureCode.ADDRESS_NOT_FOUND,
    ]
    assert {s.source.cell_ref for s in result.parsed} == {"F12", "H12"}


def test_extraction_is_deterministic(gas_grid):
    first = GasSheetExtractor().extract(gas_grid)
    second = GasSheetExtractor().extract(gas_grid)
    assert first.model_dump() == second.model_dump()


def test_mixed_date_encodings_share_one_date_row(gas_grid):
    columns = map_date_columns(gas_grid, 11)
    assert [(c.col, c.iso_date) for c in columns] == [
        (6, "2025-06-16"),
        (7, "2025-06-17"),
        (8, "2025-06-18"),
    ]
