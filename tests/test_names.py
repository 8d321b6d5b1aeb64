import pytest

from detection.names import (
    extract_task_and_type,
    is_non_shift_text,
    scan_column,
    split_operative_names,
)
from detection.settings import ParserSettings

DEFAULT_TASK = "Task not specified"


@pytest.mark.parametrize(
    "text",
    [
        "Job Manager",
        "JOB MANAGER: Dave",
        "Measures",
        "ECO4 scheme",
        "Ignore",
        "07700 900123",
        "+44 7700 900-123",
        "Date of shift",
    ],
)
def test_non_shift_text(text):
    assert is_non_shift_text(text)


@pytest.mark.parametrize("text", ["John Smith", "AM Loft - Jane Doe", "Tel 07700"])
def test_shift_text(text):
    assert not is_non_shift_text(text)


def test_extra_keywords_come_from_settings():
    settings = ParserSettings(non_shift_keywords=["van hire"])
    assert is_non_shift_text("Van hire booked", settings)
    assert not is_non_shift_text("Job Manager", settings)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("John Smith", (DEFAULT_TASK, "all-day", "John Smith")),
        ("AM Boiler service - John Smith", ("Boiler service", "am", "John Smith")),
        ("pm Jane Doe", (DEFAULT_TASK, "pm", "Jane Doe")),
        ("Amy Pond", (DEFAULT_TASK, "all-day", "Amy Pond")),
        ("Smith-Jones", (DEFAULT_TASK, "all-day", "Smith-Jones")),
        ("Loft - Survey - Ann Lee", ("Loft - Survey", "all-day", "Ann Lee")),
    ],
)
def test_extract_task_and_type(text, expected):
    assert extract_task_and_type(text, DEFAULT_TASK) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("John Smith, Jane Doe", ("John Smith", "Jane Doe")),
        ("Ann & Tom / Bob and Sue", ("Ann", "Tom", "Bob", "Sue")),
        ("John Smith\nJane Doe", ("John Smith", "Jane Doe")),
        ("Andy Anderson", ("Andy Anderson",)),
        ("John Smith\nTel 07700 900123", ("John Smith",)),
        ("John Smith, mobile 07700", ("John Smith",)),
        ("Ignore, Jane Doe", ("Jane Doe",)),
        ("John Smith, 07700 900123", ("John Smith",)),
        (", ,", ()),
    ],
)
def test_split_operative_names(text, expected):
    assert split_operative_names(text) == expected


def _column(make_grid, values):
    rows = [[value] for value in values]
    return make_grid(rows)


def test_scan_stops_after_blank_run(make_grid):
    grid = _column(make_grid, ["A One", "B Two", None, None, None, "Too Far"])
    found = [cd.text for cd in scan_column(grid, 1, 1, 6)]
    assert found == ["A One", "B Two"]


def test_scan_tolerates_short_gaps(make_grid):
    grid = _column(make_grid, ["A One", None, None, "B Two"])
    found = [cd.text for cd in scan_column(grid, 1, 1, 4)]
    assert found == ["A One", "B Two"]


def test_scan_skips_furniture_without_yielding(make_grid):
    grid = _column(make_grid, ["Job Manager", "A One", "07700 900123"])
    found = [cd.text for cd in scan_column(grid, 1, 1, 3)]
    assert found == ["A One"]


def test_scan_stops_at_divider(make_grid):
    grid = _column(make_grid, ["A One", None, "B Two"])
    found = [cd.text for cd in scan_column(grid, 1, 1, 3, divider_rows=[2])]
    assert found == ["A One"]


def test_scan_blank_run_is_configurable(make_grid):
    grid = _column(make_grid, ["A One", None, "B Two"])
    settings = ParserSettings(max_blank_run=1)
    found = [cd.text for cd in scan_column(grid, 1, 1, 3, settings=settings)]
    assert found == ["A One"]
