"""
Operative-cell handling: text classification, name splitting and the
downward column scan below a date row.

Cells under a date are free text typed by schedulers.  Rules:
  - Sheet furniture (``job manager``, ``measures``, ...) and bare phone
    numbers are skipped without a failure record
  - A leading ``AM`` / ``PM`` marks a half-day shift
  - ``<task> - <names>`` puts the task before the last spaced hyphen
  - Names are separated by line breaks, commas, ``&``, ``/`` or ``and``
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Sequence, Tuple

from detection.settings import ParserSettings
from dto.cell_data import CellData
from dto.region import SheetGrid
from dto.shifts import ShiftType
from utils.text import is_phone_number, normalize_whitespace, single_line

_NAME_SEPARATORS = re.compile(r"\n|,|&|/|\band\b", re.IGNORECASE)
_HALF_DAY_PREFIX = re.compile(r"^(AM|PM)\b\s*", re.IGNORECASE)
_TASK_SEPARATOR = " - "


def is_non_shift_text(text: str, settings: Optional[ParserSettings] = None) -> bool:
    settings = settings or ParserSettings()
    lowered = single_line(text).lower()
    if any(
        keyword == lowered or keyword in lowered
        for keyword in settings.non_shift_keywords
    ):
        return True
    return is_phone_number(lowered)


def extract_task_and_type(
    text: str, default_task: str
) -> Tuple[str, ShiftType, str]:
    """
    Split a shift cell into ``(task, type, names_text)``.

    ``"AM Loft insulation - John Smith"`` gives
    ``("Loft insulation", "am", "John Smith")``.
    """
    raw = normalize_whitespace(text)
    shift_type: ShiftType = "all-day"

    prefix = _HALF_DAY_PREFIX.match(raw)
    if prefix:
        shift_type = "am" if prefix.group(1).lower() == "am" else "pm"
        raw = raw[prefix.end():]

    task = default_task
    names = raw
    if _TASK_SEPARATOR in raw:
        head, _, tail = raw.rpartition(_TASK_SEPARATOR)
        if head.strip() and tail.strip():
            task = single_line(head)
            names = tail.strip()
    return task, shift_type, names


def _keep_fragment(fragment: str, settings: ParserSettings) -> bool:
    if not fragment:
        return False
    lowered = fragment.lower()
    if lowered == "ignore" or is_phone_number(fragment):
        return False
    return not any(marker in lowered for marker in settings.contact_markers)


def split_operative_names(
    text: str, settings: Optional[ParserSettings] = None
) -> Tuple[str, ...]:
    """Split a cell into individual operative names, dropping contact noise."""
    settings = settings or ParserSettings()
    fragments = (single_line(part) for part in _NAME_SEPARATORS.split(text))
    return tuple(f for f in fragments if _keep_fragment(f, settings))


def scan_column(
    grid: SheetGrid,
    col: int,
    start_row: int,
    end_row: int,
    divider_rows: Sequence[int] = (),
    settings: Optional[ParserSettings] = None,
) -> Iterator[CellData]:
    """
    Yield the shift cells of *col* from *start_row* down to *end_row*.

    Stops at a divider row or once ``max_blank_run`` blank cells have been
    seen in a row.  Non-shift text is skipped but still ends a blank run.
    """
    settings = settings or ParserSettings()
    dividers = set(divider_rows)
    blank_run = 0
    for row in range(start_row, end_row + 1):
        if row in dividers:
            break
        cd = grid.cell_at(row, col)
        if cd.is_blank:
            blank_run += 1
            if blank_run >= settings.max_blank_run:
                break
            continue
        blank_run = 0
        if is_non_shift_text(cd.text, settings):
            continue
        yield cd
