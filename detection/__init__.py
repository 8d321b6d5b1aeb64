"""
GAS layout detectors.

Each module implements one heuristic stage over a ``SheetGrid``; stages
return plain values or raise a ``GasParseError`` subclass.

The canonical evaluation order is:
  1. dividers   — textless, solid-coloured rows between sites
  2. address    — most address-like cell in column A (then A-B)
  3. dates      — first row with a run of date-like cells, and its columns
  4. names      — operative cells under each date, split into names
"""

from detection.address import extract_site_address, split_e_number
from detection.dates import find_date_row, map_date_columns, parse_cell_date
from detection.dividers import find_divider_rows, is_divider_row
from detection.names import (
    extract_task_and_type,
    is_non_shift_text,
    scan_column,
    split_operative_names,
)

__all__ = [
    "extract_site_address",
    "split_e_number",
    "find_date_row",
    "map_date_columns",
    "parse_cell_date",
    "find_divider_rows",
    "is_divider_row",
    "extract_task_and_type",
    "is_non_shift_text",
    "scan_column",
    "split_operative_names",
]
