import os

from typing import List

import dotenv

# Thresholds below read the environment once, at import time.
dotenv.load_dotenv()


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


# Sheet preferred over every other worksheet in a GAS workbook.
PREFERRED_SHEET_NAME: str = os.getenv("GAS_PREFERRED_SHEET", "UNITAS")

# Divider rows: share of used columns carrying a non-white fill, and share
# of those fills matching the first colour seen on the row.
DIVIDER_FILL_RATIO: float = float(os.getenv("GAS_DIVIDER_FILL_RATIO", "0.70"))
DIVIDER_COLOR_RATIO: float = float(os.getenv("GAS_DIVIDER_COLOR_RATIO", "0.70"))

# Address scoring.  Empirical values; validate against real workbooks
# before tightening.
MIN_ADDRESS_SCORE: int = int(os.getenv("GAS_MIN_ADDRESS_SCORE", "30"))
ADDRESS_FILL_BONUS = 15
ADDRESS_DIGIT_BONUS = 10
ADDRESS_SEPARATOR_BONUS = 10
ADDRESS_POSTCODE_BONUS = 15
ADDRESS_MAX_LENGTH_BONUS = 120

# Date header row: minimum run of adjacent date-like cells.
MIN_DATE_RUN: int = int(os.getenv("GAS_MIN_DATE_RUN", "3"))

# Excel serial numbers accepted as dates (roughly 1954-10-03 .. 2064-04-08).
SERIAL_DATE_MIN = 20000
SERIAL_DATE_MAX = 60000
# Days between 1899-12-30 (Excel epoch) and 1970-01-01.
EXCEL_EPOCH_OFFSET_DAYS = 25569
# Year the general date parser must exceed for a match to count.
MIN_FALLBACK_YEAR = 2000

# Operative scan stops after this many consecutive blank cells.
MAX_BLANK_RUN: int = int(os.getenv("GAS_MAX_BLANK_RUN", "3"))

# Cell text that is sheet furniture rather than a shift.  Matched against
# the lower-cased cell text, exactly or as a substring.
NON_SHIFT_KEYWORDS: List[str] = [
    "job manager",
    "measures",
    "scheme",
    "pulse",
    "2 fans",
    "iwi",
    "ignore",
    "date of shift",
    "shift information",
] + _env_list("GAS_EXTRA_NON_SHIFT_KEYWORDS")

# Name fragments containing any of these are contact details, not people.
CONTACT_MARKERS: List[str] = ["tel", "mobile"]

DEFAULT_TASK = "Task not specified"

# Fixed columns of the matrix layout (1-based): manager beside the address,
# free-text notes beside each shift row.
MANAGER_COLUMN = 4
NOTE_COLUMNS = (2, 5)
