"""
Site-address extraction.

Scores every text-bearing cell in column A of a block and keeps the most
address-like one; if nothing reaches the minimum score, columns A-B are
scored together.  Scoring (additive):
  - +15  cell has a non-white fill
  - +10  text contains a digit
  - +10  text contains a comma or a line break
  - +15  text contains a UK postcode
  - +len(text), capped at 120
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence, Tuple

from detection import constants
from detection.colors import is_filled
from detection.errors import AddressNotFoundError
from detection.settings import ParserSettings
from dto.cell_data import CellData
from dto.coordinate import SiteBlock
from dto.region import SheetGrid
from dto.shifts import AddressCandidate
from utils.text import normalize_whitespace

logger = logging.getLogger(__name__)

_POSTCODE = re.compile(r"\b[A-Z]{1,2}\d[A-Z\d]?\s*\d[A-Z]{2}\b", re.IGNORECASE)
_DIGIT = re.compile(r"\d")
_SEPARATOR = re.compile(r"[,\n]")
_E_NUMBER = re.compile(r"\b[BE]\d+\S*$", re.IGNORECASE)

# Column A alone, then A and B together.
_COLUMN_PASSES: Tuple[Tuple[int, ...], ...] = ((1,), (1, 2))


def score_address(text: str, fill_color: Optional[str] = None) -> int:
    score = min(len(text), constants.ADDRESS_MAX_LENGTH_BONUS)
    if is_filled(fill_color):
        score += constants.ADDRESS_FILL_BONUS
    if _DIGIT.search(text):
        score += constants.ADDRESS_DIGIT_BONUS
    if _SEPARATOR.search(text):
        score += constants.ADDRESS_SEPARATOR_BONUS
    if _POSTCODE.search(text):
        score += constants.ADDRESS_POSTCODE_BONUS
    return score


def _candidate(cd: CellData) -> AddressCandidate:
    return AddressCandidate(
        text=normalize_whitespace(cd.text),
        score=score_address(cd.text, cd.fill_color),
        row=cd.row,
        col=cd.col,
    )


def collect_address_candidates(
    grid: SheetGrid, block: SiteBlock, cols: Sequence[int]
) -> Tuple[AddressCandidate, ...]:
    """Score every text-bearing cell of *cols* in row-major order."""
    return tuple(
        _candidate(cd)
        for row in range(block.start_row, block.end_row + 1)
        for col in cols
        if not (cd := grid.cell_at(row, col)).is_blank
    )


def pick_best_candidate(
    candidates: Sequence[AddressCandidate], min_score: int
) -> Optional[AddressCandidate]:
    """Highest score wins; ``sorted`` is stable so ties keep scan order."""
    if not candidates:
        return None
    best = sorted(candidates, key=lambda c: c.score, reverse=True)[0]
    return best if best.score >= min_score else None


def extract_site_address(
    grid: SheetGrid,
    block: SiteBlock,
    settings: Optional[ParserSettings] = None,
) -> AddressCandidate:
    """Return the winning address candidate or raise ``AddressNotFoundError``."""
    settings = settings or ParserSettings()
    for cols in _COLUMN_PASSES:
        best = pick_best_candidate(
            collect_address_candidates(grid, block, cols),
            settings.min_address_score,
        )
        if best is not None:
            logger.debug(
                "Rows %d-%d: address %r (score %d)",
                block.start_row,
                block.end_row,
                best.text,
                best.score,
            )
            return best

    raise AddressNotFoundError(
        sheet_name=grid.sheet_name,
        cell_ref=f"A{block.start_row}:B{block.end_row}",
    )


def split_e_number(address: str) -> Tuple[str, Optional[str]]:
    """
    Strip a trailing job reference (``E12345`` / ``B678``) from an address.

    Returns ``(address_without_reference, REFERENCE)``; the reference is
    ``None`` when the address does not end with one.
    """
    match = _E_NUMBER.search(address)
    if not match:
        return address, None
    stripped = address[: match.start()].strip().rstrip(",").strip()
    if not stripped:
        return address, None
    return stripped, match.group(0).upper()
