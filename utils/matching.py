"""
Operative roster matching — resolves the raw names found in a sheet to
known operatives.

Resolution order for one name:
  1. Exact match on the normalised name
  2. The name is a substring of exactly one full name ("Shergold" finds
     "Phil Shergold")
  3. Last-name match, disambiguated by first initial when several share
     the last name

Anything that does not resolve to exactly one operative becomes an
``ImportFailure`` carrying the shift's site, date and cell reference.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from dto.output import ParseResult
from dto.roster import MatchedShift, OperativeEntry, ResolvedShifts
from dto.shifts import FailureCode, ImportFailure
from utils.text import normalize_name

logger = logging.getLogger(__name__)


def _normalized(entry: OperativeEntry) -> str:
    return entry.normalized_name or normalize_name(entry.original_name)


def match_operative(
    name: str, roster: Sequence[OperativeEntry]
) -> Tuple[Optional[OperativeEntry], Optional[str]]:
    """
    Return ``(entry, None)`` for a unique match, or ``(None, reason)``.
    """
    chunk = normalize_name(name)
    if not chunk:
        return None, "Empty name provided."

    matches = [e for e in roster if _normalized(e) == chunk]
    if len(matches) == 1:
        return matches[0], None
    if matches:
        return None, f'Ambiguous name "{name}" matches multiple users exactly.'

    matches = [e for e in roster if chunk in _normalized(e)]
    if len(matches) == 1:
        return matches[0], None
    if matches:
        return None, f'Ambiguous name "{name}" matches multiple users.'

    parts = chunk.split(" ")
    last_name = parts[-1]
    matches = [e for e in roster if _normalized(e).endswith(" " + last_name)]
    if len(matches) == 1:
        return matches[0], None
    if matches:
        if len(parts) > 1:
            initial = parts[0][0]
            by_initial = [e for e in matches if _normalized(e).startswith(initial)]
            if len(by_initial) == 1:
                return by_initial[0], None
        return None, f'Ambiguous name "{name}" matches multiple users by last name.'

    return None, f'No user found for name: "{name}".'


def resolve_operatives(
    result: ParseResult, roster: Sequence[OperativeEntry]
) -> ResolvedShifts:
    """
    Match every parsed shift against *roster*.

    The parse failures are carried over first, followed by one failure per
    shift whose operative could not be matched.
    """
    matched: List[MatchedShift] = []
    failures: List[ImportFailure] = list(result.failures)

    for shift in result.parsed:
        entry, reason = match_operative(shift.operative_name_raw, roster)
        if entry is None:
            failures.append(
                ImportFailure(
                    reason=reason
                    or f'Could not match operative: "{shift.operative_name_raw}"',
                    code=FailureCode.OPERATIVE_NOT_MATCHED,
                    site_address=shift.site_address,
                    shift_date=shift.shift_date,
                    operative_name_raw=shift.operative_name_raw,
                    sheet_name=shift.source.sheet_name,
                    cell_ref=shift.source.cell_ref,
                )
            )
            continue
        matched.append(MatchedShift(shift=shift, operative=entry))

    logger.info(
        "Matched %d of %d shift(s) to the roster",
        len(matched),
        len(result.parsed),
    )
    return ResolvedShifts(matched=matched, failures=failures)
