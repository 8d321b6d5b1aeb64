"""
Fill-colour predicates used as structural signals.

Colour codes are the strings produced by ``extractors.sheet.fill_color``:
upper-cased ARGB hex (``"FFC00000"``), or ``"THEME:n"`` / ``"INDEXED:n"``
for colours that are not stored as literal RGB.

Divider colours differ between company versions of the workbook, so these
checks only ask "filled or not" and "same colour or not"; there is no
colour-distance tolerance.
"""

from __future__ import annotations

from typing import Optional, Sequence

_WHITE_ARGB = {"FFFFFFFF", "FFFFFFFE"}

# Theme slot 0 is "Background 1" and palette slots 1 and 9 are white in
# every stock Office workbook.
_WHITE_CODES = {"THEME:0", "INDEXED:1", "INDEXED:9"}


def is_white_like(color: Optional[str]) -> bool:
    """True for a missing fill, solid white, or any fully transparent colour."""
    if not color:
        return True
    code = color.upper()
    if code in _WHITE_ARGB or code in _WHITE_CODES:
        return True
    # ARGB with a zero alpha channel
    if code.startswith("00"):
        return True
    return False


def is_filled(color: Optional[str]) -> bool:
    return not is_white_like(color)


def fill_coverage(colors: Sequence[Optional[str]]) -> float:
    """Fraction of *colors* that are real (non-white-like) fills."""
    if not colors:
        return 0.0
    filled = sum(1 for color in colors if is_filled(color))
    return filled / len(colors)


def color_consistency(colors: Sequence[Optional[str]]) -> float:
    """
    Fraction of the filled entries in *colors* sharing the first filled
    colour.  Returns 1.0 when nothing is filled (vacuously consistent).
    """
    filled = [color for color in colors if is_filled(color)]
    if not filled:
        return 1.0
    sample = filled[0]
    return sum(1 for color in filled if color == sample) / len(filled)
