"""
Text normalisation helpers shared by the GAS detectors and the roster
matcher.
"""

from __future__ import annotations

import re

_INLINE_SPACE = re.compile(r"[ \t]+")
_SPACED_NEWLINE = re.compile(r"\s*\n\s*")
_ANY_SPACE = re.compile(r"\s+")
_NON_NAME_CHARS = re.compile(r"[^a-z0-9\s]")

PHONE_NUMBER = re.compile(r"^\+?\d[\d\s-]{7,}$")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of spaces/tabs and tidy line breaks, keeping newlines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _INLINE_SPACE.sub(" ", text)
    text = _SPACED_NEWLINE.sub("\n", text)
    return text.strip()


def single_line(text: str) -> str:
    """Collapse all whitespace, newlines included, to single spaces."""
    return _ANY_SPACE.sub(" ", text).strip()


def normalize_name(text: str) -> str:
    """Lower-case and strip everything but letters, digits and spaces."""
    return single_line(_NON_NAME_CHARS.sub("", (text or "").lower()))


def is_phone_number(text: str) -> bool:
    return bool(PHONE_NUMBER.match(text.strip()))
