"""
Top-level output DTO for a single parse call.

    ParseResult
      ├─ parsed:   List[RawParsedShift]   (block → column → row scan order)
      └─ failures: List[ImportFailure]
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from dto.shifts import ImportFailure, RawParsedShift


class ParseResult(BaseModel):
    """Shifts and failures from one worksheet, always returned together."""

    parsed: List[RawParsedShift] = []
    failures: List[ImportFailure] = []

    @classmethod
    def failed(cls, failure: ImportFailure) -> "ParseResult":
        return cls(parsed=[], failures=[failure])
