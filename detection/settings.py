"""
Per-call parser settings.

Defaults come from ``detection.constants`` (and therefore from the
environment); callers override individual fields for a single parse.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from detection import constants


class ParserSettings(BaseModel):
    preferred_sheet_name: str = constants.PREFERRED_SHEET_NAME
    divider_fill_ratio: float = Field(constants.DIVIDER_FILL_RATIO, ge=0.0, le=1.0)
    divider_color_ratio: float = Field(constants.DIVIDER_COLOR_RATIO, ge=0.0, le=1.0)
    min_address_score: int = constants.MIN_ADDRESS_SCORE
    min_date_run: int = Field(constants.MIN_DATE_RUN, ge=1)
    max_blank_run: int = Field(constants.MAX_BLANK_RUN, ge=1)
    non_shift_keywords: List[str] = Field(
        default_factory=lambda: list(constants.NON_SHIFT_KEYWORDS)
    )
    contact_markers: List[str] = Field(
        default_factory=lambda: list(constants.CONTACT_MARKERS)
    )
    default_task: str = constants.DEFAULT_TASK

    model_config = {"frozen": True}
