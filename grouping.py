"""
Site-block segmentation — turns the divider rows of a sheet into the row
ranges that hold one site each.

A block is everything strictly between two consecutive divider rows.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from dto.coordinate import SiteBlock


def segment_site_blocks(divider_rows: Sequence[int]) -> Tuple[SiteBlock, ...]:
    """
    Walk consecutive divider pairs and return the blocks between them.

    Empty or inverted spans (adjacent dividers, or a single row between
    them) are dropped silently; they are not failures.
    """
    blocks = []
    for upper, lower in zip(divider_rows, divider_rows[1:]):
        block = SiteBlock(start_row=upper + 1, end_row=lower - 1)
        if block.is_empty:
            continue
        blocks.append(block)
    return tuple(blocks)
