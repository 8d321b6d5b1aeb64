from pydantic import BaseModel


class UsedBounds(BaseModel):
    """Smallest rectangle holding every text-bearing or filled cell (1-based)."""

    start_row: int
    end_row: int
    start_col: int
    end_col: int

    model_config = {"frozen": True}

    def union(self, other: "UsedBounds") -> "UsedBounds":
        return UsedBounds(
            start_row=min(self.start_row, other.start_row),
            end_row=max(self.end_row, other.end_row),
            start_col=min(self.start_col, other.start_col),
            end_col=max(self.end_col, other.end_col),
        )


class SiteBlock(BaseModel):
    """Rows strictly between two consecutive divider rows."""

    start_row: int
    end_row: int

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return self.end_row <= self.start_row
