from pydantic import BaseModel
from typing import Any, Optional

from openpyxl.utils import get_column_letter


class CellData(BaseModel):
    row: int
    col: int
    text: str = ""
    value: Any = None
    fill_color: Optional[str] = None  # upper-cased ARGB, or "THEME:n" / "INDEXED:n"

    model_config = {"frozen": True}

    @property
    def coordinate(self) -> str:
        return f"{get_column_letter(self.col)}{self.row}"

    @property
    def is_blank(self) -> bool:
        return not self.text
