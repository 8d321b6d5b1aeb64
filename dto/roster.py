from pydantic import BaseModel
from typing import List, Optional

from dto.shifts import ImportFailure, RawParsedShift


class OperativeEntry(BaseModel):
    """One known operative that raw names are matched against."""
    uid: str
    original_name: str
    normalized_name: str = ""
    department: Optional[str] = None


class MatchedShift(BaseModel):
    shift: RawParsedShift
    operative: OperativeEntry


class ResolvedShifts(BaseModel):
    matched: List[MatchedShift] = []
    failures: List[ImportFailure] = []
