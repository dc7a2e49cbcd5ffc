from __future__ import annotations
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ABSENT = "—"        # time / activity has no value
NOTES_EMPTY = "-"   # notes column has no value
RANGE_SEP = "–"


class TimeToken(BaseModel):
    """
    A clock time normalized to the 12-hour clock with an explicit meridiem.
    """
    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., description="Hour on the 12-hour clock")
    minute: int = Field(0, description="Minute, 0-59")
    meridiem: Literal["AM", "PM"]

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute:02d} {self.meridiem}"


class Row(BaseModel):
    """
    One table row derived from one log line.
    """
    model_config = ConfigDict(frozen=True)

    time: str = Field(ABSENT, description="'H:MM AM', 'START–END' or the absence marker")
    activity: str = Field(ABSENT, description="Cleaned activity text or the absence marker")
    notes: str = Field("", description="Bracketed annotation, empty when none")
