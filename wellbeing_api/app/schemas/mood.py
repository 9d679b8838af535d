"""
Pydantic schemas for daily mood logs.

``logged_date`` is accepted as an ISO date or datetime string and is
normalised to a calendar date by the service; it is returned as
``YYYY-MM-DD`` text.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class MoodCreate(CamelModel):
    student_id: int = Field(..., gt=0)
    mood: str = Field(..., min_length=1, examples=["bien", "mal", "muyMal"])
    note: Optional[str] = None
    logged_date: Optional[str] = Field(None, examples=["2024-05-06"])


class MoodRead(CamelModel):
    id: int
    mood: str
    note: Optional[str] = None
    logged_date: str
