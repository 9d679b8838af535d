"""
Pydantic schemas for weekly subject perceptions.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class PerceptionCreate(CamelModel):
    student_id: int = Field(..., gt=0)
    subject: str = Field(..., min_length=1, examples=["Math"])
    emotion: str = Field(..., min_length=1, examples=["anxious"])
    week_start: Optional[str] = Field(None, description="Any date within the week")
    notes: Optional[str] = None


class PerceptionRead(CamelModel):
    id: int
    subject: str
    week_start: str
    emotion: str
    notes: Optional[str] = None
