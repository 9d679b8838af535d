"""
Pydantic schemas for absence justifications.

Timestamps are represented as ``str`` because SQLite returns them as
text.  ``student`` and ``student_id`` are only populated in the tutor
view; endpoints exclude unset fields so the student view does not
carry them.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class JustificationCreate(CamelModel):
    student_id: int = Field(..., gt=0)
    type: str = Field(..., min_length=1, examples=["medical"])
    evidence_url: Optional[str] = None
    group_id: int = Field(..., gt=0)


class JustificationReview(CamelModel):
    """Payload for ``PATCH /justifications/{id}``.

    ``status`` is checked by the service against the allowed review
    states so that an invalid value yields a descriptive 400.
    """

    status: Optional[str] = None
    reviewer_id: Optional[int] = None


class JustificationRead(CamelModel):
    id: int
    group_id: int
    type: str
    evidence_url: Optional[str] = None
    status: str
    created_at: str
    student: Optional[str] = None
    student_id: Optional[int] = None
