"""
Justification endpoints for API v1.

Students submit absence justifications for their groups and list their
own; tutors list those of their students and review them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.core.exceptions import ValidationError
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.justification import (
    JustificationCreate,
    JustificationRead,
    JustificationReview,
)
from wellbeing_api.app.services.justification_service import JustificationService

router = APIRouter()


@router.post("", response_model=OkResponse)
async def submit_justification(
    data: JustificationCreate,
    pool: ConnectionPool = Depends(get_pool),
) -> OkResponse:
    """Submit a justification.  The student must belong to ``groupId`` (400 otherwise)."""
    return await JustificationService.submit(pool, data)


@router.get("", response_model=List[JustificationRead], response_model_exclude_unset=True)
async def list_justifications(
    student_id: Optional[int] = Query(None, alias="studentId"),
    tutor_id: Optional[int] = Query(None, alias="tutorId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[JustificationRead]:
    """List a student's justifications, or those of a tutor's students.

    ``studentId`` takes precedence when both are given.
    """
    if student_id is not None:
        return await JustificationService.list_for_student(pool, student_id)
    if tutor_id is not None:
        return await JustificationService.list_for_tutor(pool, tutor_id)
    raise ValidationError("Provide studentId or tutorId")


@router.patch("/{justification_id}", response_model=OkResponse)
async def review_justification(
    justification_id: int,
    data: JustificationReview,
    pool: ConnectionPool = Depends(get_pool),
) -> OkResponse:
    """Approve, reject or reset a justification to pending."""
    return await JustificationService.review(pool, justification_id, data.status, data.reviewer_id)
