"""
Alert endpoints for API v1.

Alerts are read only; they are generated when a student reports a low
mood.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.core.exceptions import ValidationError
from wellbeing_api.app.schemas.alert import AlertRead
from wellbeing_api.app.services.alert_service import AlertService

router = APIRouter()


@router.get("", response_model=List[AlertRead], response_model_exclude_unset=True)
async def list_alerts(
    student_id: Optional[int] = Query(None, alias="studentId"),
    tutor_id: Optional[int] = Query(None, alias="tutorId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[AlertRead]:
    """List a student's alerts, or the alerts of a tutor's students (with names)."""
    if student_id is not None:
        return await AlertService.list_for_student(pool, student_id)
    if tutor_id is not None:
        return await AlertService.list_for_tutor(pool, tutor_id)
    raise ValidationError("Provide studentId or tutorId")
