"""
Mood endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.mood import MoodCreate, MoodRead
from wellbeing_api.app.services.mood_service import MoodService

router = APIRouter()


@router.post("", response_model=OkResponse)
async def submit_mood(data: MoodCreate, pool: ConnectionPool = Depends(get_pool)) -> OkResponse:
    """Log a student's mood for a day.

    ``loggedDate`` defaults to today.  Returns 409 if the student
    already logged that day.  Low moods raise an alert.
    """
    return await MoodService.submit_mood(pool, data)


@router.get("", response_model=List[MoodRead])
async def mood_history(
    student_id: int = Query(..., alias="studentId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[MoodRead]:
    return await MoodService.history(pool, student_id)
