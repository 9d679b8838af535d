"""
Weekly perception endpoints for API v1.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.perception import PerceptionCreate, PerceptionRead
from wellbeing_api.app.services.perception_service import PerceptionService

router = APIRouter()


@router.post("", response_model=OkResponse)
async def submit_perception(data: PerceptionCreate, pool: ConnectionPool = Depends(get_pool)) -> OkResponse:
    """Record a subject perception for the week containing ``weekStart``.

    Returns 409 if that subject was already recorded for the week.
    """
    return await PerceptionService.submit_perception(pool, data)


@router.get("", response_model=List[PerceptionRead])
async def perception_history(
    student_id: int = Query(..., alias="studentId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[PerceptionRead]:
    return await PerceptionService.history(pool, student_id)
