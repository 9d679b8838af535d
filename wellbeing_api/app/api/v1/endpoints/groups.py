"""
Group endpoints for API v1.

Tutors create groups and list them with their students; students join
a group by code and list the groups they belong to.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.schemas.group import (
    GroupCreate,
    GroupCreated,
    GroupJoin,
    GroupJoined,
    StudentGroupRead,
    TutorGroupRead,
)
from wellbeing_api.app.services.group_service import GroupService

router = APIRouter()


@router.post("", response_model=GroupCreated)
async def create_group(data: GroupCreate, pool: ConnectionPool = Depends(get_pool)) -> GroupCreated:
    """Create a group.  The code must be unique (409 otherwise)."""
    return await GroupService.create_group(pool, data)


@router.post("/join", response_model=GroupJoined)
async def join_group(data: GroupJoin, pool: ConnectionPool = Depends(get_pool)) -> GroupJoined:
    """Enroll a student by group code.

    Returns 404 for an unknown code and 409 if the student is already
    enrolled for the term.
    """
    return await GroupService.join_group(pool, data)


@router.get("", response_model=List[TutorGroupRead])
async def list_tutor_groups(
    tutor_id: int = Query(..., alias="tutorId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[TutorGroupRead]:
    return await GroupService.list_for_tutor(pool, tutor_id)


@router.get("/by-student", response_model=List[StudentGroupRead])
async def list_student_groups(
    student_id: int = Query(..., alias="studentId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[StudentGroupRead]:
    return await GroupService.list_for_student(pool, student_id)
