"""
Pydantic schemas for groups and enrollment.

A group is owned by one tutor and identified to students by its
``code``.  Students enroll per academic term.
"""

from typing import List

from pydantic import Field

from .common import CamelModel

DEFAULT_TERM = "2024"


class GroupCreate(CamelModel):
    tutor_id: int = Field(..., gt=0)
    name: str = Field(..., min_length=1, examples=["3rd grade A"])
    code: str = Field(..., min_length=1, examples=["ABC123"])
    term: str = Field(DEFAULT_TERM, min_length=1)


class GroupCreated(CamelModel):
    id: int
    code: str
    name: str


class GroupJoin(CamelModel):
    student_id: int = Field(..., gt=0)
    group_code: str = Field(..., min_length=1)
    term: str = Field(DEFAULT_TERM, min_length=1)


class GroupJoined(CamelModel):
    ok: bool = True
    group_id: int


class GroupStudent(CamelModel):
    id: int
    name: str


class TutorGroupRead(CamelModel):
    """A tutor's group together with its enrolled students."""

    id: int
    code: str
    name: str
    students: List[GroupStudent] = []


class StudentGroupRead(CamelModel):
    """A group the student belongs to, with its tutor's name."""

    id: int
    code: str
    name: str
    tutor_id: int
    tutor_name: str
