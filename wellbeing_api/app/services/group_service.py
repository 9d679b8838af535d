"""
Business logic for groups and enrollment.

Tutors own groups; students join a group by its code for a given
term.  A student may be enrolled in a group only once per term, which
the ``group_members`` UNIQUE constraint enforces.
"""

import logging
import sqlite3
from collections import defaultdict
from typing import Dict, List

from wellbeing_api.app.core.db import ConnectionPool, placeholders
from wellbeing_api.app.core.exceptions import ConflictError, NotFoundError
from wellbeing_api.app.schemas.group import (
    GroupCreate,
    GroupCreated,
    GroupJoin,
    GroupJoined,
    GroupStudent,
    StudentGroupRead,
    TutorGroupRead,
)

logger = logging.getLogger(__name__)


class GroupService:
    """Service for managing groups and their members."""

    @staticmethod
    def tutor_group_ids(conn: sqlite3.Connection, tutor_id: int) -> List[int]:
        """IDs of every group owned by ``tutor_id``."""
        rows = conn.execute(
            'SELECT id FROM "groups" WHERE tutor_id = ? ORDER BY id', (tutor_id,)
        ).fetchall()
        return [row["id"] for row in rows]

    @classmethod
    async def create_group(cls, pool: ConnectionPool, data: GroupCreate) -> GroupCreated:
        """Create a group owned by ``data.tutor_id``.

        Raises ``ConflictError`` if a group with the same code exists.
        Codes are compared case-sensitively.
        """
        try:
            with pool.connection() as conn:
                exists = conn.execute(
                    'SELECT id FROM "groups" WHERE code = ?', (data.code,)
                ).fetchone()
                if exists:
                    raise ConflictError()
                cursor = conn.execute(
                    'INSERT INTO "groups" (code, name, tutor_id, term) VALUES (?, ?, ?, ?)',
                    (data.code, data.name, data.tutor_id, data.term),
                )
                group_id = cursor.lastrowid
        except ConflictError:
            logger.warning("Group code %s already exists", data.code)
            raise ConflictError("Group code already exists") from None
        logger.info("Tutor %s created group %s (%s)", data.tutor_id, group_id, data.code)
        return GroupCreated(id=group_id, code=data.code, name=data.name)

    @classmethod
    async def join_group(cls, pool: ConnectionPool, data: GroupJoin) -> GroupJoined:
        """Enroll a student in the group identified by ``data.group_code``.

        Raises ``NotFoundError`` for an unknown code and ``ConflictError``
        when the student is already enrolled for that term.
        """
        try:
            with pool.connection() as conn:
                group = conn.execute(
                    'SELECT id FROM "groups" WHERE code = ?', (data.group_code,)
                ).fetchone()
                if not group:
                    raise NotFoundError("Group not found")
                conn.execute(
                    "INSERT INTO group_members (group_id, student_id, term) VALUES (?, ?, ?)",
                    (group["id"], data.student_id, data.term),
                )
        except ConflictError:
            logger.warning(
                "Student %s already enrolled in %s for term %s",
                data.student_id,
                data.group_code,
                data.term,
            )
            raise ConflictError("Already enrolled in this group for this term") from None
        logger.info("Student %s joined group %s", data.student_id, group["id"])
        return GroupJoined(group_id=group["id"])

    @classmethod
    async def list_for_tutor(cls, pool: ConnectionPool, tutor_id: int) -> List[TutorGroupRead]:
        """List a tutor's groups, each with its enrolled students.

        Members of all groups are fetched in a single batched query and
        then distributed to their groups here.
        """
        with pool.connection() as conn:
            groups = conn.execute(
                'SELECT id, code, name FROM "groups" WHERE tutor_id = ? ORDER BY id',
                (tutor_id,),
            ).fetchall()
            ids = [g["id"] for g in groups]
            members: List[sqlite3.Row] = []
            if ids:
                members = conn.execute(
                    f"""
                    SELECT gm.group_id, u.id AS student_id, u.name
                    FROM group_members gm
                    JOIN users u ON u.id = gm.student_id
                    WHERE gm.group_id IN ({placeholders(len(ids))})
                    """,
                    ids,
                ).fetchall()

        students: Dict[int, List[GroupStudent]] = defaultdict(list)
        for m in members:
            students[m["group_id"]].append(GroupStudent(id=m["student_id"], name=m["name"]))
        return [
            TutorGroupRead(id=g["id"], code=g["code"], name=g["name"], students=students[g["id"]])
            for g in groups
        ]

    @classmethod
    async def list_for_student(cls, pool: ConnectionPool, student_id: int) -> List[StudentGroupRead]:
        """List the groups a student belongs to, one row per membership."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT g.id, g.code, g.name, g.tutor_id, u.name AS tutor_name
                FROM "groups" g
                JOIN group_members gm ON gm.group_id = g.id
                JOIN users u ON u.id = g.tutor_id
                WHERE gm.student_id = ?
                ORDER BY gm.id
                """,
                (student_id,),
            ).fetchall()
        return [
            StudentGroupRead(
                id=row["id"],
                code=row["code"],
                name=row["name"],
                tutor_id=row["tutor_id"],
                tutor_name=row["tutor_name"],
            )
            for row in rows
        ]
