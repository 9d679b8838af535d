"""
Business logic for absence justifications.

Students submit a justification for a group they belong to; it starts
as ``pending``.  A reviewer (normally the group's tutor) later sets it
to ``approved`` or ``rejected``.  The membership check and the insert
run in one transaction.
"""

import logging
from typing import List, Optional

from wellbeing_api.app.core.db import ConnectionPool, placeholders
from wellbeing_api.app.core.exceptions import NotFoundError, ValidationError
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.justification import JustificationCreate, JustificationRead
from wellbeing_api.app.services.group_service import GroupService

logger = logging.getLogger(__name__)

PENDING = "pending"
REVIEW_STATUSES = ("approved", "rejected", PENDING)


class JustificationService:
    """Service for submitting, listing and reviewing justifications."""

    @classmethod
    async def submit(cls, pool: ConnectionPool, data: JustificationCreate) -> OkResponse:
        """Submit a justification for one of the student's groups.

        Raises ``ValidationError`` when the student is not enrolled in
        ``data.group_id``.
        """
        with pool.connection() as conn:
            membership = conn.execute(
                "SELECT id FROM group_members WHERE student_id = ? AND group_id = ? LIMIT 1",
                (data.student_id, data.group_id),
            ).fetchone()
            if not membership:
                logger.warning(
                    "Student %s tried to justify an absence in group %s without membership",
                    data.student_id,
                    data.group_id,
                )
                raise ValidationError("Student must belong to this group")
            cursor = conn.execute(
                """
                INSERT INTO justifications (student_id, group_id, type, evidence_url, status)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.student_id, data.group_id, data.type, data.evidence_url or None, PENDING),
            )
        logger.info(
            "Student %s submitted justification %s for group %s",
            data.student_id,
            cursor.lastrowid,
            data.group_id,
        )
        return OkResponse()

    @classmethod
    async def list_for_student(cls, pool: ConnectionPool, student_id: int) -> List[JustificationRead]:
        """Return the student's own justifications, newest first."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, group_id, type, evidence_url, status, created_at
                FROM justifications
                WHERE student_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (student_id,),
            ).fetchall()
        return [
            JustificationRead(
                id=row["id"],
                group_id=row["group_id"],
                type=row["type"],
                evidence_url=row["evidence_url"],
                status=row["status"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    @classmethod
    async def list_for_tutor(cls, pool: ConnectionPool, tutor_id: int) -> List[JustificationRead]:
        """Return justifications of every student in the tutor's groups.

        The submitting student's name and ID are attached.  Each
        justification is listed once; a tutor without groups gets an
        empty list.
        """
        with pool.connection() as conn:
            ids = GroupService.tutor_group_ids(conn, tutor_id)
            if not ids:
                return []
            rows = conn.execute(
                f"""
                SELECT j.id, j.group_id, j.type, j.evidence_url, j.status, j.created_at,
                       u.name AS student, u.id AS student_id
                FROM justifications j
                JOIN users u ON u.id = j.student_id
                WHERE j.student_id IN (
                    SELECT gm.student_id FROM group_members gm
                    WHERE gm.group_id IN ({placeholders(len(ids))})
                )
                ORDER BY j.created_at DESC, j.id DESC
                """,
                ids,
            ).fetchall()
        return [
            JustificationRead(
                id=row["id"],
                group_id=row["group_id"],
                type=row["type"],
                evidence_url=row["evidence_url"],
                status=row["status"],
                created_at=row["created_at"],
                student=row["student"],
                student_id=row["student_id"],
            )
            for row in rows
        ]

    @classmethod
    async def review(
        cls,
        pool: ConnectionPool,
        justification_id: int,
        status: Optional[str],
        reviewer_id: Optional[int] = None,
    ) -> OkResponse:
        """Set the review status of a justification.

        ``resolved_at`` is stamped on every review, including a reset to
        ``pending``.  Raises ``ValidationError`` for an unknown status
        and ``NotFoundError`` when the justification does not exist.
        """
        if status not in REVIEW_STATUSES:
            raise ValidationError(f"Invalid status, expected one of: {', '.join(REVIEW_STATUSES)}")
        with pool.connection() as conn:
            cursor = conn.execute(
                """
                UPDATE justifications
                SET status = ?, reviewer_id = ?, resolved_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (status, reviewer_id, justification_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError(f"Justification {justification_id} not found")
        logger.info("Justification %s set to %s by %s", justification_id, status, reviewer_id)
        return OkResponse()
