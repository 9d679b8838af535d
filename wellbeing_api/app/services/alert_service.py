"""
Business logic for alerts.

Alerts are never submitted by clients.  They are recorded by other
services (currently ``MoodService`` on a low mood) inside the caller's
transaction through ``record``, and read back either per student or
aggregated over every student enrolled in a tutor's groups.
"""

import logging
import sqlite3
from typing import List

from wellbeing_api.app.core.db import ConnectionPool, placeholders
from wellbeing_api.app.schemas.alert import AlertRead
from wellbeing_api.app.services.group_service import GroupService

logger = logging.getLogger(__name__)


class AlertService:
    """Service for recording and listing alerts."""

    @staticmethod
    def record(
        conn: sqlite3.Connection,
        student_id: int,
        alert_type: str,
        severity: str,
        message: str,
    ) -> int:
        """Insert an alert using the caller's connection and return its ID."""
        cursor = conn.execute(
            "INSERT INTO alerts (student_id, type, severity, message) VALUES (?, ?, ?, ?)",
            (student_id, alert_type, severity, message),
        )
        logger.info("Raised %s %s alert %s for student %s", severity, alert_type, cursor.lastrowid, student_id)
        return cursor.lastrowid

    @classmethod
    async def list_for_student(cls, pool: ConnectionPool, student_id: int) -> List[AlertRead]:
        """Return the student's alerts, newest first."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, type, severity, message, created_at
                FROM alerts
                WHERE student_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (student_id,),
            ).fetchall()
        return [
            AlertRead(
                id=row["id"],
                type=row["type"],
                severity=row["severity"],
                message=row["message"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    @classmethod
    async def list_for_tutor(cls, pool: ConnectionPool, tutor_id: int) -> List[AlertRead]:
        """Return alerts of every student enrolled in one of the tutor's groups.

        Each alert appears once even when the student belongs to several
        of the tutor's groups.  A tutor without groups gets an empty list.
        """
        with pool.connection() as conn:
            ids = GroupService.tutor_group_ids(conn, tutor_id)
            if not ids:
                return []
            rows = conn.execute(
                f"""
                SELECT a.id, a.type, a.severity, a.message, a.created_at,
                       u.name AS student, u.id AS student_id
                FROM alerts a
                JOIN users u ON u.id = a.student_id
                WHERE a.student_id IN (
                    SELECT gm.student_id FROM group_members gm
                    WHERE gm.group_id IN ({placeholders(len(ids))})
                )
                ORDER BY a.created_at DESC, a.id DESC
                """,
                ids,
            ).fetchall()
        return [
            AlertRead(
                id=row["id"],
                type=row["type"],
                severity=row["severity"],
                message=row["message"],
                created_at=row["created_at"],
                student=row["student"],
                student_id=row["student_id"],
            )
            for row in rows
        ]
