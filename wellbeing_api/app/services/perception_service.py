"""
Business logic for weekly subject perceptions.

Each entry is keyed by the Monday of the week it refers to, so any day
of a week identifies the same entry.
"""

import logging
from typing import List

from wellbeing_api.app.core.dates import parse_calendar_date, week_start
from wellbeing_api.app.core.db import ConnectionPool
from wellbeing_api.app.core.exceptions import ConflictError
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.perception import PerceptionCreate, PerceptionRead

logger = logging.getLogger(__name__)


class PerceptionService:

    @classmethod
    async def submit_perception(cls, pool: ConnectionPool, data: PerceptionCreate) -> OkResponse:
        """Record how a student felt about a subject during a week.

        Raises ``ConflictError`` when the student already recorded the
        subject for that week.
        """
        monday = week_start(parse_calendar_date(data.week_start)).isoformat()
        try:
            with pool.connection() as conn:
                conn.execute(
                    """
                    INSERT INTO weekly_perceptions (student_id, subject, week_start, emotion, notes)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (data.student_id, data.subject, monday, data.emotion, data.notes or None),
                )
        except ConflictError:
            logger.warning(
                "Student %s already recorded %s for the week of %s",
                data.student_id,
                data.subject,
                monday,
            )
            raise ConflictError("Subject already recorded for this week") from None
        logger.info("Student %s recorded %s for the week of %s", data.student_id, data.subject, monday)
        return OkResponse()

    @classmethod
    async def history(cls, pool: ConnectionPool, student_id: int) -> List[PerceptionRead]:
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, subject, week_start, emotion, notes
                FROM weekly_perceptions
                WHERE student_id = ?
                ORDER BY week_start DESC, id DESC
                """,
                (student_id,),
            ).fetchall()
        return [
            PerceptionRead(
                id=row["id"],
                subject=row["subject"],
                week_start=row["week_start"],
                emotion=row["emotion"],
                notes=row["notes"],
            )
            for row in rows
        ]
