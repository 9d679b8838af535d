"""
Business logic for daily mood logs.

A student logs at most one mood per calendar day.  Reporting a low
mood (``mal`` or ``muyMal``) raises an alert for the student's tutors
in the same transaction as the log itself, so a log is never stored
without its alert.
"""

import logging
from typing import List

from wellbeing_api.app.core.dates import parse_calendar_date
from wellbeing_api.app.core.db import ConnectionPool
from wellbeing_api.app.core.exceptions import ConflictError
from wellbeing_api.app.schemas.common import OkResponse
from wellbeing_api.app.schemas.mood import MoodCreate, MoodRead
from wellbeing_api.app.services.alert_service import AlertService

logger = logging.getLogger(__name__)

# Mood value -> alert severity.  Moods not listed raise no alert.
LOW_MOOD_SEVERITY = {
    "muyMal": "high",
    "mal": "medium",
}
MOOD_ALERT_TYPE = "mood"
MOOD_ALERT_MESSAGE = "Ánimo bajo reportado"


class MoodService:
    """Service for submitting and reading mood logs."""

    @classmethod
    async def submit_mood(cls, pool: ConnectionPool, data: MoodCreate) -> OkResponse:
        """Store today's (or ``logged_date``'s) mood for a student.

        Raises ``ValidationError`` for an unparsable date and
        ``ConflictError`` if the student already logged that day.
        """
        logged_date = parse_calendar_date(data.logged_date).isoformat()
        severity = LOW_MOOD_SEVERITY.get(data.mood)
        try:
            with pool.connection() as conn:
                conn.execute(
                    "INSERT INTO mood_logs (student_id, logged_date, mood, note) VALUES (?, ?, ?, ?)",
                    (data.student_id, logged_date, data.mood, data.note or None),
                )
                if severity:
                    AlertService.record(
                        conn, data.student_id, MOOD_ALERT_TYPE, severity, MOOD_ALERT_MESSAGE
                    )
        except ConflictError:
            logger.warning("Student %s already logged a mood on %s", data.student_id, logged_date)
            raise ConflictError("Mood already logged for this date") from None
        logger.info("Student %s logged mood %s on %s", data.student_id, data.mood, logged_date)
        return OkResponse()

    @classmethod
    async def history(cls, pool: ConnectionPool, student_id: int) -> List[MoodRead]:
        """Return all of a student's mood logs, most recent date first."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, mood, note, logged_date
                FROM mood_logs
                WHERE student_id = ?
                ORDER BY logged_date DESC
                """,
                (student_id,),
            ).fetchall()
        return [
            MoodRead(id=row["id"], mood=row["mood"], note=row["note"], logged_date=row["logged_date"])
            for row in rows
        ]
