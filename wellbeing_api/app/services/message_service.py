"""
Service layer for direct and group messages.

Messages are append-only.  A message addressed to a user is part of
the conversation between sender and recipient; a message addressed to
a group is listed for that group.  When both recipients are given the
message is stored as given and shows up in both views.
"""

import logging
from typing import List

from wellbeing_api.app.core.db import ConnectionPool
from wellbeing_api.app.core.exceptions import ValidationError
from wellbeing_api.app.schemas.message import MessageCreate, MessageCreated, MessageRead

logger = logging.getLogger(__name__)


class MessageService:
    """Service for sending and listing messages."""

    @classmethod
    async def send(cls, pool: ConnectionPool, data: MessageCreate) -> MessageCreated:
        """Store a message.

        Raises ``ValidationError`` when neither ``to_user_id`` nor
        ``group_id`` is given.
        """
        if not data.to_user_id and not data.group_id:
            raise ValidationError("Either toUserId or groupId is required")
        with pool.connection() as conn:
            cursor = conn.execute(
                "INSERT INTO messages (from_user_id, to_user_id, group_id, body) VALUES (?, ?, ?, ?)",
                (data.from_user_id, data.to_user_id or None, data.group_id or None, data.body),
            )
            message_id = cursor.lastrowid
        logger.info(
            "User %s sent message %s (to user %s, group %s)",
            data.from_user_id,
            message_id,
            data.to_user_id,
            data.group_id,
        )
        return MessageCreated(id=message_id)

    @classmethod
    async def list_for_group(cls, pool: ConnectionPool, group_id: int) -> List[MessageRead]:
        """Return a group's messages, newest first."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, from_user_id, group_id, body, created_at
                FROM messages
                WHERE group_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (group_id,),
            ).fetchall()
        return [
            MessageRead(
                id=row["id"],
                from_user_id=row["from_user_id"],
                group_id=row["group_id"],
                body=row["body"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    @classmethod
    async def list_conversation(cls, pool: ConnectionPool, user_id: int, other_user_id: int) -> List[MessageRead]:
        """Return messages exchanged between two users in either direction, newest first."""
        with pool.connection() as conn:
            rows = conn.execute(
                """
                SELECT id, from_user_id, to_user_id, body, created_at
                FROM messages
                WHERE (from_user_id = ? AND to_user_id = ?)
                   OR (from_user_id = ? AND to_user_id = ?)
                ORDER BY created_at DESC, id DESC
                """,
                (user_id, other_user_id, other_user_id, user_id),
            ).fetchall()
        return [
            MessageRead(
                id=row["id"],
                from_user_id=row["from_user_id"],
                to_user_id=row["to_user_id"],
                body=row["body"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
