"""
Message endpoints for API v1.

Polling-style messaging: clients post messages and fetch a group's
feed or a two-person conversation.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.core.exceptions import ValidationError
from wellbeing_api.app.schemas.message import MessageCreate, MessageCreated, MessageRead
from wellbeing_api.app.services.message_service import MessageService

router = APIRouter()


@router.post("", response_model=MessageCreated)
async def send_message(data: MessageCreate, pool: ConnectionPool = Depends(get_pool)) -> MessageCreated:
    """Send a direct (``toUserId``) or group (``groupId``) message."""
    return await MessageService.send(pool, data)


@router.get("", response_model=List[MessageRead], response_model_exclude_unset=True)
async def list_messages(
    group_id: Optional[int] = Query(None, alias="groupId"),
    from_user_id: Optional[int] = Query(None, alias="fromUserId"),
    to_user_id: Optional[int] = Query(None, alias="toUserId"),
    pool: ConnectionPool = Depends(get_pool),
) -> List[MessageRead]:
    """List a group's messages, or the conversation between two users.

    ``groupId`` takes precedence over the ``fromUserId``/``toUserId`` pair.
    """
    if group_id is not None:
        return await MessageService.list_for_group(pool, group_id)
    if from_user_id is not None and to_user_id is not None:
        return await MessageService.list_conversation(pool, from_user_id, to_user_id)
    raise ValidationError("Provide groupId or both fromUserId and toUserId")
