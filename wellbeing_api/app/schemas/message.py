"""
Pydantic schemas for direct and group messages.
"""

from typing import Optional

from pydantic import Field

from .common import CamelModel


class MessageCreate(CamelModel):
    """Schema for sending a message.

    At least one of ``to_user_id`` (direct message) or ``group_id``
    (group broadcast) must be given; the service enforces this.
    """

    from_user_id: int = Field(..., gt=0)
    body: str = Field(..., min_length=1)
    to_user_id: Optional[int] = None
    group_id: Optional[int] = None


class MessageCreated(CamelModel):
    id: int


class MessageRead(CamelModel):
    id: int
    from_user_id: int
    to_user_id: Optional[int] = None
    group_id: Optional[int] = None
    body: str
    created_at: str
