"""
Pydantic schema for alerts.

Alerts are generated by the system (see ``MoodService``) and are read
only through the API.
"""

from typing import Optional

from .common import CamelModel


class AlertRead(CamelModel):
    id: int
    type: str
    severity: str
    message: str
    created_at: str
    student: Optional[str] = None
    student_id: Optional[int] = None
