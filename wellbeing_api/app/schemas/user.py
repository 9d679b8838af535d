"""
Pydantic models for user data.

Defines schemas for registering, authenticating and reading users.
Passwords are accepted on input only and never returned.
"""

from typing import Literal

from pydantic import Field

from .common import CamelModel

Role = Literal["tutor", "student"]


class UserCreate(CamelModel):
    """Schema for registering a user."""

    role: Role = Field(..., examples=["student"])
    name: str = Field(..., min_length=1, examples=["Ana López"])
    email: str = Field(..., min_length=1, examples=["ana@example.com"])
    password: str = Field(..., min_length=1, examples=["secret"])


class UserLogin(CamelModel):
    """Credentials for ``POST /auth/login``."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(CamelModel):
    """Public projection of a user."""

    id: int
    role: str
    name: str
    email: str
