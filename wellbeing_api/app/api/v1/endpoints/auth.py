"""
Authentication endpoints for API v1.

Registration and a credential check.  No session or token is issued;
clients keep the returned user projection.
"""

from fastapi import APIRouter, Depends

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.schemas.user import UserCreate, UserLogin, UserRead
from wellbeing_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserRead)
async def register(data: UserCreate, pool: ConnectionPool = Depends(get_pool)) -> UserRead:
    """Register a tutor or student.  Returns 409 if the email is taken."""
    return await UserService.register(pool, data)


@router.post("/login", response_model=UserRead)
async def login(data: UserLogin, pool: ConnectionPool = Depends(get_pool)) -> UserRead:
    """Check credentials and return the user.  Returns 401 on mismatch."""
    return await UserService.authenticate(pool, data.email, data.password)
