"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under their path prefixes.
When new endpoints are added or new domains are introduced, update
this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import (
    alerts,
    auth,
    groups,
    health,
    justifications,
    messages,
    mood,
    perception,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(groups.router, prefix="/groups", tags=["groups"])
router.include_router(mood.router, prefix="/mood", tags=["mood"])
router.include_router(perception.router, prefix="/perception", tags=["perception"])
router.include_router(justifications.router, prefix="/justifications", tags=["justifications"])
router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
router.include_router(messages.router, prefix="/messages", tags=["messages"])
# The health router defines its own "/health" path.
router.include_router(health.router, tags=["health"])
