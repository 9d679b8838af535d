"""
Liveness probe.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wellbeing_api.app.core.db import ConnectionPool, get_pool
from wellbeing_api.app.core.exceptions import StoreError

router = APIRouter()


@router.get("/health")
async def health(pool: ConnectionPool = Depends(get_pool)):
    """Run a trivial query against the store and report whether it answered."""
    try:
        with pool.connection() as conn:
            row = conn.execute("SELECT 1 AS ok").fetchone()
    except StoreError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"ok": False, "error": e.detail},
        )
    return {"ok": row["ok"] == 1}
