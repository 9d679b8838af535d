"""
Main entrypoint for the Wellbeing API.

This module assembles the FastAPI application: logging, CORS, the
store connection pool, error rendering and the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app`` so it can be served
with::

    uvicorn wellbeing_api.app.main:app --reload

Errors are rendered as ``{"error": <message>}``.  Request validation
failures are reported as 400 rather than FastAPI's default 422.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import ConnectionPool, get_database_path, init_db
from .core.exceptions import WellbeingAPIException
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Location parts FastAPI prepends to validation error locations.
_LOCATION_KINDS = {"body", "query", "path", "header"}


def _invalid_fields(exc: RequestValidationError) -> list[str]:
    fields = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            continue
        loc = error.get("loc", ())
        # Only the leading part is a location kind.
        parts = loc[1:] if loc and loc[0] in _LOCATION_KINDS else loc
        name = ".".join(str(part) for part in parts)
        if name and name not in fields:
            fields.append(name)
    return fields


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the environment-derived defaults.
        Tests pass their own to point the app at a temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The connection pool
        is available as ``app.state.pool``; migrations run at startup.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    pool = ConnectionPool(
        get_database_path(app_settings.database_url),
        max_size=app_settings.db_pool_size,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(pool)
        logger.info("Store ready at %s", pool.database_path)
        yield
        pool.close()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.pool = pool

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(WellbeingAPIException)
    async def handle_api_error(request: Request, exc: WellbeingAPIException) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed [%s]: %s", request.method, request.url.path, exc.error_code, exc.detail
            )
        else:
            logger.info("%s %s rejected [%s]: %s", request.method, request.url.path, exc.error_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = _invalid_fields(exc)
        message = "Missing or invalid fields: " + ", ".join(fields) if fields else "Invalid request body"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    app.include_router(v1_router, prefix=app_settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
