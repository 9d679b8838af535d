"""Entry point for the Wellbeing API.

Serves the FastAPI application with Uvicorn.  Configuration such as
DATABASE_URL and PORT is read from the environment or from a `.env`
file in the working directory (see ``wellbeing_api.app.core.config``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from wellbeing_api.app.core.config import settings
from wellbeing_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("API listening on port %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
