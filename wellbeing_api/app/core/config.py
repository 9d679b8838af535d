"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first so local deployments can keep their connection string and
port next to the code.  Defaults are provided for all fields.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Wellbeing API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Routes are mounted at the root by default so existing clients keep
    # calling ``/mood``, ``/groups`` and so on.  Set e.g. ``/api/v1`` to
    # mount them under a versioned prefix instead.
    api_prefix: str = os.getenv("API_PREFIX", "")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the SQLite database.  Accepts a plain
    # path or a ``sqlite:///path`` URL.  Relative paths are resolved
    # against the working directory by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "wellbeing.db")

    # Maximum number of simultaneously open store connections.  Callers
    # block until a connection frees up once the limit is reached.
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))

    # Comma-separated list of allowed CORS origins ("*" allows any).
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
