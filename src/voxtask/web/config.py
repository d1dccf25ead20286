"""Web server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class WebConfig:
    """Configuration for the web server."""

    host: str = "0.0.0.0"
    port: int = 8000
    db_path: str = ".voxtask/voxtask.db"
    cors_origins: list[str] | None = None
    debug: bool = False

    @classmethod
    def load(cls) -> WebConfig:
        config = cls()
        config.host = os.environ.get("VOXTASK_HOST", config.host)
        config.port = int(os.environ.get("VOXTASK_PORT", config.port))
        config.db_path = os.environ.get("VOXTASK_DB_PATH", config.db_path)
        config.debug = os.environ.get("VOXTASK_DEBUG", "").lower() in ("1", "true")
        origins = os.environ.get("VOXTASK_CORS_ORIGINS")
        if origins:
            config.cors_origins = [o.strip() for o in origins.split(",")]
        return config
