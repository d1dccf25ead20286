"""FastAPI app factory."""

from __future__ import annotations

import logging
import traceback
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..errors import ConfigError, NotFound, RemoteUnavailable, StoreError, VoxtaskError
from ..integrations.elevenlabs import ElevenLabsClient, ElevenLabsConfig
from .config import WebConfig

logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[VoxtaskError], int] = {
    NotFound: 404,
    RemoteUnavailable: 502,
    ConfigError: 500,
    StoreError: 500,
}

# Routes that report bad request bodies in the same shape as sync failures
_ERROR_BODY_PATHS = {
    "/api/conversations/sync",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """App lifespan: check credentials, init DB, create the ElevenLabs client."""
    config = WebConfig.load()

    # Fail fast before serving anything if the API key is missing.
    elevenlabs_config = ElevenLabsConfig.load()
    elevenlabs_config.require_configured()

    from .db.database import close_db, init_db

    await init_db(config.db_path)
    app.state.elevenlabs = ElevenLabsClient(elevenlabs_config)

    yield

    await app.state.elevenlabs.close()
    await close_db()


def _error_body(exc: Exception, message: str | None = None) -> dict:
    return {
        "error": message or str(exc),
        "stack": "".join(traceback.format_exception(exc)),
        "time": datetime.now(tz=UTC).isoformat(),
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = WebConfig.load()

    app = FastAPI(
        title="voxtask",
        description="Voice agent call tasks with ElevenLabs conversation sync",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS
    origins = config.cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    from .agents.router import router as agents_router
    from .conversations.router import router as conversations_router
    from .tasks.router import router as tasks_router

    app.include_router(agents_router)
    app.include_router(conversations_router)
    app.include_router(tasks_router)

    # Error handlers
    @app.exception_handler(VoxtaskError)
    async def voxtask_error_handler(request: Request, exc: VoxtaskError):
        status_code = _ERROR_STATUS.get(type(exc), 500)
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        if request.url.path not in _ERROR_BODY_PATHS:
            return await request_validation_exception_handler(request, exc)
        fields = ", ".join(str(err["loc"][-1]) for err in exc.errors() if err.get("loc"))
        message = f"Missing {fields} parameter" if fields else "Invalid request body"
        logger.error("%s %s rejected: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=400, content=_error_body(exc, message))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app
