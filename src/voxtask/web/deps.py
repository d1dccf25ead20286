"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

import aiosqlite
from fastapi import Depends, HTTPException, Request

from ..integrations.elevenlabs import ElevenLabsClient
from .db.database import get_db


async def _get_db() -> aiosqlite.Connection:
    return await get_db()


Db = Annotated[aiosqlite.Connection, Depends(_get_db)]


def get_elevenlabs_client(request: Request) -> ElevenLabsClient:
    """The process-wide ElevenLabs client created at startup."""
    return request.app.state.elevenlabs


ElevenLabs = Annotated[ElevenLabsClient, Depends(get_elevenlabs_client)]


async def get_agent_or_404(db: aiosqlite.Connection, agent_id: str) -> dict:
    """Look up an agent. Raises 404 if not found."""
    cursor = await db.execute("SELECT * FROM agents WHERE id = ?", (agent_id,))
    row = await cursor.fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Agent not found")
    return dict(row)
