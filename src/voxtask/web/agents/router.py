"""Agent routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ..deps import Db, ElevenLabs, get_agent_or_404
from . import service
from .models import AgentCreate, AgentResponse

router = APIRouter(prefix="/api/agents", tags=["agents"])


@router.post("", response_model=AgentResponse, status_code=201)
async def create_agent(body: AgentCreate, db: Db):
    return await service.create_agent(
        db,
        name=body.name,
        elevenlabs_agent_id=body.elevenlabs_agent_id,
        user_id=body.user_id,
        language=body.language,
        model=body.model,
        prompt=body.prompt,
    )


@router.get("", response_model=list[AgentResponse])
async def list_agents(db: Db, user_id: str | None = None):
    return await service.get_agents(db, user_id=user_id)


@router.get("/{agent_id}", response_model=AgentResponse)
async def get_agent(agent_id: str, db: Db):
    return await get_agent_or_404(db, agent_id)


@router.get("/{agent_id}/remote")
async def get_remote_agent(agent_id: str, db: Db, elevenlabs: ElevenLabs) -> dict[str, Any]:
    """Fetch the agent's configuration document from ElevenLabs."""
    agent = await get_agent_or_404(db, agent_id)
    return await elevenlabs.get_agent(agent["elevenlabs_agent_id"])
