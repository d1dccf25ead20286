"""Agent Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AgentCreate(BaseModel):
    name: str = Field(min_length=1)
    # Id of an agent that already exists on ElevenLabs
    elevenlabs_agent_id: str = Field(min_length=1)
    user_id: str = ""
    language: str | None = None
    model: str | None = None
    prompt: str | None = None


class AgentResponse(BaseModel):
    id: str
    user_id: str
    name: str
    elevenlabs_agent_id: str
    language: str | None
    model: str | None
    prompt: str | None
    created_at: str
    updated_at: str
