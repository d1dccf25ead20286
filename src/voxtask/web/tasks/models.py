"""Task Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ...sync.status import TaskStatus


class TaskCreate(BaseModel):
    agent_id: str = Field(min_length=1)
    to_phone_number: str = Field(min_length=1)
    name: str | None = None


class TaskCallStarted(BaseModel):
    # Telephony call id returned when the outbound call was placed
    call_id: str = Field(min_length=1)


class TaskResponse(BaseModel):
    id: str
    agent_id: str
    name: str | None
    to_phone_number: str
    status: TaskStatus
    call_id: str | None
    conversation_id: str | None
    created_at: str
    updated_at: str
