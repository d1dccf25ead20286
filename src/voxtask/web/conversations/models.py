"""Conversation Pydantic models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ...sync.reconciler import SyncResult


class SyncRequest(BaseModel):
    # Local agent id
    agent_id: str = Field(min_length=1)


class SyncFailureResponse(BaseModel):
    conversation_id: str
    error: str


class SyncResponse(BaseModel):
    success: bool = True
    message: str
    new_conversations: list[str] = Field(serialization_alias="newConversations")
    skipped: list[str] = []
    failed: list[SyncFailureResponse] = []

    @classmethod
    def from_result(cls, result: SyncResult) -> SyncResponse:
        return cls(
            message=result.message,
            new_conversations=result.new_conversations,
            skipped=result.skipped,
            failed=[SyncFailureResponse(**f.to_dict()) for f in result.failed],
        )


class ConversationResponse(BaseModel):
    id: str
    conversation_id: str
    call_id: str | None
    agent_id: str
    task_id: str | None
    status: str
    transcript: Any = None
    metadata: Any = None
    analysis: Any = None
    created_at: str
    updated_at: str
