"""Conversation routes: sync from ElevenLabs and read stored conversations."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ...sync import ConversationReconciler, ConversationStore
from ..deps import Db, ElevenLabs
from . import service
from .models import ConversationResponse, SyncRequest, SyncResponse

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.post("/sync", response_model=SyncResponse)
async def sync_conversations(body: SyncRequest, db: Db, elevenlabs: ElevenLabs):
    """Pull new finished conversations for an agent and link them to tasks."""
    reconciler = ConversationReconciler(ConversationStore(db), elevenlabs)
    result = await reconciler.reconcile(body.agent_id)
    return SyncResponse.from_result(result)


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(agent_id: str, db: Db):
    return await service.get_conversations(db, agent_id)


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(conversation_id: str, db: Db):
    conversation = await service.get_conversation(db, conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation
