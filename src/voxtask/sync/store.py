"""Local persistence for conversation sync."""

from __future__ import annotations

import contextlib
import json
import logging
from typing import Any

import aiosqlite

from ..errors import NotFound, StoreError
from ..integrations.elevenlabs.models import ConversationDetail
from .status import TaskStatus, map_remote_status

logger = logging.getLogger(__name__)


class ConversationStore:
    """Reads and writes the conversation and task tables for one sync run.

    Database errors surface as StoreError; a missing agent surfaces as
    NotFound. Conversation inserts are idempotent: the UNIQUE constraint on
    ``conversations.conversation_id`` turns a duplicate into a no-op.
    """

    def __init__(self, db: aiosqlite.Connection):
        self._db = db

    async def get_agent_remote_id(self, agent_id: str) -> str:
        """Resolve a local agent id to its ElevenLabs agent id."""
        try:
            cursor = await self._db.execute(
                "SELECT elevenlabs_agent_id FROM agents WHERE id = ?", (agent_id,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to load agent {agent_id}", detail=str(e)) from e

        if row is None:
            raise NotFound(f"Agent {agent_id} not found")
        if not row["elevenlabs_agent_id"]:
            raise NotFound(f"Could not find ElevenLabs agent ID for agent {agent_id}")
        return row["elevenlabs_agent_id"]

    async def existing_conversation_ids(self, agent_id: str) -> set[str]:
        """Remote conversation ids already stored for an agent."""
        try:
            cursor = await self._db.execute(
                "SELECT conversation_id FROM conversations WHERE agent_id = ?", (agent_id,)
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StoreError(
                f"Failed to load conversations for agent {agent_id}", detail=str(e)
            ) from e
        return {row["conversation_id"] for row in rows}

    async def find_task_by_call_id(self, call_id: str | None) -> dict | None:
        """Return the task with this call id, or None if there is none."""
        if not call_id:
            return None
        try:
            cursor = await self._db.execute(
                """SELECT * FROM tasks WHERE call_id = ?
                   ORDER BY created_at DESC LIMIT 1""",
                (call_id,),
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StoreError(f"Failed to look up task for call {call_id}", detail=str(e)) from e
        return dict(row) if row else None

    async def insert_conversation(
        self,
        conversation_id: str,
        call_id: str | None,
        agent_id: str,
        task_id: str | None,
        detail: ConversationDetail,
    ) -> bool:
        """Store a conversation.

        Returns True if a row was written, False if the conversation was
        already stored.
        """
        try:
            cursor = await self._db.execute(
                """INSERT INTO conversations (conversation_id, call_id, agent_id, task_id,
                   status, transcript_json, metadata_json, analysis_json)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(conversation_id) DO NOTHING""",
                (
                    conversation_id,
                    call_id,
                    agent_id,
                    task_id,
                    detail.status,
                    _dump(detail.transcript),
                    _dump(detail.metadata),
                    _dump(detail.analysis),
                ),
            )
            inserted = cursor.rowcount > 0
            await self._db.commit()
        except (aiosqlite.Error, TypeError, ValueError) as e:
            await self._rollback()
            raise StoreError(
                f"Failed to insert conversation {conversation_id}", detail=str(e)
            ) from e

        if not inserted:
            logger.info("Conversation %s already stored, insert skipped", conversation_id)
        return inserted

    async def update_task_status(
        self,
        task_id: str,
        conversation_id: str,
        remote_status: str,
    ) -> TaskStatus:
        """Link a task to its conversation and set the mapped status."""
        status = map_remote_status(remote_status)
        try:
            cursor = await self._db.execute(
                """UPDATE tasks SET conversation_id = ?, status = ?,
                   updated_at = CURRENT_TIMESTAMP WHERE id = ?""",
                (conversation_id, status.value, task_id),
            )
            updated = cursor.rowcount
            await self._db.commit()
        except aiosqlite.Error as e:
            await self._rollback()
            raise StoreError(f"Failed to update task {task_id}", detail=str(e)) from e

        if updated == 0:
            raise StoreError(f"Task {task_id} no longer exists")
        return status

    async def _rollback(self) -> None:
        with contextlib.suppress(aiosqlite.Error):
            await self._db.rollback()


def _dump(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value)
