"""Conversation reconciliation.

Pulls an agent's conversation list from the voice platform, diffs it
against what is already stored, and persists every new conversation that
has reached a terminal status:

    1. Resolve the agent's remote id              (fatal: NotFound)
    2. Load stored conversation ids               (fatal: StoreError)
    3. Fetch the remote conversation list         (fatal: RemoteUnavailable)
    4. For each unseen conversation, one at a time:
         fetch detail -> keep done/failed only -> find task by call id
         -> insert conversation -> update task status

Failures in step 4 only affect the conversation being processed. A
conversation that is still running, or whose fetch or insert failed, stays
out of the store and is picked up again on the next run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from ..errors import RemoteUnavailable, StoreError
from ..integrations.elevenlabs.models import ConversationDetail, ConversationSummary
from .status import is_terminal
from .store import ConversationStore

logger = logging.getLogger(__name__)


class ConversationSource(Protocol):
    """Remote side of the sync (ElevenLabsClient in production)."""

    async def list_conversations(self, remote_agent_id: str) -> list[ConversationSummary]: ...

    async def get_conversation_detail(self, conversation_id: str) -> ConversationDetail: ...


@dataclass
class SyncFailure:
    conversation_id: str
    error: str

    def to_dict(self) -> dict[str, str]:
        return {"conversation_id": self.conversation_id, "error": self.error}


@dataclass
class SyncResult:
    """Outcome of one reconciliation run."""

    agent_id: str
    new_conversations: list[str] = field(default_factory=list)
    # Unseen conversations that are not finished yet
    skipped: list[str] = field(default_factory=list)
    failed: list[SyncFailure] = field(default_factory=list)

    @property
    def message(self) -> str:
        return f"Synced {len(self.new_conversations)} new conversations"


class ConversationReconciler:
    """Runs the diff-fetch-classify-persist cycle for one agent at a time."""

    def __init__(self, store: ConversationStore, source: ConversationSource):
        self.store = store
        self.source = source

    async def reconcile(self, agent_id: str) -> SyncResult:
        """Sync conversations for a local agent.

        Raises:
            NotFound: The agent or its remote id is missing.
            RemoteUnavailable: The conversation list could not be fetched.
            StoreError: Stored conversation ids could not be read.
        """
        remote_agent_id = await self.store.get_agent_remote_id(agent_id)
        logger.info("Syncing conversations for agent %s (remote %s)", agent_id, remote_agent_id)

        existing_ids = await self.store.existing_conversation_ids(agent_id)
        logger.info("Found %d existing conversations in database", len(existing_ids))

        remote = await self.source.list_conversations(remote_agent_id)
        logger.info("Received %d conversations from ElevenLabs", len(remote))

        result = SyncResult(agent_id=agent_id)
        seen: set[str] = set()
        for summary in remote:
            conversation_id = summary.conversation_id
            if conversation_id in existing_ids or conversation_id in seen:
                logger.debug("Conversation %s already stored, skipping", conversation_id)
                continue
            seen.add(conversation_id)
            try:
                await self._process(agent_id, conversation_id, result)
            except Exception as e:
                logger.exception("Unexpected error syncing conversation %s", conversation_id)
                result.failed.append(SyncFailure(conversation_id, str(e) or type(e).__name__))

        logger.info(
            "Sync for agent %s finished: %d new, %d skipped, %d failed",
            agent_id,
            len(result.new_conversations),
            len(result.skipped),
            len(result.failed),
        )
        return result

    async def _process(self, agent_id: str, conversation_id: str, result: SyncResult) -> None:
        """Handle one unseen conversation.

        Remote and store errors are recorded on ``result``. Anything else
        propagates to ``reconcile``, which records it the same way.
        """
        try:
            detail = await self.source.get_conversation_detail(conversation_id)
        except RemoteUnavailable as e:
            logger.warning(
                "Error fetching details for conversation %s: %s", conversation_id, e.message
            )
            result.failed.append(SyncFailure(conversation_id, e.message))
            return

        if not is_terminal(detail.status):
            logger.info(
                "Skipping conversation %s with status: %s",
                conversation_id,
                detail.normalized_status,
            )
            result.skipped.append(conversation_id)
            return

        call_id = detail.call_sid
        try:
            task = await self.store.find_task_by_call_id(call_id)
            task_id = task["id"] if task else None
            inserted = await self.store.insert_conversation(
                conversation_id, call_id, agent_id, task_id, detail
            )
        except StoreError as e:
            logger.warning("Error storing conversation %s: %s", conversation_id, e.message)
            result.failed.append(SyncFailure(conversation_id, e.message))
            return

        if not inserted:
            # Stored by a concurrent run after our existing-id check.
            return

        logger.info(
            "Inserted conversation %s (call %s, task %s)",
            conversation_id,
            call_id or "none",
            task_id or "none",
        )
        result.new_conversations.append(conversation_id)

        if task_id:
            try:
                task_status = await self.store.update_task_status(
                    task_id, conversation_id, detail.normalized_status
                )
            except StoreError as e:
                logger.warning(
                    "Conversation %s stored but task %s was not updated: %s",
                    conversation_id,
                    task_id,
                    e.message,
                )
                result.failed.append(SyncFailure(conversation_id, e.message))
                return
            logger.info(
                "Updated task %s with conversation %s and status %s",
                task_id,
                conversation_id,
                task_status,
            )
