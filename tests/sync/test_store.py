"""Tests for ConversationStore against a real SQLite database."""

from __future__ import annotations

import json

import pytest

from conftest import make_detail
from voxtask.errors import NotFound, StoreError
from voxtask.sync.status import TaskStatus
from voxtask.sync.store import ConversationStore


async def _conversation_rows(db, conversation_id: str) -> list:
    cursor = await db.execute(
        "SELECT * FROM conversations WHERE conversation_id = ?", (conversation_id,)
    )
    return await cursor.fetchall()


class TestAgentLookup:
    @pytest.mark.asyncio
    async def test_returns_remote_id(self, db):
        store = ConversationStore(db)
        assert await store.get_agent_remote_id("agent1") == "el-agent-1"

    @pytest.mark.asyncio
    async def test_unknown_agent_raises_not_found(self, db):
        store = ConversationStore(db)
        with pytest.raises(NotFound):
            await store.get_agent_remote_id("nope")

    @pytest.mark.asyncio
    async def test_blank_remote_id_raises_not_found(self, db):
        store = ConversationStore(db)
        with pytest.raises(NotFound, match="ElevenLabs agent ID"):
            await store.get_agent_remote_id("agent_blank")


class TestExistingConversationIds:
    @pytest.mark.asyncio
    async def test_empty_for_new_agent(self, db):
        store = ConversationStore(db)
        assert await store.existing_conversation_ids("agent1") == set()

    @pytest.mark.asyncio
    async def test_scoped_to_agent(self, db):
        store = ConversationStore(db)
        await db.execute(
            "INSERT INTO agents (id, name, elevenlabs_agent_id) VALUES ('agent2', 'Other', 'el-2')"
        )
        await store.insert_conversation("c1", None, "agent1", None, make_detail("done"))
        await store.insert_conversation("c2", None, "agent2", None, make_detail("done"))

        assert await store.existing_conversation_ids("agent1") == {"c1"}
        assert await store.existing_conversation_ids("agent2") == {"c2"}


class TestFindTaskByCallId:
    @pytest.mark.asyncio
    async def test_match(self, db):
        store = ConversationStore(db)
        task = await store.find_task_by_call_id("CA123")
        assert task["id"] == "task1"

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self, db):
        store = ConversationStore(db)
        assert await store.find_task_by_call_id("CA000") is None

    @pytest.mark.asyncio
    async def test_null_call_id_returns_none(self, db):
        store = ConversationStore(db)
        assert await store.find_task_by_call_id(None) is None
        assert await store.find_task_by_call_id("") is None


class TestInsertConversation:
    @pytest.mark.asyncio
    async def test_insert_stores_payloads(self, db):
        store = ConversationStore(db)
        detail = make_detail("done", call_sid="CA123")

        inserted = await store.insert_conversation("c1", "CA123", "agent1", "task1", detail)

        assert inserted is True
        rows = await _conversation_rows(db, "c1")
        assert len(rows) == 1
        row = rows[0]
        assert row["status"] == "done"
        assert row["task_id"] == "task1"
        assert row["call_id"] == "CA123"
        assert json.loads(row["metadata_json"]) == {"phone_call": {"call_sid": "CA123"}}
        assert json.loads(row["transcript_json"]) == [{"role": "agent", "message": "Hello"}]

    @pytest.mark.asyncio
    async def test_duplicate_is_a_no_op(self, db):
        store = ConversationStore(db)

        first = await store.insert_conversation("c1", None, "agent1", None, make_detail("done"))
        second = await store.insert_conversation(
            "c1", None, "agent1", None, make_detail("failed")
        )

        assert first is True
        assert second is False
        rows = await _conversation_rows(db, "c1")
        assert len(rows) == 1
        assert rows[0]["status"] == "done"

    @pytest.mark.asyncio
    async def test_write_failure_raises_store_error(self, db):
        store = ConversationStore(db)
        # Foreign key violation: agent does not exist
        with pytest.raises(StoreError):
            await store.insert_conversation("c1", None, "ghost", None, make_detail("done"))

        assert await _conversation_rows(db, "c1") == []


class TestUpdateTaskStatus:
    @pytest.mark.asyncio
    async def test_done_marks_task_finished(self, db):
        store = ConversationStore(db)
        status = await store.update_task_status("task1", "c1", "done")

        assert status == TaskStatus.FINISHED
        cursor = await db.execute("SELECT * FROM tasks WHERE id = 'task1'")
        task = await cursor.fetchone()
        assert task["status"] == "finished"
        assert task["conversation_id"] == "c1"

    @pytest.mark.asyncio
    async def test_failed_marks_task_failed(self, db):
        store = ConversationStore(db)
        assert await store.update_task_status("task2", "c2", "FAILED") == TaskStatus.FAILED

    @pytest.mark.asyncio
    async def test_missing_task_raises_store_error(self, db):
        store = ConversationStore(db)
        with pytest.raises(StoreError, match="no longer exists"):
            await store.update_task_status("ghost", "c1", "done")
