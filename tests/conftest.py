"""Shared fixtures: a seeded SQLite database and detail payload helpers."""

from __future__ import annotations

import aiosqlite
import pytest_asyncio

from voxtask.integrations.elevenlabs.models import ConversationDetail
from voxtask.web.db.database import SCHEMA_PATH


@pytest_asyncio.fixture
async def db(tmp_path):
    """Create a test database with the full schema and a few records."""
    db_path = str(tmp_path / "test.db")
    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await conn.execute("PRAGMA foreign_keys=ON")

    await conn.executescript(SCHEMA_PATH.read_text())
    await conn.commit()

    await conn.execute(
        "INSERT INTO agents (id, user_id, name, elevenlabs_agent_id) VALUES (?, ?, ?, ?)",
        ("agent1", "user1", "Support Bot", "el-agent-1"),
    )
    # Agent whose remote id was never filled in
    await conn.execute(
        "INSERT INTO agents (id, user_id, name, elevenlabs_agent_id) VALUES (?, ?, ?, ?)",
        ("agent_blank", "user1", "Draft Bot", ""),
    )
    await conn.execute(
        """INSERT INTO tasks (id, agent_id, name, to_phone_number, status, call_id)
           VALUES (?, ?, ?, ?, ?, ?)""",
        ("task1", "agent1", "Call Alice", "+15550001", "processing", "CA123"),
    )
    await conn.execute(
        """INSERT INTO tasks (id, agent_id, name, to_phone_number, status, call_id)
           VALUES (?, ?, ?, ?, ?, ?)""",
        ("task2", "agent1", "Call Bob", "+15550002", "processing", "CA456"),
    )
    await conn.execute(
        """INSERT INTO tasks (id, agent_id, to_phone_number, status)
           VALUES (?, ?, ?, ?)""",
        ("task_idle", "agent1", "+15550003", "idle"),
    )
    await conn.commit()

    yield conn

    await conn.close()


def make_detail(status: str, call_sid: str | None = None, **extra) -> ConversationDetail:
    """Build a conversation detail the way the API would return it."""
    metadata = {"phone_call": {"call_sid": call_sid}} if call_sid else {}
    return ConversationDetail.from_api_response(
        {
            "status": status,
            "transcript": extra.get("transcript", [{"role": "agent", "message": "Hello"}]),
            "metadata": metadata,
            "analysis": extra.get("analysis", {"call_successful": "success"}),
        }
    )
