"""Conversation service - read side of stored conversations."""

from __future__ import annotations

import json

import aiosqlite


async def get_conversations(db: aiosqlite.Connection, agent_id: str) -> list[dict]:
    """List stored conversations for an agent, newest first."""
    cursor = await db.execute(
        "SELECT * FROM conversations WHERE agent_id = ? ORDER BY created_at DESC, rowid DESC",
        (agent_id,),
    )
    rows = await cursor.fetchall()
    return [_row_to_conversation(r) for r in rows]


async def get_conversation(db: aiosqlite.Connection, conversation_id: str) -> dict | None:
    """Get a stored conversation by its remote conversation id."""
    cursor = await db.execute(
        "SELECT * FROM conversations WHERE conversation_id = ?", (conversation_id,)
    )
    row = await cursor.fetchone()
    return _row_to_conversation(row) if row else None


def _row_to_conversation(row: aiosqlite.Row) -> dict:
    data = dict(row)
    for column in ("transcript", "metadata", "analysis"):
        raw = data.pop(f"{column}_json")
        data[column] = json.loads(raw) if raw else None
    return data
