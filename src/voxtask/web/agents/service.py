"""Agent service - business logic."""

from __future__ import annotations

import secrets

import aiosqlite


async def create_agent(
    db: aiosqlite.Connection,
    name: str,
    elevenlabs_agent_id: str,
    user_id: str = "",
    language: str | None = None,
    model: str | None = None,
    prompt: str | None = None,
) -> dict:
    """Register a local agent pointing at an existing ElevenLabs agent."""
    agent_id = secrets.token_hex(8)
    await db.execute(
        """INSERT INTO agents (id, user_id, name, elevenlabs_agent_id, language, model, prompt)
           VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (agent_id, user_id, name, elevenlabs_agent_id, language, model, prompt),
    )
    await db.commit()
    return await get_agent(db, agent_id)


async def get_agents(db: aiosqlite.Connection, user_id: str | None = None) -> list[dict]:
    """List agents, newest first."""
    if user_id:
        cursor = await db.execute(
            "SELECT * FROM agents WHERE user_id = ? ORDER BY created_at DESC", (user_id,)
        )
    else:
        cursor = await db.execute("SELECT * FROM agents ORDER BY created_at DESC")
    rows = await cursor.fetchall()
    return [dict(r) for r in rows]


async def get_agent(db: aiosqlite.Connection, agent_id: str) -> dict | None:
    """Get an agent by ID."""
    cursor = await db.execute("SELECT * FROM agents WHERE id = ?", (agent_id,))
    row = await cursor.fetchone()
    return dict(row) if row else None
