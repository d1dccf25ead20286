"""Task service - business logic."""

from __future__ import annotations

import secrets

import aiosqlite

from ...sync.status import TaskStatus


async def create_task(
    db: aiosqlite.Connection,
    agent_id: str,
    to_phone_number: str,
    name: str | None = None,
) -> dict:
    """Create an idle task for an agent."""
    task_id = secrets.token_hex(8)
    await db.execute(
        """INSERT INTO tasks (id, agent_id, name, to_phone_number, status)
           VALUES (?, ?, ?, ?, ?)""",
        (task_id, agent_id, name, to_phone_number, TaskStatus.IDLE.value),
    )
    await db.commit()
    return await get_task(db, task_id)


async def get_tasks(
    db: aiosqlite.Connection,
    agent_id: str | None = None,
    status: str | None = None,
) -> list[dict]:
    """List tasks with optional filters, newest first."""
    conditions = []
    params: list[str] = []

    if agent_id:
        conditions.append("agent_id = ?")
        params.append(agent_id)
    if status:
        conditions.append("status = ?")
        params.append(status)

    where = f" WHERE {' AND '.join(conditions)}" if conditions else ""
    cursor = await db.execute(
        f"SELECT * FROM tasks{where} ORDER BY created_at DESC, rowid DESC", params
    )
    rows = await cursor.fetchall()
    return [dict(r) for r in rows]


async def get_task(db: aiosqlite.Connection, task_id: str) -> dict | None:
    """Get a task by ID."""
    cursor = await db.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
    row = await cursor.fetchone()
    return dict(row) if row else None


async def start_call(db: aiosqlite.Connection, task_id: str, call_id: str) -> dict | None:
    """Record the call placed for an idle task and move it to processing.

    Returns None if the task does not exist.

    Raises:
        ValueError: The task is not idle.
    """
    task = await get_task(db, task_id)
    if not task:
        return None

    cursor = await db.execute(
        """UPDATE tasks SET call_id = ?, status = ?, updated_at = CURRENT_TIMESTAMP
           WHERE id = ? AND status = ?""",
        (call_id, TaskStatus.PROCESSING.value, task_id, TaskStatus.IDLE.value),
    )
    if cursor.rowcount == 0:
        raise ValueError(f"Cannot start a call for task in status '{task['status']}'")
    await db.commit()
    return await get_task(db, task_id)
