"""Task routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ...sync.status import TaskStatus
from ..deps import Db, get_agent_or_404
from . import service
from .models import TaskCallStarted, TaskCreate, TaskResponse

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(body: TaskCreate, db: Db):
    await get_agent_or_404(db, body.agent_id)
    return await service.create_task(
        db,
        agent_id=body.agent_id,
        to_phone_number=body.to_phone_number,
        name=body.name,
    )


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    db: Db,
    agent_id: str | None = None,
    status: TaskStatus | None = None,
):
    return await service.get_tasks(
        db, agent_id=agent_id, status=status.value if status else None
    )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, db: Db):
    task = await service.get_task(db, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/{task_id}/call", response_model=TaskResponse)
async def start_call(task_id: str, body: TaskCallStarted, db: Db):
    try:
        task = await service.start_call(db, task_id, body.call_id)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task
