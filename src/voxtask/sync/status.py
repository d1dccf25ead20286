"""Remote conversation status -> local task status."""

from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    """Lifecycle of an outbound-call task."""

    IDLE = "idle"
    PROCESSING = "processing"
    FINISHED = "finished"
    FAILED = "failed"
    UNKNOWN = "unknown"


# Remote statuses a conversation can no longer leave. Only these get stored.
TERMINAL_REMOTE_STATUSES = frozenset({"done", "failed"})

_REMOTE_TO_TASK_STATUS: dict[str, TaskStatus] = {
    "done": TaskStatus.FINISHED,
    "failed": TaskStatus.FAILED,
    "in_progress": TaskStatus.PROCESSING,
    "processing": TaskStatus.PROCESSING,
}


def map_remote_status(remote_status: str | None) -> TaskStatus:
    """Map a remote conversation status to a task status.

    Case-insensitive. Unrecognised values (and None) map to UNKNOWN.
    """
    if not remote_status:
        return TaskStatus.UNKNOWN
    return _REMOTE_TO_TASK_STATUS.get(remote_status.lower(), TaskStatus.UNKNOWN)


def is_terminal(remote_status: str | None) -> bool:
    """True if the remote conversation has finished (done or failed)."""
    return bool(remote_status) and remote_status.lower() in TERMINAL_REMOTE_STATUSES
