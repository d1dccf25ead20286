"""Conversation sync: pull remote call records into the local database."""

from .reconciler import ConversationReconciler, ConversationSource, SyncResult
from .status import TERMINAL_REMOTE_STATUSES, TaskStatus, map_remote_status
from .store import ConversationStore

__all__ = [
    "ConversationReconciler",
    "ConversationSource",
    "ConversationStore",
    "SyncResult",
    "TaskStatus",
    "TERMINAL_REMOTE_STATUSES",
    "map_remote_status",
]
