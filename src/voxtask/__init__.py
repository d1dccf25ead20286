"""voxtask: voice agent call tasks backed by ElevenLabs Conversational AI.

voxtask keeps a local record of voice agents and the outbound-call tasks
created for them, and reconciles the remote conversation history back into
the local database:

- Agents point at an existing ElevenLabs agent
- Tasks track one outbound call each (idle -> processing -> finished/failed)
- Conversation sync pulls finished calls and links them to their tasks

Usage:
    # Web server
    $ voxtask serve

    # One-off sync for an agent
    $ voxtask sync <agent_id>

    # Python API
    from voxtask import ConversationReconciler

    result = await ConversationReconciler(store, source).reconcile(agent_id)
"""

try:
    from importlib.metadata import version as _get_version

    __version__ = _get_version("voxtask")
except Exception:
    __version__ = "0.0.0-dev"


def __getattr__(name: str):
    """Lazy import for main classes."""
    if name == "ConversationReconciler":
        from .sync.reconciler import ConversationReconciler

        return ConversationReconciler
    if name == "ConversationStore":
        from .sync.store import ConversationStore

        return ConversationStore
    if name == "ElevenLabsClient":
        from .integrations.elevenlabs import ElevenLabsClient

        return ElevenLabsClient
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "ConversationReconciler",
    "ConversationStore",
    "ElevenLabsClient",
]
