"""ElevenLabs Conversational AI integration."""

from .client import ElevenLabsClient
from .models import ConversationDetail, ConversationSummary, ElevenLabsConfig, get_path

__all__ = [
    "ElevenLabsClient",
    "ElevenLabsConfig",
    "ConversationDetail",
    "ConversationSummary",
    "get_path",
]
