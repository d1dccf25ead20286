"""Data models for the ElevenLabs Conversational AI API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

import yaml

from ...errors import ConfigError

_MISSING = object()


def get_path(data: Any, *keys: str) -> Any | None:
    """Walk nested mappings along ``keys``.

    Returns None as soon as a step is missing or is not a mapping, so
    callers never have to guard against KeyError/TypeError on partial
    payloads.
    """
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return None
    return current


@dataclass
class ElevenLabsConfig:
    """ElevenLabs API connection settings.

    Credentials can live in ~/.voxtask/elevenlabs.yaml; environment
    variables win over the file.
    """

    api_key: str = ""
    base_url: str = "https://api.elevenlabs.io"
    timeout: float = 30.0  # seconds, per request

    CONFIG_FILE: ClassVar[Path] = Path.home() / ".voxtask" / "elevenlabs.yaml"

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_configured(self) -> None:
        """Raise ConfigError if the API key is missing."""
        if not self.is_configured():
            raise ConfigError(
                "ElevenLabs API key not configured. Set ELEVENLABS_API_KEY "
                f"or add api_key to {self.CONFIG_FILE}"
            )

    @classmethod
    def load(cls, config_path: Path | None = None) -> ElevenLabsConfig:
        """Load config from file and environment variables.

        Priority (highest wins):
          1. ELEVENLABS_API_KEY, ELEVENLABS_BASE_URL, ELEVENLABS_TIMEOUT
          2. Config file
          3. Defaults
        """
        config = cls()
        file_path = config_path or config.CONFIG_FILE

        if file_path.exists():
            try:
                with open(file_path) as f:
                    data = yaml.safe_load(f) or {}

                config.api_key = data.get("api_key", config.api_key)
                config.base_url = data.get("base_url", config.base_url)
                config.timeout = float(data.get("timeout", config.timeout))
            except (yaml.YAMLError, OSError, ValueError):
                pass

        config.api_key = os.environ.get("ELEVENLABS_API_KEY", config.api_key)
        config.base_url = os.environ.get("ELEVENLABS_BASE_URL", config.base_url)
        if env_timeout := os.environ.get("ELEVENLABS_TIMEOUT"):
            config.timeout = float(env_timeout)

        return config


@dataclass
class ConversationSummary:
    """One entry of the conversation list endpoint."""

    conversation_id: str
    status: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> ConversationSummary:
        conversation_id = data.get("conversation_id")
        if conversation_id is None or conversation_id == "":
            raise ValueError(f"Conversation entry without conversation_id: {data}")
        return cls(
            conversation_id=str(conversation_id),
            status=str(data.get("status") or ""),
        )


@dataclass
class ConversationDetail:
    """Full record of a single conversation.

    ``transcript`` and ``analysis`` are kept opaque; ``metadata`` is expected
    to carry the telephony call id under ``phone_call.call_sid``.
    """

    status: str
    transcript: Any = None
    metadata: dict[str, Any] = field(default_factory=dict)
    analysis: Any = None

    @property
    def normalized_status(self) -> str:
        return self.status.lower()

    @property
    def call_sid(self) -> str | None:
        """Telephony call id from metadata, or None when absent/empty."""
        value = get_path(self.metadata, "phone_call", "call_sid")
        if value is None or value == "":
            return None
        return str(value)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> ConversationDetail:
        metadata = data.get("metadata")
        return cls(
            status=str(data.get("status") or ""),
            transcript=data.get("transcript"),
            metadata=metadata if isinstance(metadata, dict) else {},
            analysis=data.get("analysis"),
        )
