"""Integrations with external services."""

from . import elevenlabs

__all__ = ["elevenlabs"]
