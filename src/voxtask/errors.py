"""Error types shared by the sync core, the web layer, and the CLI."""

from __future__ import annotations


class VoxtaskError(Exception):
    """Base class for voxtask errors."""

    def __init__(self, message: str, detail: str = ""):
        self.message = message
        self.detail = detail
        super().__init__(message)


class ConfigError(VoxtaskError):
    """Required credential or setting is missing."""


class NotFound(VoxtaskError):
    """A local record needed to start work does not exist."""


class RemoteUnavailable(VoxtaskError):
    """A call to the voice platform failed (non-2xx, transport error, timeout)."""

    def __init__(self, message: str, status_code: int = 0, detail: str = ""):
        self.status_code = status_code
        super().__init__(message, detail=detail)


class StoreError(VoxtaskError):
    """A local database read or write failed."""
