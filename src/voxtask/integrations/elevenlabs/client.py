"""HTTP client for the ElevenLabs Conversational AI API.

Wraps the conversation list, conversation detail, and agent lookup
endpoints. Responses are surfaced as-is (parsed into light dataclasses);
interpreting them is up to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...errors import RemoteUnavailable
from .models import ConversationDetail, ConversationSummary, ElevenLabsConfig

logger = logging.getLogger(__name__)


class ElevenLabsClient:
    """Async client for the ElevenLabs ``/v1/convai`` API.

    All methods raise RemoteUnavailable on non-2xx responses, transport
    errors, and timeouts. No retries are attempted.
    """

    def __init__(
        self,
        config: ElevenLabsConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        config.require_configured()
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            headers={
                "xi-api-key": config.api_key,
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(config.timeout),
            transport=transport,
        )

    # --- Conversations ---

    async def list_conversations(self, remote_agent_id: str) -> list[ConversationSummary]:
        """List conversations the platform knows for an agent.

        GET /v1/convai/conversations?agent_id=X

        Raises:
            RemoteUnavailable: On failure or when the body has no
                ``conversations`` list.
        """
        data = await self._request(
            "GET",
            "/v1/convai/conversations",
            params={"agent_id": remote_agent_id},
        )
        conversations = data.get("conversations") if isinstance(data, dict) else None
        if not isinstance(conversations, list):
            raise RemoteUnavailable(
                "Invalid API response format: missing 'conversations' list",
                detail=str(data)[:200],
            )
        logger.debug(
            "Received %d conversations for remote agent %s", len(conversations), remote_agent_id
        )
        try:
            return [ConversationSummary.from_api_response(c) for c in conversations]
        except (TypeError, AttributeError, ValueError) as e:
            raise RemoteUnavailable(
                "Invalid API response format: conversation entry without conversation_id",
                detail=str(e),
            ) from e

    async def get_conversation_detail(self, conversation_id: str) -> ConversationDetail:
        """Fetch status, transcript, metadata and analysis for one conversation.

        GET /v1/convai/conversations/{conversation_id}
        """
        data = await self._request("GET", f"/v1/convai/conversations/{conversation_id}")
        if not isinstance(data, dict):
            raise RemoteUnavailable(
                f"Invalid detail response for conversation {conversation_id}",
                detail=str(data)[:200],
            )
        return ConversationDetail.from_api_response(data)

    # --- Agents ---

    async def get_agent(self, remote_agent_id: str) -> dict[str, Any]:
        """Fetch the raw agent document.

        GET /v1/convai/agents/{agent_id}
        """
        return await self._request("GET", f"/v1/convai/agents/{remote_agent_id}")

    # --- Lifecycle ---

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # --- Internal ---

    async def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request.

        Raises:
            RemoteUnavailable: On HTTP errors, connection failures or timeouts.
        """
        try:
            response = await self._client.request(method, url, params=params)
        except httpx.TimeoutException as e:
            raise RemoteUnavailable(
                f"Request timed out: {method} {url}",
                detail=str(e),
            ) from e
        except httpx.HTTPError as e:
            raise RemoteUnavailable(
                f"Cannot reach ElevenLabs: {e}",
                detail=str(e),
            ) from e

        if response.status_code >= 400:
            try:
                body = response.json()
                detail = body.get("detail", str(body)) if isinstance(body, dict) else str(body)
            except ValueError:
                detail = response.text[:200]
            raise RemoteUnavailable(
                f"{method} {url} returned {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=str(detail),
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise RemoteUnavailable(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
                detail=response.text[:200],
            ) from e
