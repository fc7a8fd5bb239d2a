"""HTTP client for the relay endpoint.

Hides the wire format and transport from the session controller.
"""

from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from ..llm.models import ChatMessage
from ..relay.models import RelayRequest, RelayResponse


class RelayClientError(Exception):
    """The relay could not be reached or returned an unusable reply."""


class RelayClient:
    """Posts conversations to a relay and returns its reply message.

    Example:
        async with RelayClient("http://localhost:8000") as relay:
            reply = await relay.send([ChatMessage(role="user", content="hi")])
    """

    def __init__(self, base_url: str, timeout: float = 60.0, **client_kwargs: Any) -> None:
        """Initialize the client.

        Args:
            base_url: Relay address, e.g. ``http://localhost:8000``
            timeout: Request timeout in seconds
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **client_kwargs)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def send(self, chats: Sequence[ChatMessage]) -> ChatMessage:
        """Send the conversation and return the relay's reply.

        Raises:
            RelayClientError: On transport errors, non-2xx statuses, or
                bodies that are not ``{"output": {role, content}}``
        """
        payload = RelayRequest(chats=list(chats)).model_dump()
        try:
            response = await self._client.post("/", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            raise RelayClientError(f"Relay call failed: {exc}") from exc
        except ValueError as exc:
            raise RelayClientError(f"Relay returned invalid JSON: {exc}") from exc

        try:
            return RelayResponse.model_validate(data).output
        except ValidationError as exc:
            raise RelayClientError(f"Relay returned an unexpected body: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RelayClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
