from typing import Any

import httpx
from pydantic import ValidationError

from ..base import ChatTransport
from ..errors import MalformedResponseError, RequestFailedError
from ..models import ChatReply, ChatRequest

CHAT_ENDPOINT = "/api/chat"
SESSION_COOKIE_NAME = "connect.sid"


class HttpChatTransport(ChatTransport):
    """Chat transport that posts to the application's chat endpoint.

    Hidden design decisions:
    - HTTP client setup (httpx.AsyncClient)
    - Credential handling (session cookie, bearer token)
    - Payload validation
    - Mapping of network and status failures onto TransportError
    """

    def __init__(
        self,
        base_url: str,
        session_cookie: str | None = None,
        api_token: str | None = None,
        timeout: float | None = 30.0,
        endpoint: str = CHAT_ENDPOINT,
        **client_kwargs: Any
    ):
        """Initialize the HTTP transport.

        Args:
            base_url: Application base URL, e.g. http://localhost:5000
            session_cookie: Value of the authenticated session cookie
            api_token: Bearer token, for deployments that use token auth
            timeout: Request timeout in seconds (None disables it)
            endpoint: Chat endpoint path
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._endpoint = endpoint
        headers = {"Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        cookies = {SESSION_COOKIE_NAME: session_cookie} if session_cookie else None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            cookies=cookies,
            timeout=timeout,
            **client_kwargs
        )

    async def send(self, message: str) -> str:
        payload = ChatRequest(message=message).model_dump()
        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.HTTPError as e:
            raise RequestFailedError(f"Chat request failed: {e}") from e

        if not response.is_success:
            raise RequestFailedError(
                f"Chat endpoint returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            reply = ChatReply.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(f"Unexpected chat response: {e}") from e
        return reply.response

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def transport_type(self) -> str:
        return "http"
