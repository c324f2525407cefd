"""Factory for creating chat transports."""

from typing import Any

from .base import ChatTransport


def create_chat_transport(kind: str = "http", **config: Any) -> ChatTransport:
    """Create a chat transport.

    Args:
        kind: Transport type ("http" or "llm")
        **config: Transport-specific configuration
            For http:
                - base_url: str (required)
                - session_cookie: str | None
                - api_token: str | None
                - timeout: float | None (default: 30.0)
            For llm:
                - llm: CompletionClient (required)
                - system_prompt: str | None
                - max_tokens: int (default: 500)

    Returns:
        ChatTransport instance

    Raises:
        ValueError: If transport type is not supported
        TypeError: If required configuration is missing
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        if "base_url" not in config:
            raise TypeError("HTTP transport requires 'base_url' in config")
        from .transports.http import HttpChatTransport
        return HttpChatTransport(**config)

    if kind_lower == "llm":
        if "llm" not in config:
            raise TypeError("LLM transport requires 'llm' in config")
        from .transports.llm import AssistantLLMTransport
        return AssistantLLMTransport(**config)

    raise ValueError(
        f"Unsupported chat transport: {kind}. "
        f"Supported transports: http, llm"
    )
