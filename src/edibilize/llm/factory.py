from typing import Any

from .client import CompletionClient
from .openai_compat import OpenAICompatibleClient

# provider -> (default model, API base URL; None means the OpenAI default)
PROVIDERS: dict[str, tuple[str, str | None]] = {
    "openai": ("gpt-4o", None),
    "deepseek": ("deepseek-chat", "https://api.deepseek.com"),
}


def create_completion_client(provider: str, **config: Any) -> CompletionClient:
    """Create a completion client for a known provider.

    Args:
        provider: 'openai' or 'deepseek'
        **config: api_key (required), model, base_url, and any extra
            AsyncOpenAI kwargs such as timeout

    Raises:
        ValueError: If the provider is unknown
        TypeError: If api_key is missing

    Examples:
        >>> client = create_completion_client("deepseek", api_key="sk-...")
    """
    key = provider.lower()
    if key not in PROVIDERS:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(PROVIDERS)}"
        )
    if "api_key" not in config:
        raise TypeError(f"{provider} provider requires 'api_key' in config")

    default_model, default_base_url = PROVIDERS[key]
    config.setdefault("model", default_model)
    config.setdefault("base_url", default_base_url)
    return OpenAICompatibleClient(**config)
