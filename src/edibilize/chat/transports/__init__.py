from .http import HttpChatTransport
from .llm import AssistantLLMTransport

__all__ = ["AssistantLLMTransport", "HttpChatTransport"]
