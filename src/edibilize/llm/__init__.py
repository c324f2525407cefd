"""Inference-service access for the direct (no web app) transport."""

from .client import Completion, CompletionClient
from .factory import PROVIDERS, create_completion_client
from .openai_compat import OpenAICompatibleClient

__all__ = [
    "PROVIDERS",
    "Completion",
    "CompletionClient",
    "OpenAICompatibleClient",
    "create_completion_client",
]
