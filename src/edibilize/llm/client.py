from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Completion(BaseModel):
    """One answer from the inference service."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Generated answer, empty if the model produced none")
    model: str = Field(description="Model that produced the answer")
    total_tokens: int | None = Field(default=None, description="Prompt plus completion tokens")


class CompletionClient(ABC):
    """Asks an inference service for a single-turn answer.

    The assistant never sends history: every question goes out as a system
    prompt followed by one user message.

        async with client:
            completion = await client.complete(system_prompt, "Is rice healthy?")
    """

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        question: str,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> Completion:
        """Answer one question.

        Raises:
            Exception: Whatever the underlying client raises; callers wrap it
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP connections."""

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await close_quietly(self)


async def close_quietly(resource: Any) -> None:
    """Await resource.close(), ignoring "Event loop is closed".

    That error is a known httpx/anyio teardown race and carries no failure.
    """
    try:
        await resource.close()
    except RuntimeError as e:
        if "Event loop is closed" not in str(e):
            raise
