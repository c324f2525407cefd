from typing import Any

from openai import AsyncOpenAI

from .client import Completion, CompletionClient


class OpenAICompatibleClient(CompletionClient):
    """Completion client for OpenAI and services that mimic its chat API.

    DeepSeek and similar services are reached by pointing base_url at them.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def complete(
        self,
        system_prompt: str,
        question: str,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> Completion:
        result = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": question},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        choice = result.choices[0] if result.choices else None
        return Completion(
            text=(choice.message.content if choice else None) or "",
            model=result.model,
            total_tokens=result.usage.total_tokens if result.usage else None,
        )

    async def close(self) -> None:
        await self._client.close()
