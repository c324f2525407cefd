from ...llm import CompletionClient
from ...prompts import get_assistant_prompt
from ..base import ChatTransport
from ..errors import RequestFailedError

EMPTY_COMPLETION_REPLY = "I'm sorry, I couldn't generate a response. Please try again."


class AssistantLLMTransport(ChatTransport):
    """Chat transport that asks the inference service directly.

    Used when no web app is running. Each message is answered on its own,
    under the health-assistant system prompt.
    """

    def __init__(
        self,
        llm: CompletionClient,
        system_prompt: str | None = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ):
        self._llm = llm
        self._system_prompt = system_prompt or get_assistant_prompt()
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def send(self, message: str) -> str:
        try:
            completion = await self._llm.complete(
                self._system_prompt,
                message,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            raise RequestFailedError(f"LLM request failed: {e}") from e
        return completion.text or EMPTY_COMPLETION_REPLY

    async def close(self) -> None:
        await self._llm.close()

    @property
    def transport_type(self) -> str:
        return "llm"
