from abc import ABC, abstractmethod
from typing import Any, Sequence

from portfolio_api.schemas.chat import ConversationTurn


class AbstractLLMClient(ABC):
    """Interface for chat-style generation clients."""

    @abstractmethod
    async def generate_text(
        self,
        contents: Sequence[ConversationTurn],
        **kwargs: Any,
    ) -> str | None:
        """Generate the next model turn for a conversation.

        Args:
            contents: Alternating user/model turns, oldest first.
            **kwargs: Provider options (temperature, top_p, top_k,
                max_output_tokens, safety_settings).

        Returns:
            str | None: Text of the first candidate, or None when the provider
                answered without any text (e.g. blocked by safety filters).

        Raises:
            LLMAppError: If the provider call fails or returns a non-success status.
        """
        ...
