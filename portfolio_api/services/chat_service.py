"""Chat proxy service: transcript in, assistant reply out.

Normalizes the browser transcript into alternating turns, calls the
generation API once with the configured sampling and safety parameters, and
substitutes a fixed apology when the provider returns no text.
"""

from __future__ import annotations

import logging
from typing import Sequence

from portfolio_api.adapters.llm.base import AbstractLLMClient
from portfolio_api.adapters.llm.gemini_client import build_safety_settings
from portfolio_api.core.config import GeminiSettings, settings
from portfolio_api.prompts.assistant import ACKNOWLEDGMENT, FALLBACK_REPLY, SYSTEM_INSTRUCTION
from portfolio_api.schemas.chat import ChatMessage, ConversationTurn
from portfolio_api.services.transcript import normalize_history

logger = logging.getLogger(__name__)


class ChatService:
    """Orchestrates one assistant reply.

    Attributes:
        llm: Generation client.
        config: Gemini settings (sampling, safety, history limits).
    """

    def __init__(
        self,
        llm: AbstractLLMClient,
        config: GeminiSettings | None = None,
        *,
        instruction: str = SYSTEM_INSTRUCTION,
        acknowledgment: str = ACKNOWLEDGMENT,
    ) -> None:
        self.llm = llm
        self.config = config or settings.gemini
        self.instruction = instruction
        self.acknowledgment = acknowledgment

    def build_contents(self, messages: Sequence[ChatMessage]) -> list[ConversationTurn]:
        return normalize_history(
            messages,
            instruction=self.instruction,
            acknowledgment=self.acknowledgment,
            max_messages=self.config.history_limit,
            max_chars=self.config.max_message_chars,
        )

    async def reply(self, messages: Sequence[ChatMessage]) -> str:
        """Produce the assistant's next message.

        Args:
            messages: Non-empty transcript, oldest first.

        Returns:
            str: Model reply, or the fallback apology when none was generated.

        Raises:
            LLMAppError: If the upstream call fails.
        """
        contents = self.build_contents(messages)

        if contents[-1].role == "model":
            logger.info("chat.trailing_model_turn", extra={"turns": len(contents)})

        text = await self.llm.generate_text(
            contents,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
            max_output_tokens=self.config.max_output_tokens,
            safety_settings=build_safety_settings(self.config.safety_threshold),
        )

        logger.info(
            "chat.replied",
            extra={
                "turns": len(contents),
                "fallback": text is None,
            },
        )
        return text if text is not None else FALLBACK_REPLY
