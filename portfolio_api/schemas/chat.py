"""Pydantic schemas for the chat proxy and the upstream conversation format."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One transcript entry as sent by the browser widget.

    ``role`` is kept as a free string: unknown roles are dropped during
    normalization rather than rejected.
    """

    role: str = Field(..., description="'user' or 'assistant'.")
    content: str = Field(..., description="Message text as typed or received.")


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``."""

    messages: list[ChatMessage] = Field(
        ...,
        min_length=1,
        description="Conversation so far, oldest first. Must not be empty.",
    )


class ChatResponse(BaseModel):
    """Body of a successful chat reply."""

    reply: str


class TextPart(BaseModel):
    text: str


class ConversationTurn(BaseModel):
    """One role-tagged turn in the upstream ``contents`` array.

    A turn can hold several text parts when consecutive transcript messages
    from the same side were merged.
    """

    role: Literal["user", "model"]
    parts: list[TextPart]

    def texts(self) -> list[str]:
        return [part.text for part in self.parts]
