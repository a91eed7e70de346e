"""Reshape a browser chat transcript into the upstream conversation format.

The generation API rejects two consecutive turns from the same role, while the
browser widget may send several messages in a row from one side. The
normalizer folds the transcript into strictly alternating user/model turns,
collapsing same-role runs into multi-part turns.
"""

from __future__ import annotations

from functools import reduce
from typing import Iterable, Sequence

from portfolio_api.schemas.chat import ChatMessage, ConversationTurn, TextPart
from portfolio_api.utils.text_sanitizer import sanitize_chat_text

ALLOWED_ROLES = frozenset({"user", "assistant"})

DEFAULT_HISTORY_LIMIT = 20
DEFAULT_MAX_MESSAGE_CHARS = 1000


def upstream_role(role: str) -> str:
    return "model" if role == "assistant" else "user"


def seed_turns(instruction: str, acknowledgment: str) -> list[ConversationTurn]:
    """Opening exchange standing in for a system prompt."""

    return [
        ConversationTurn(role="user", parts=[TextPart(text=instruction)]),
        ConversationTurn(role="model", parts=[TextPart(text=acknowledgment)]),
    ]


def append_or_merge(
    turns: tuple[ConversationTurn, ...], role: str, text: str
) -> tuple[ConversationTurn, ...]:
    """Add ``text`` to the conversation without breaking alternation.

    Args:
        turns: Conversation built so far (not mutated).
        role: Upstream role of the new text (``"user"`` or ``"model"``).
        text: Already sanitized text.

    Returns:
        New tuple of turns; the last turn gains a part when it has ``role``.
    """

    if turns and turns[-1].role == role:
        last = turns[-1]
        merged = ConversationTurn(role=last.role, parts=[*last.parts, TextPart(text=text)])
        return (*turns[:-1], merged)
    return (*turns, ConversationTurn(role=role, parts=[TextPart(text=text)]))


def recent_messages(
    history: Sequence[ChatMessage], limit: int = DEFAULT_HISTORY_LIMIT
) -> list[ChatMessage]:
    """Keep the last ``limit`` messages with a known role."""

    window = list(history)[-limit:] if limit > 0 else []
    return [message for message in window if message.role in ALLOWED_ROLES]


def normalize_history(
    history: Iterable[ChatMessage],
    *,
    instruction: str,
    acknowledgment: str,
    max_messages: int = DEFAULT_HISTORY_LIMIT,
    max_chars: int = DEFAULT_MAX_MESSAGE_CHARS,
) -> list[ConversationTurn]:
    """Build the ``contents`` array for a generation request.

    Only the last ``max_messages`` entries are considered, unknown roles are
    dropped, every text is sanitized, and the result starts with the fixed
    instruction/acknowledgment pair. No two adjacent turns share a role.

    A transcript ending with an assistant message yields a conversation that
    ends with a model turn; it is returned as-is.

    Args:
        history: Transcript from the browser, oldest first.
        instruction: Text of the opening user turn.
        acknowledgment: Text of the opening model turn.
        max_messages: Number of most recent messages to keep.
        max_chars: Per-message character cap.

    Returns:
        list[ConversationTurn]: Alternating turns, seed pair first.
    """

    messages = recent_messages(list(history), max_messages)
    turns = reduce(
        lambda acc, message: append_or_merge(
            acc,
            upstream_role(message.role),
            sanitize_chat_text(message.content, max_chars),
        ),
        messages,
        tuple(seed_turns(instruction, acknowledgment)),
    )
    return list(turns)
