"""Tests for chat transcript normalization."""

from itertools import product

import pytest

from portfolio_api.schemas.chat import ChatMessage
from portfolio_api.services.transcript import append_or_merge, normalize_history

INSTRUCTION = "instruction block"
ACK = "acknowledged"


def _normalize(messages, **kwargs):
    return normalize_history(messages, instruction=INSTRUCTION, acknowledgment=ACK, **kwargs)


def _msg(role: str, content: str) -> ChatMessage:
    return ChatMessage(role=role, content=content)


def test_seed_turns_come_first():
    turns = _normalize([_msg("user", "hi")])

    assert [t.role for t in turns] == ["user", "model", "user"]
    assert turns[0].texts() == [INSTRUCTION]
    assert turns[1].texts() == [ACK]
    assert turns[2].texts() == ["hi"]


def test_merges_consecutive_same_role_messages():
    turns = _normalize([_msg("user", "a"), _msg("user", "b"), _msg("assistant", "c")])

    assert [(t.role, t.texts()) for t in turns[2:]] == [
        ("user", ["a", "b"]),
        ("model", ["c"]),
    ]


def test_leading_assistant_message_merges_into_acknowledgment():
    turns = _normalize([_msg("assistant", "Hi! Ask me anything."), _msg("user", "skills?")])

    assert [t.role for t in turns] == ["user", "model", "user"]
    assert turns[1].texts() == [ACK, "Hi! Ask me anything."]


@pytest.mark.parametrize("length", range(1, 7))
def test_never_produces_adjacent_same_role_turns(length):
    for roles in product(["user", "assistant", "system"], repeat=length):
        messages = [_msg(role, f"m{i}") for i, role in enumerate(roles)]
        turns = _normalize(messages)

        for previous, current in zip(turns, turns[1:]):
            assert previous.role != current.role, roles


def test_preserves_order_of_texts():
    messages = [_msg(role, str(i)) for i, role in enumerate(["user", "assistant", "assistant", "user"])]
    turns = _normalize(messages)

    flattened = [text for turn in turns[2:] for text in turn.texts()]
    assert flattened == ["0", "1", "2", "3"]


def test_keeps_only_last_twenty_messages():
    messages = [
        _msg("user" if i % 2 == 0 else "assistant", f"m{i}") for i in range(25)
    ]
    turns = _normalize(messages)

    flattened = [text for turn in turns for text in turn.texts()][2:]
    assert flattened == [f"m{i}" for i in range(5, 25)]


def test_truncation_happens_before_role_filtering():
    messages = [_msg("user", "old")] + [_msg("system", "noise")] * 20
    turns = _normalize(messages)

    assert len(turns) == 2


def test_drops_unknown_roles():
    turns = _normalize([_msg("system", "ignore me"), _msg("user", "hello")])

    assert [t.texts() for t in turns[2:]] == [["hello"]]


def test_sanitizes_each_message():
    raw = "  <script>hi</script>" + "x" * 1200 + "  "
    turns = _normalize([_msg("user", raw)])

    text = turns[2].texts()[0]
    assert "<" not in text and ">" not in text
    # Capped to 1000 characters before brackets are removed
    assert text == ("<script>hi</script>" + "x" * 981).replace("<", "").replace(">", "")
    assert len(text) <= 1000


def test_trailing_assistant_message_is_forwarded_as_model_turn():
    turns = _normalize([_msg("user", "q"), _msg("assistant", "a")])

    assert turns[-1].role == "model"


def test_custom_limits():
    messages = [_msg("assistant", "abcdef"), _msg("user", "ghijkl"), _msg("assistant", "mnopqr")]
    turns = _normalize(messages, max_messages=2, max_chars=3)

    assert turns[1].texts() == [ACK]
    assert [(t.role, t.texts()) for t in turns[2:]] == [("user", ["ghi"]), ("model", ["mno"])]


def test_append_or_merge_does_not_mutate_input():
    turns = tuple(_normalize([_msg("user", "a")]))
    before = [t.texts() for t in turns]

    merged = append_or_merge(turns, "user", "b")

    assert [t.texts() for t in turns] == before
    assert merged[-1].texts() == ["a", "b"]
