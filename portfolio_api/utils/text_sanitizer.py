import re

_ANGLE_BRACKETS = re.compile(r"[<>]")
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def truncate(text: str, max_chars: int) -> str:
    """Cut text to at most ``max_chars`` characters.

    Args:
        text: Input text.
        max_chars: Maximum allowed character count.

    Returns:
        str: The text, shortened from the end when too long.
    """
    return text[:max_chars]


def sanitize_chat_text(text: str, max_chars: int = 1000) -> str:
    """Prepare one transcript message for forwarding.

    Trims surrounding whitespace, caps the length, then removes every ``<``
    and ``>`` character.

    Args:
        text: Raw message content.
        max_chars: Per-message character cap.

    Returns:
        str: Sanitized text.
    """
    return _ANGLE_BRACKETS.sub("", truncate(text.strip(), max_chars))


def is_valid_email(value: str) -> bool:
    """Check for a ``local@domain.tld`` shaped address.

    Requires a single ``@``, at least one ``.`` after it and no whitespace.

    Examples:
        >>> is_valid_email("a@b.com")
        True
        >>> is_valid_email("a@b")
        False
    """
    return _EMAIL_PATTERN.fullmatch(value) is not None
