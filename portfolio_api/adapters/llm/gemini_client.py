"""Gemini generateContent adapter over plain HTTPS."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from portfolio_api.adapters.llm.base import AbstractLLMClient
from portfolio_api.core.errors import LLMAppError
from portfolio_api.schemas.chat import ConversationTurn

logger = logging.getLogger(__name__)

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

# Upstream error bodies are logged, capped to keep log lines bounded
_MAX_LOGGED_BODY = 2000


def build_safety_settings(threshold: str) -> list[dict[str, str]]:
    """Apply one blocking threshold to every harm category."""
    return [{"category": category, "threshold": threshold} for category in HARM_CATEGORIES]


def extract_first_text(payload: Any) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` when present.

    Args:
        payload: Decoded generateContent response.

    Returns:
        The text, or None when any level of the path is missing or malformed.
    """
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


class GeminiClient(AbstractLLMClient):
    """Client for the Generative Language ``generateContent`` endpoint.

    Each call opens a short-lived ``httpx.AsyncClient``; the proxy makes at
    most one upstream call per request and never retries.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 45.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gemini API key.
            model: Model identifier (e.g. "gemini-2.5-flash").
            base_url: API base URL, without trailing slash.
            timeout_seconds: Timeout for requests in seconds.
            transport: Optional httpx transport (used by tests to stub the API).
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_request(
        self,
        contents: Sequence[ConversationTurn],
        *,
        temperature: float = 0.7,
        top_p: float = 0.9,
        top_k: int = 40,
        max_output_tokens: int = 2048,
        safety_settings: list[dict[str, str]] | None = None,
    ) -> dict[str, Any]:
        """Build the JSON body for generateContent."""
        return {
            "contents": [turn.model_dump() for turn in contents],
            "generationConfig": {
                "temperature": temperature,
                "topP": top_p,
                "topK": top_k,
                "maxOutputTokens": max_output_tokens,
            },
            "safetySettings": (
                safety_settings
                if safety_settings is not None
                else build_safety_settings("BLOCK_MEDIUM_AND_ABOVE")
            ),
        }

    async def generate_text(
        self,
        contents: Sequence[ConversationTurn],
        **kwargs: Any,
    ) -> str | None:
        """Send the conversation and return the first candidate's text.

        Raises:
            LLMAppError: On transport errors, non-2xx statuses or a body that
                is not JSON. Upstream detail goes to the log only.
        """
        body = self.build_request(contents, **kwargs)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=body,
                    headers={"x-goog-api-key": self.api_key},
                )
        except httpx.HTTPError as exc:
            logger.error(
                "chat.upstream_transport_error",
                extra={"model": self.model, "error_type": type(exc).__name__},
            )
            raise LLMAppError(
                code="llm_unavailable",
                message="AI service temporarily unavailable.",
            ) from exc

        if not response.is_success:
            logger.error(
                "chat.upstream_error",
                extra={
                    "model": self.model,
                    "upstream_status": response.status_code,
                    "upstream_body": response.text[:_MAX_LOGGED_BODY],
                },
            )
            raise LLMAppError(
                code="llm_unavailable",
                message="AI service temporarily unavailable.",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error(
                "chat.upstream_invalid_json",
                extra={"model": self.model, "upstream_status": response.status_code},
            )
            raise LLMAppError(
                code="llm_invalid_response",
                message="AI service temporarily unavailable.",
            ) from exc

        text = extract_first_text(payload)
        if text is None:
            logger.warning(
                "chat.upstream_empty_candidate",
                extra={
                    "model": self.model,
                    "finish_reason": _finish_reason(payload),
                },
            )
        return text


def _finish_reason(payload: Any) -> str | None:
    try:
        return payload["candidates"][0].get("finishReason")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None
