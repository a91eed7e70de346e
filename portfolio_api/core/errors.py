"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients.

    Fields are optional so each error only carries what is relevant to it.
    """

    code: str
    message: str
    hint: str
    field: str
    http_status: int
    retry_after: float
    upstream_status: int
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when request input fails validation."""


@dataclass
class RateLimitAppError(AppError):
    """Raised when a caller exhausted its quota for the current window.

    Attributes:
        headers: Optional response headers (Retry-After, X-RateLimit-*).
    """

    headers: dict[str, str] | None = None


class ConfigurationAppError(AppError):
    """Raised when a required server-side credential is not configured."""


class LLMAppError(AppError):
    """Raised when the generation API call fails."""


class MailDeliveryAppError(AppError):
    """Raised when the email-delivery API call fails."""
