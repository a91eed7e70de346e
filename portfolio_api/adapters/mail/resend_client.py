"""Resend email API adapter."""

from __future__ import annotations

import logging

import httpx

from portfolio_api.adapters.mail.base import AbstractMailer, OutboundEmail
from portfolio_api.core.errors import MailDeliveryAppError

logger = logging.getLogger(__name__)

_MAX_LOGGED_BODY = 2000


class ResendMailer(AbstractMailer):
    """Send email through ``POST /emails`` of the Resend REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def build_payload(self, email: OutboundEmail) -> dict[str, object]:
        payload: dict[str, object] = {
            "from": email.sender,
            "to": [email.to],
            "subject": email.subject,
            "html": email.html,
        }
        if email.reply_to:
            payload["reply_to"] = email.reply_to
        return payload

    async def send(self, email: OutboundEmail) -> str | None:
        """Deliver ``email`` and return the Resend message id.

        Raises:
            MailDeliveryAppError: On transport errors or non-2xx statuses.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    f"{self.base_url}/emails",
                    json=self.build_payload(email),
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as exc:
            logger.error(
                "contact.upstream_transport_error",
                extra={"error_type": type(exc).__name__},
            )
            raise MailDeliveryAppError(
                code="mail_send_failed",
                message="Failed to send message. Please try again.",
            ) from exc

        if not response.is_success:
            logger.error(
                "contact.upstream_error",
                extra={
                    "upstream_status": response.status_code,
                    "upstream_body": response.text[:_MAX_LOGGED_BODY],
                },
            )
            raise MailDeliveryAppError(
                code="mail_send_failed",
                message="Failed to send message. Please try again.",
            )

        try:
            return response.json().get("id")
        except (ValueError, AttributeError):
            return None
