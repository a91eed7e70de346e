"""Contact form service: validate, truncate, render and deliver."""

from __future__ import annotations

import html
import logging

from portfolio_api.adapters.mail.base import AbstractMailer, OutboundEmail
from portfolio_api.core.config import ContactSettings, ResendSettings, settings
from portfolio_api.core.errors import ValidationAppError
from portfolio_api.core.logging import hash_identifier
from portfolio_api.schemas.contact import ContactRequest, ContactSubmission
from portfolio_api.utils.text_sanitizer import is_valid_email, truncate

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Message sent! I will get back to you soon."

EMAIL_TEMPLATE = """
<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: #6366f1;">New Portfolio Contact Message</h2>
  <hr style="border: 1px solid #e5e7eb;" />
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
  <p><strong>Message:</strong></p>
  <div style="background: #f9fafb; padding: 16px; border-radius: 8px; white-space: pre-wrap;">{message}</div>
  <hr style="border: 1px solid #e5e7eb; margin-top: 24px;" />
  <p style="color: #9ca3af; font-size: 12px;">Sent from your portfolio contact form</p>
</div>
""".strip()


def render_contact_email(submission: ContactSubmission) -> str:
    """Fill the notification template with HTML-escaped field values."""
    return EMAIL_TEMPLATE.format(
        name=html.escape(submission.name),
        email=html.escape(submission.email),
        message=html.escape(submission.message),
    )


def prepare_submission(request: ContactRequest, cfg: ContactSettings) -> ContactSubmission:
    """Validate and truncate a contact request.

    Args:
        request: Raw request body.
        cfg: Contact settings with per-field limits.

    Returns:
        ContactSubmission: Trimmed and truncated fields.

    Raises:
        ValidationAppError: If a field is blank or the email is malformed.
    """
    missing = [
        field
        for field in ("name", "email", "message")
        if not getattr(request, field).strip()
    ]
    if missing:
        raise ValidationAppError(
            code="missing_fields",
            message="All fields are required.",
            details={"context": {"fields": missing}},
        )

    if not is_valid_email(request.email.strip()):
        raise ValidationAppError(
            code="invalid_email",
            message="Invalid email address.",
            details={"field": "email"},
        )

    return ContactSubmission(
        name=truncate(request.name.strip(), cfg.max_name_chars),
        email=truncate(request.email.strip(), cfg.max_email_chars),
        message=truncate(request.message.strip(), cfg.max_message_chars),
    )


class ContactService:
    """Deliver contact form submissions to the site owner."""

    def __init__(
        self,
        mailer: AbstractMailer,
        contact: ContactSettings | None = None,
        resend: ResendSettings | None = None,
    ) -> None:
        self.mailer = mailer
        self.contact = contact or settings.contact
        self.resend = resend or settings.resend

    def build_email(self, submission: ContactSubmission) -> OutboundEmail:
        return OutboundEmail(
            sender=self.resend.from_address,
            to=self.contact.recipient,
            subject=f"Portfolio Contact: {submission.name}",
            html=render_contact_email(submission),
            reply_to=submission.email,
        )

    async def submit(self, request: ContactRequest) -> ContactSubmission:
        """Validate the request and send it by email.

        Raises:
            ValidationAppError: If the request is incomplete or malformed.
            MailDeliveryAppError: If the provider rejects the message.
        """
        submission = prepare_submission(request, self.contact)
        message_id = await self.mailer.send(self.build_email(submission))

        logger.info(
            "contact.sent",
            extra={
                "sender_hash": hash_identifier(submission.email.lower()),
                "message_chars": len(submission.message),
                "provider_message_id": message_id,
            },
        )
        return submission
