"""Factory for the mailer used by the contact proxy."""

import logging

from portfolio_api.adapters.mail.base import AbstractMailer
from portfolio_api.adapters.mail.resend_client import ResendMailer
from portfolio_api.core.config import ResendSettings, settings
from portfolio_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_mailer(cfg: ResendSettings | None = None) -> AbstractMailer:
    """Instantiate the Resend mailer from settings.

    Raises:
        ConfigurationAppError: If RESEND_API_KEY is not configured.
    """
    cfg = cfg or settings.resend

    if not cfg.api_key:
        logger.error("contact.not_configured", extra={"missing": "RESEND_API_KEY"})
        raise ConfigurationAppError(
            code="contact_not_configured",
            message="Email service is not configured.",
        )

    return ResendMailer(
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        timeout_seconds=cfg.timeout_seconds,
    )
