"""Email delivery adapters."""

from portfolio_api.adapters.mail.base import AbstractMailer, OutboundEmail
from portfolio_api.adapters.mail.factory import create_mailer
from portfolio_api.adapters.mail.resend_client import ResendMailer

__all__ = [
    "AbstractMailer",
    "OutboundEmail",
    "ResendMailer",
    "create_mailer",
]
