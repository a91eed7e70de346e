"""Email delivery interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OutboundEmail:
    """A fully rendered notification ready for delivery."""

    sender: str
    to: str
    subject: str
    html: str
    reply_to: str | None = None


class AbstractMailer(ABC):
    """Interface for transactional email providers."""

    @abstractmethod
    async def send(self, email: OutboundEmail) -> str | None:
        """Deliver one email.

        Args:
            email: Rendered message.

        Returns:
            Provider message id when reported.

        Raises:
            MailDeliveryAppError: If the provider rejects the message or is unreachable.
        """
        raise NotImplementedError
