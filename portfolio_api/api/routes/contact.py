from typing import Annotated

from fastapi import APIRouter, Depends

from portfolio_api.adapters.mail.base import AbstractMailer
from portfolio_api.adapters.mail.factory import create_mailer
from portfolio_api.core.rate_limit import enforce_contact_rate_limit
from portfolio_api.core.request_body import json_body
from portfolio_api.schemas.contact import ContactRequest, ContactResponse
from portfolio_api.services.contact_service import SUCCESS_MESSAGE, ContactService

router = APIRouter(tags=["Contact"])


def get_mailer() -> AbstractMailer:
    """Provide the mailer, failing with 503 when unconfigured."""
    return create_mailer()


def get_contact_service(
    mailer: Annotated[AbstractMailer, Depends(get_mailer)],
) -> ContactService:
    return ContactService(mailer=mailer)


@router.post(
    "/contact",
    response_model=ContactResponse,
    dependencies=[Depends(enforce_contact_rate_limit)],
)
async def contact(
    service: Annotated[ContactService, Depends(get_contact_service)],
    body: Annotated[ContactRequest, Depends(json_body(ContactRequest))],
) -> ContactResponse:
    """Forward a contact form submission to the site owner by email.

    Raises:
        RateLimitAppError: 429 when the caller exceeded its budget.
        ConfigurationAppError: 503 when RESEND_API_KEY is missing.
        ValidationAppError: 400 for blank fields or a malformed email.
        MailDeliveryAppError: 500 when the provider rejects the message.
    """
    await service.submit(body)
    return ContactResponse(success=True, message=SUCCESS_MESSAGE)
