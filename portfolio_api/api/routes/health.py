from __future__ import annotations

from fastapi import APIRouter

from portfolio_api.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check.

    Also reports which upstream credentials are present, so a deploy missing
    GEMINI_API_KEY or RESEND_API_KEY is visible without sending a request
    through the proxies. Credential values are never returned.

    Returns:
        dict: ``status`` plus one boolean per proxy.
    """

    return {
        "status": "ok",
        "chat_configured": bool(settings.gemini.api_key),
        "contact_configured": bool(settings.resend.api_key),
    }
