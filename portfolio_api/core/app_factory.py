from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers, shared
components) so tests can build isolated instances.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.api.routes import chat_router, contact_router, health_router
from portfolio_api.core.config import settings
from portfolio_api.core.exception_handlers import setup_exception_handlers
from portfolio_api.core.logging import configure_logging
from portfolio_api.core.middleware import request_id_middleware
from portfolio_api.core.rate_limit import build_rate_limiter


def parse_origins(origins: str | None) -> list[str]:
    """Split a comma-separated origin list, dropping blanks.

    Examples:
        >>> parse_origins("https://a.dev, https://b.dev ")
        ['https://a.dev', 'https://b.dev']
        >>> parse_origins(None)
        []
    """
    if not origins:
        return []
    return [origin.strip() for origin in origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and a fresh
        rate limiter on ``app.state``.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Portfolio API",
        description=(
            "Backend for a personal portfolio site: an AI assistant that answers "
            "questions about the owner's CV and a contact form mailer. Both "
            "endpoints are rate limited per client IP."
        ),
        version="0.1.0",
    )

    app.state.rate_limiter = build_rate_limiter(settings.rate_limit)

    # Middleware
    app.middleware("http")(request_id_middleware)
    origins = parse_origins(settings.app.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["POST", "GET", "OPTIONS"],
            allow_headers=["Content-Type", settings.log.request_id_header],
            expose_headers=[settings.log.request_id_header],
        )

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(chat_router, prefix="/api")
    app.include_router(contact_router, prefix="/api")
    app.include_router(health_router)

    return app
