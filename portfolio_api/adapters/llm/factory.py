"""Factory for the generation client used by the chat proxy."""

import logging

from portfolio_api.adapters.llm.base import AbstractLLMClient
from portfolio_api.adapters.llm.gemini_client import GeminiClient
from portfolio_api.core.config import GeminiSettings, settings
from portfolio_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)


def create_llm_client(cfg: GeminiSettings | None = None) -> AbstractLLMClient:
    """Instantiate the Gemini client from settings.

    Args:
        cfg: Optional Gemini settings; defaults to the global settings.

    Returns:
        AbstractLLMClient: Configured client instance.

    Raises:
        ConfigurationAppError: If GEMINI_API_KEY is not configured.
    """
    cfg = cfg or settings.gemini

    if not cfg.api_key:
        logger.error("chat.not_configured", extra={"missing": "GEMINI_API_KEY"})
        raise ConfigurationAppError(
            code="chat_not_configured",
            message="Chat service is not configured.",
        )

    return GeminiClient(
        api_key=cfg.api_key,
        model=cfg.model,
        base_url=cfg.base_url,
        timeout_seconds=cfg.timeout_seconds,
    )
