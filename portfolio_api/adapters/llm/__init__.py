"""LLM adapter layer - abstracts over the generation provider."""

from portfolio_api.adapters.llm.base import AbstractLLMClient
from portfolio_api.adapters.llm.factory import create_llm_client
from portfolio_api.adapters.llm.gemini_client import GeminiClient

__all__ = [
    "AbstractLLMClient",
    "GeminiClient",
    "create_llm_client",
]
