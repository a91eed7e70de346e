from typing import Annotated

from fastapi import APIRouter, Depends

from portfolio_api.adapters.llm.base import AbstractLLMClient
from portfolio_api.adapters.llm.factory import create_llm_client
from portfolio_api.core.rate_limit import enforce_chat_rate_limit
from portfolio_api.core.request_body import json_body
from portfolio_api.schemas.chat import ChatRequest, ChatResponse
from portfolio_api.services.chat_service import ChatService

router = APIRouter(tags=["Chat"])


def get_llm_client() -> AbstractLLMClient:
    """Provide the generation client, failing with 503 when unconfigured."""
    return create_llm_client()


def get_chat_service(
    llm: Annotated[AbstractLLMClient, Depends(get_llm_client)],
) -> ChatService:
    return ChatService(llm=llm)


@router.post(
    "/chat",
    response_model=ChatResponse,
    dependencies=[Depends(enforce_chat_rate_limit)],
)
async def chat(
    service: Annotated[ChatService, Depends(get_chat_service)],
    body: Annotated[ChatRequest, Depends(json_body(ChatRequest))],
) -> ChatResponse:
    """Answer a visitor's question about the site owner.

    The transcript is normalized to alternating turns (last 20 messages,
    sanitized) and sent to the generation API once.

    Args:
        service: Chat service bound to a configured generation client.
        body: Conversation so far; ``messages`` must be non-empty.

    Returns:
        ChatResponse: ``{"reply": ...}``.

    Raises:
        RateLimitAppError: 429 when the caller exceeded its budget.
        ConfigurationAppError: 503 when GEMINI_API_KEY is missing.
        RequestValidationError: 400 for a malformed body, checked last.
        LLMAppError: 502 when the upstream call fails.
    """
    reply = await service.reply(body.messages)
    return ChatResponse(reply=reply)
