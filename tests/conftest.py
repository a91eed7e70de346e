"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import of ``portfolio_api`` so the
global settings object is built with test credentials.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("RESEND_API_KEY", "test-resend-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Callable, Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from portfolio_api.adapters.llm.gemini_client import GeminiClient
from portfolio_api.adapters.mail.resend_client import ResendMailer
from portfolio_api.api.routes.chat import get_llm_client
from portfolio_api.api.routes.contact import get_mailer
from portfolio_api.core.app_factory import create_app

Handler = Callable[[httpx.Request], httpx.Response]


def gemini_reply(text: str) -> dict:
    """Minimal successful generateContent payload."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def app() -> FastAPI:
    """Fresh application (and fresh rate limiter) per test."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stub_gemini(app: FastAPI) -> Callable[[Handler], RecordingTransport]:
    """Route the chat proxy's upstream calls to a local handler."""

    def install(handler: Handler) -> RecordingTransport:
        transport = RecordingTransport(handler)
        app.dependency_overrides[get_llm_client] = lambda: GeminiClient(
            api_key="test-gemini-key",
            model="gemini-2.5-flash",
            transport=transport,
        )
        return transport

    return install


@pytest.fixture
def stub_resend(app: FastAPI) -> Callable[[Handler], RecordingTransport]:
    """Route the contact proxy's upstream calls to a local handler."""

    def install(handler: Handler) -> RecordingTransport:
        transport = RecordingTransport(handler)
        app.dependency_overrides[get_mailer] = lambda: ResendMailer(
            api_key="test-resend-key",
            transport=transport,
        )
        return transport

    return install
