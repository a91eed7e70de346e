"""Unit tests for ChatService and ContactService with mocked adapters."""

from unittest.mock import AsyncMock

import pytest

from portfolio_api.core.config import ContactSettings, GeminiSettings, ResendSettings
from portfolio_api.core.errors import LLMAppError, ValidationAppError
from portfolio_api.prompts.assistant import FALLBACK_REPLY
from portfolio_api.schemas.chat import ChatMessage
from portfolio_api.schemas.contact import ContactRequest
from portfolio_api.services.chat_service import ChatService
from portfolio_api.services.contact_service import (
    ContactService,
    prepare_submission,
    render_contact_email,
)


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    return GeminiSettings(api_key="k", temperature=0.5, history_limit=3)


class TestChatService:
    @pytest.mark.asyncio
    async def test_passes_generation_parameters(self, gemini_settings) -> None:
        llm = AsyncMock()
        llm.generate_text.return_value = "reply"
        service = ChatService(llm=llm, config=gemini_settings, instruction="I", acknowledgment="A")

        result = await service.reply([ChatMessage(role="user", content="hi")])

        assert result == "reply"
        contents = llm.generate_text.await_args.args[0]
        kwargs = llm.generate_text.await_args.kwargs
        assert [t.role for t in contents] == ["user", "model", "user"]
        assert kwargs["temperature"] == 0.5
        assert kwargs["top_p"] == 0.9
        assert kwargs["top_k"] == 40
        assert kwargs["max_output_tokens"] == 2048
        assert len(kwargs["safety_settings"]) == 4

    @pytest.mark.asyncio
    async def test_history_limit_comes_from_settings(self, gemini_settings) -> None:
        llm = AsyncMock()
        llm.generate_text.return_value = "reply"
        service = ChatService(llm=llm, config=gemini_settings, instruction="I", acknowledgment="A")
        messages = [
            ChatMessage(role="user" if i % 2 == 0 else "assistant", content=str(i))
            for i in range(6)
        ]

        await service.reply(messages)

        contents = llm.generate_text.await_args.args[0]
        texts = [text for turn in contents for text in turn.texts()]
        # Seed texts followed by the last three messages; "3" merges into the seed model turn
        assert texts == ["I", "A", "3", "4", "5"]

    @pytest.mark.asyncio
    async def test_none_reply_becomes_fallback(self, gemini_settings) -> None:
        llm = AsyncMock()
        llm.generate_text.return_value = None
        service = ChatService(llm=llm, config=gemini_settings)

        assert await service.reply([ChatMessage(role="user", content="hi")]) == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_upstream_errors_propagate(self, gemini_settings) -> None:
        llm = AsyncMock()
        llm.generate_text.side_effect = LLMAppError(code="llm_unavailable", message="down")
        service = ChatService(llm=llm, config=gemini_settings)

        with pytest.raises(LLMAppError):
            await service.reply([ChatMessage(role="user", content="hi")])


class TestContactService:
    CONTACT = ContactSettings(email=None, default_recipient="owner@example.com")
    RESEND = ResendSettings(api_key="re_k", from_address="Site <site@example.com>")

    @pytest.mark.asyncio
    async def test_submit_builds_email(self) -> None:
        mailer = AsyncMock()
        mailer.send.return_value = "id-1"
        service = ContactService(mailer=mailer, contact=self.CONTACT, resend=self.RESEND)

        submission = await service.submit(
            ContactRequest(name=" Jane ", email="jane@example.com", message=" Hi ")
        )

        assert submission.name == "Jane"
        assert submission.message == "Hi"
        email = mailer.send.await_args.args[0]
        assert email.to == "owner@example.com"
        assert email.sender == "Site <site@example.com>"
        assert email.reply_to == "jane@example.com"
        assert email.subject == "Portfolio Contact: Jane"

    @pytest.mark.asyncio
    async def test_invalid_request_never_reaches_mailer(self) -> None:
        mailer = AsyncMock()
        service = ContactService(mailer=mailer, contact=self.CONTACT, resend=self.RESEND)

        with pytest.raises(ValidationAppError):
            await service.submit(ContactRequest(name="Jane", email="jane@", message="Hi"))

        mailer.send.assert_not_awaited()

    def test_prepare_submission_reports_missing_fields(self) -> None:
        with pytest.raises(ValidationAppError) as exc_info:
            prepare_submission(ContactRequest(name="", email=" ", message="x"), self.CONTACT)

        assert exc_info.value.code == "missing_fields"
        assert exc_info.value.details["context"]["fields"] == ["name", "email"]

    def test_render_escapes_html(self) -> None:
        submission = prepare_submission(
            ContactRequest(name="<b>Eve</b>", email="eve@example.com", message="a & b"),
            self.CONTACT,
        )

        html = render_contact_email(submission)

        assert "&lt;b&gt;Eve&lt;/b&gt;" in html
        assert "a &amp; b" in html
