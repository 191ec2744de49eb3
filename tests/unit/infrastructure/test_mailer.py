"""Tests for SMTP mail delivery."""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from app.core.exceptions import MailDeliveryError
from app.infrastructure.mailer import Mailer, MailMessage


@pytest.fixture
def mailer() -> Mailer:
    return Mailer(
        host="smtp.test",
        port=465,
        username="radio@seagulls.fm",
        password="pw",
        sender='"SeagullsFM" <radio@seagulls.fm>',
    )


@pytest.fixture
def message() -> MailMessage:
    return MailMessage(
        to="listener@example.com", subject="Hello", html="<p>Hi</p>", text="Hi"
    )


@pytest.mark.unit
class TestMailer:
    def test_build_has_html_alternative(self, mailer, message):
        email = mailer.build(message)

        assert email["To"] == "listener@example.com"
        sender = email["From"].addresses[0]
        assert sender.display_name == "SeagullsFM"
        assert sender.addr_spec == "radio@seagulls.fm"
        assert email.is_multipart()
        html = email.get_body(preferencelist=("html",))
        assert "<p>Hi</p>" in html.get_content()

    @pytest.mark.asyncio
    async def test_send_uses_implicit_tls(self, mailer, message):
        with patch("app.infrastructure.mailer.aiosmtplib.send", new=AsyncMock()) as send:
            await mailer.send(message)

        kwargs = send.call_args.kwargs
        assert kwargs["hostname"] == "smtp.test"
        assert kwargs["use_tls"] is True
        assert kwargs["start_tls"] is False

    @pytest.mark.asyncio
    async def test_send_wraps_smtp_errors(self, mailer, message):
        failing = AsyncMock(side_effect=aiosmtplib.SMTPException("auth failed"))
        with patch("app.infrastructure.mailer.aiosmtplib.send", new=failing):
            with pytest.raises(MailDeliveryError, match="auth failed"):
                await mailer.send(message)

    @pytest.mark.asyncio
    async def test_send_quietly_never_raises(self, mailer, message):
        failing = AsyncMock(side_effect=OSError("network down"))
        with patch("app.infrastructure.mailer.aiosmtplib.send", new=failing):
            outcome = await mailer.send_quietly(message)

        assert outcome.ok is False
        assert "network down" in outcome.error
