"""Unit tests for the SMTP mail transport."""

import unittest.mock as mock

import pytest

from quizbase.infrastructure.services.email.mail_transport import MailMessage
from quizbase.infrastructure.services.email.smtp_transport import (
    SMTPMailTransport,
    SMTPSettings,
    preview_url_from_response,
)

ETHEREAL_RESPONSE = "250 Accepted [STATUS=new MSGID=YzBj.abc123]"


@pytest.fixture
def smtp_settings() -> SMTPSettings:
    """Fixture for SMTP settings."""
    return SMTPSettings(
        host="smtp.example.com",
        port=587,
        username="test_user",
        password="test_password",
        preview_base_url="https://ethereal.email",
    )


@pytest.fixture
def smtp_transport(smtp_settings: SMTPSettings) -> SMTPMailTransport:
    """Fixture for SMTP transport."""
    return SMTPMailTransport(smtp_settings, logger=mock.MagicMock())


@pytest.fixture
def message() -> MailMessage:
    return MailMessage(
        to="recipient@example.com",
        subject="Password reset",
        text_body="Text Body",
        html_body="<p>HTML Body</p>",
        from_email="sender@example.com",
        from_name="Sender Name",
    )


def _patch_smtp(response: str = ETHEREAL_RESPONSE):
    patcher = mock.patch("aiosmtplib.SMTP")
    mock_smtp_class = patcher.start()
    mock_smtp = mock.AsyncMock()
    mock_smtp.send_message.return_value = ({}, response)
    mock_smtp_class.return_value.__aenter__.return_value = mock_smtp
    return patcher, mock_smtp_class, mock_smtp


@pytest.mark.asyncio
async def test_smtp_send_success(smtp_transport: SMTPMailTransport, message: MailMessage) -> None:
    """Test successful email sending over STARTTLS."""
    patcher, mock_smtp_class, mock_smtp = _patch_smtp()
    try:
        result = await smtp_transport.send(message)
    finally:
        patcher.stop()

    mock_smtp_class.assert_called_once_with(
        hostname="smtp.example.com",
        port=587,
        use_tls=False,
        start_tls=True,
        validate_certs=True,
        timeout=10,
    )
    mock_smtp.starttls.assert_not_called()
    mock_smtp.login.assert_called_once_with("test_user", "test_password")
    mock_smtp.send_message.assert_called_once()

    # Verify message contents
    sent_message = mock_smtp.send_message.call_args[0][0]
    assert sent_message["Subject"] == "Password reset"
    assert sent_message["To"] == "recipient@example.com"
    assert "Sender Name <sender@example.com>" in sent_message["From"]
    assert result.message_id == sent_message["Message-ID"]
    assert result.message_id.endswith("@example.com>")
    assert result.preview_url == "https://ethereal.email/message/YzBj.abc123"


@pytest.mark.asyncio
async def test_smtp_send_ssl(smtp_settings: SMTPSettings, message: MailMessage) -> None:
    """Test email sending with implicit TLS."""
    ssl_settings = smtp_settings.model_copy(update={"port": 465, "use_ssl": True, "use_tls": False})
    transport = SMTPMailTransport(ssl_settings, logger=mock.MagicMock())

    patcher, mock_smtp_class, mock_smtp = _patch_smtp()
    try:
        await transport.send(message)
    finally:
        patcher.stop()

    mock_smtp_class.assert_called_once_with(
        hostname="smtp.example.com",
        port=465,
        use_tls=True,
        start_tls=False,
        validate_certs=True,
        timeout=10,
    )
    mock_smtp.starttls.assert_not_called()


@pytest.mark.asyncio
async def test_smtp_send_without_credentials_skips_login(
    smtp_settings: SMTPSettings, message: MailMessage
) -> None:
    transport = SMTPMailTransport(
        smtp_settings.model_copy(update={"username": None, "password": None}),
        logger=mock.MagicMock(),
    )

    patcher, _, mock_smtp = _patch_smtp()
    try:
        await transport.send(message)
    finally:
        patcher.stop()

    mock_smtp.login.assert_not_called()


@pytest.mark.asyncio
async def test_smtp_send_without_preview_reference(
    smtp_transport: SMTPMailTransport, message: MailMessage
) -> None:
    patcher, _, _ = _patch_smtp(response="250 OK: queued as 12345")
    try:
        result = await smtp_transport.send(message)
    finally:
        patcher.stop()

    assert result.preview_url is None


@pytest.mark.asyncio
async def test_smtp_send_failure_propagates(
    smtp_transport: SMTPMailTransport, message: MailMessage
) -> None:
    patcher, _, mock_smtp = _patch_smtp()
    mock_smtp.send_message.side_effect = ConnectionError("connection refused")
    try:
        with pytest.raises(ConnectionError, match="connection refused"):
            await smtp_transport.send(message)
    finally:
        patcher.stop()

    smtp_transport.logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_smtp_test_connection(smtp_transport: SMTPMailTransport) -> None:
    patcher, _, mock_smtp = _patch_smtp()
    try:
        ok, error = await smtp_transport.test_connection()
    finally:
        patcher.stop()

    assert ok is True
    assert error is None
    mock_smtp.login.assert_called_once_with("test_user", "test_password")


@pytest.mark.asyncio
async def test_smtp_test_connection_failure(smtp_transport: SMTPMailTransport) -> None:
    patcher, _, mock_smtp = _patch_smtp()
    mock_smtp.login.side_effect = Exception("auth failed")
    try:
        ok, error = await smtp_transport.test_connection()
    finally:
        patcher.stop()

    assert ok is False
    assert "auth failed" in error


class TestPreviewUrlFromResponse:

    def test_ethereal_response(self):
        assert (
            preview_url_from_response(ETHEREAL_RESPONSE, "https://ethereal.email/")
            == "https://ethereal.email/message/YzBj.abc123"
        )

    def test_no_base_url(self):
        assert preview_url_from_response(ETHEREAL_RESPONSE, None) is None

    def test_plain_response(self):
        assert preview_url_from_response("250 2.0.0 Ok", "https://ethereal.email") is None

    def test_missing_status(self):
        assert preview_url_from_response("250 Accepted [MSGID=abc]", "https://ethereal.email") is None
