"""SMTP transport against a local SMTP server."""

import socket
import ssl
from unittest.mock import MagicMock

import aiosmtplib
import pytest
import trustme
from aiosmtpd.controller import Controller

from quizbase.infrastructure.services.email import (
    MailMessage,
    SMTPMailTransport,
    SMTPSettings,
)


class CapturingHandler:
    """Records every accepted message and whether it arrived over TLS."""

    def __init__(self) -> None:
        self.messages: list[tuple[bytes, bool]] = []

    async def handle_DATA(self, server, session, envelope):
        self.messages.append((envelope.content, session.ssl is not None))
        return "250 Accepted [STATUS=new MSGID=local.123]"


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="module")
def tls_context() -> ssl.SSLContext:
    ca = trustme.CA()
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    ca.issue_cert("127.0.0.1", "localhost").configure_cert(context)
    return context


def _start_server(handler: CapturingHandler, tls_context: ssl.SSLContext | None):
    options = {"tls_context": tls_context} if tls_context else {}
    controller = Controller(handler, hostname="127.0.0.1", port=_free_port(), **options)
    controller.start()
    return controller


@pytest.fixture
def handler() -> CapturingHandler:
    return CapturingHandler()


@pytest.fixture
def starttls_server(handler, tls_context):
    controller = _start_server(handler, tls_context)
    yield controller
    controller.stop()


@pytest.fixture
def plain_server(handler):
    controller = _start_server(handler, None)
    yield controller
    controller.stop()


@pytest.fixture
def message() -> MailMessage:
    return MailMessage(
        to="ada@example.com",
        subject="Password reset",
        text_body="Use this token to reset your password: abc",
        html_body="<p>abc</p>",
        from_email="no-reply@quizbase.local",
        from_name="QuizBase",
    )


def _transport(controller: Controller, **overrides) -> SMTPMailTransport:
    settings = SMTPSettings(
        host=controller.hostname,
        port=controller.port,
        validate_certs=False,
        preview_base_url="https://ethereal.email",
    )
    return SMTPMailTransport(settings.model_copy(update=overrides), logger=MagicMock())


@pytest.mark.asyncio
async def test_send_upgrades_with_starttls(starttls_server, handler, message):
    result = await _transport(starttls_server).send(message)

    assert len(handler.messages) == 1
    content, over_tls = handler.messages[0]
    assert over_tls is True
    assert b"Subject: Password reset" in content
    assert result.preview_url == "https://ethereal.email/message/local.123"


@pytest.mark.asyncio
async def test_connection_check_with_starttls(starttls_server):
    assert await _transport(starttls_server).test_connection() == (True, None)


@pytest.mark.asyncio
async def test_send_without_tls(plain_server, handler, message):
    await _transport(plain_server, use_tls=False).send(message)

    assert handler.messages[0][1] is False


@pytest.mark.asyncio
async def test_starttls_required_but_not_offered(plain_server, handler, message):
    with pytest.raises(aiosmtplib.SMTPException):
        await _transport(plain_server).send(message)

    assert handler.messages == []
