"""SMTP mail transport implementation.

Uses aiosmtplib for asynchronous email sending via SMTP.
"""

import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Any, Optional

import aiosmtplib
from pydantic import BaseModel, ConfigDict

from quizbase.core.logging import get_logger
from quizbase.infrastructure.services.email.mail_transport import (
    DeliveryResult,
    MailMessage,
    MailTransport,
)

# Test mailboxes answer DATA with e.g. "250 Accepted [STATUS=new MSGID=abc.def]"
_RESPONSE_PROPS = re.compile(r"\[([^\]]+)\]\s*$")
_RESPONSE_PROP = re.compile(r"\b([A-Z0-9]+)=(\S+)")


class SMTPSettings(BaseModel):
    """Configuration settings for the SMTP transport."""

    model_config = ConfigDict(from_attributes=True)

    host: str
    port: int = 587
    username: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    use_ssl: bool = False
    timeout: int = 10
    validate_certs: bool = True
    preview_base_url: Optional[str] = None


def preview_url_from_response(response: str, base_url: str | None) -> str | None:
    """Build a web preview link from a test mailbox SMTP response.

    Args:
        response: Final SMTP server reply to the DATA command.
        base_url: Web root of the test mailbox service.

    Returns:
        The preview URL, or None when the reply carries no message reference.
    """
    if not base_url or not response:
        return None
    match = _RESPONSE_PROPS.search(response)
    if match is None:
        return None
    props = dict(_RESPONSE_PROP.findall(match.group(1)))
    if "STATUS" in props and "MSGID" in props:
        return f"{base_url.rstrip('/')}/message/{props['MSGID']}"
    return None


class SMTPMailTransport(MailTransport):
    """SMTP mail transport implementation.

    Sends emails using the SMTP protocol via aiosmtplib.
    """

    def __init__(self, settings: SMTPSettings, logger: Any | None = None) -> None:
        """Initialize the SMTP transport.

        Args:
            settings: SMTP configuration settings.
            logger: Structured logger.
        """
        self.settings = settings
        self.logger = logger or get_logger("quizbase.smtp_transport")

    def _connect(self) -> aiosmtplib.SMTP:
        # aiosmtplib upgrades with STARTTLS while connecting when start_tls is set;
        # its use_tls means implicit TLS
        return aiosmtplib.SMTP(
            hostname=self.settings.host,
            port=self.settings.port,
            use_tls=self.settings.use_ssl,
            start_tls=self.settings.use_tls and not self.settings.use_ssl,
            validate_certs=self.settings.validate_certs,
            timeout=self.settings.timeout,
        )

    async def _prepare(self, smtp: aiosmtplib.SMTP) -> None:
        if self.settings.username:
            await smtp.login(self.settings.username, self.settings.password or "")

    async def send(self, message: MailMessage) -> DeliveryResult:
        """Send an email via SMTP.

        Raises:
            Exception: If SMTP connection or sending fails.
        """
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = formataddr((message.from_name, message.from_email))
        mime["To"] = message.to
        domain = message.from_email.rpartition("@")[2] or None
        message_id = make_msgid(domain=domain)
        mime["Message-ID"] = message_id

        mime.attach(MIMEText(message.text_body, "plain"))
        mime.attach(MIMEText(message.html_body, "html"))

        try:
            async with self._connect() as smtp:
                await self._prepare(smtp)
                _, response = await smtp.send_message(mime)
        except Exception as e:
            self.logger.error("Failed to send email via SMTP", host=self.settings.host, error=str(e))
            raise

        preview_url = preview_url_from_response(response, self.settings.preview_base_url)
        if preview_url:
            self.logger.info("Message preview available", preview_url=preview_url)
        return DeliveryResult(message_id=message_id, preview_url=preview_url)

    async def test_connection(self) -> tuple[bool, str | None]:
        """Test the SMTP connection and authentication."""
        try:
            async with self._connect() as smtp:
                await self._prepare(smtp)
            return True, None
        except Exception as e:
            error_msg = f"SMTP connection failed: {str(e)}"
            self.logger.error(error_msg, host=self.settings.host)
            return False, error_msg
