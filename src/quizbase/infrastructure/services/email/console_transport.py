"""Console mail transport.

Used outside production when no SMTP server is configured. Messages are
not delivered; only their envelope is logged, never the body.
"""

import uuid
from typing import Any

from quizbase.core.logging import get_logger
from quizbase.infrastructure.services.email.mail_transport import (
    DeliveryResult,
    MailMessage,
    MailTransport,
)


class ConsoleMailTransport(MailTransport):
    """Logs outbound email to the console."""

    def __init__(self, logger: Any | None = None) -> None:
        self.logger = logger or get_logger("quizbase.console_transport")

    async def send(self, message: MailMessage) -> DeliveryResult:
        message_id = f"<{uuid.uuid4().hex}@console>"
        self.logger.info(
            "[EMAIL] Message not delivered (console transport)",
            message_id=message_id,
            to=message.to,
            subject=message.subject,
        )
        return DeliveryResult(message_id=message_id)

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None
