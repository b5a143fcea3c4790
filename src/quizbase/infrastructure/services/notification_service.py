"""Password reset notifications.

Composes the password reset email around a freshly issued reset token and
hands it to the mail transport. Delivery is fire-and-forget: no retry, no
queue, and transport failures propagate to the caller unchanged.
"""

from typing import Any

from quizbase.core.logging import get_logger
from quizbase.infrastructure.auth.token_service import TokenService
from quizbase.infrastructure.services.email import (
    DeliveryResult,
    MailMessage,
    MailTransport,
    TemplateRenderer,
    get_template_renderer,
)

RESET_SUBJECT = "Password reset"
RESET_TEXT_TEMPLATE = "Use this token to reset your password: {{ token }}"
RESET_HTML_TEMPLATE = (
    "<p>Use this token to reset your password:</p><p><strong>{{ token }}</strong></p>"
)


class NotificationService:
    """Sends password reset emails."""

    def __init__(
        self,
        token_service: TokenService,
        transport: MailTransport,
        from_email: str,
        from_name: str,
        renderer: TemplateRenderer | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the notification service.

        Args:
            token_service: Issues the reset token embedded in the email.
            transport: Mail transport that delivers the message.
            from_email: Sender address.
            from_name: Sender display name.
            renderer: Template renderer for message bodies.
            logger: Structured logger.
        """
        self.token_service = token_service
        self.transport = transport
        self.from_email = from_email
        self.from_name = from_name
        self.renderer = renderer or get_template_renderer()
        self.logger = logger or get_logger("quizbase.notification_service")

    async def send_reset_email(self, email: str) -> DeliveryResult:
        """Mint a reset token for ``email`` and mail it.

        Args:
            email: Recipient address and subject of the reset token.

        Returns:
            The transport's delivery id and optional preview URL.

        Raises:
            Exception: Any transport failure, unchanged.
        """
        token = self.token_service.issue_reset_token(email)
        variables = {"token": token, "email": email}
        message = MailMessage(
            to=email,
            subject=RESET_SUBJECT,
            text_body=self.renderer.render(RESET_TEXT_TEMPLATE, variables),
            html_body=self.renderer.render(RESET_HTML_TEMPLATE, variables, html=True),
            from_email=self.from_email,
            from_name=self.from_name,
        )

        self.logger.info("Sending password reset email", email=email)
        result = await self.transport.send(message)
        self.logger.info(
            "Password reset email accepted",
            email=email,
            message_id=result.message_id,
            preview_url=result.preview_url,
        )
        return result
