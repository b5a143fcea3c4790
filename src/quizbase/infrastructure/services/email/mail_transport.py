"""Abstract base class for mail transports.

Defines the interface that all mail transports must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MailMessage:
    """A fully rendered outbound email."""

    to: str
    subject: str
    text_body: str
    html_body: str
    from_email: str
    from_name: str


@dataclass(frozen=True)
class DeliveryResult:
    """What a transport reports after accepting a message.

    Attributes:
        message_id: Identifier the transport assigned to the message.
        preview_url: Link to a rendered copy of the message. Only test
            mailboxes (e.g. Ethereal) provide one.
    """

    message_id: str
    preview_url: str | None = None


class MailTransport(ABC):
    """Abstract base class for mail transports.

    All transports (SMTP, console) must implement this interface.
    """

    @abstractmethod
    async def send(self, message: MailMessage) -> DeliveryResult:
        """Send an email.

        Args:
            message: The rendered message.

        Returns:
            The delivery id and optional preview locator.

        Raises:
            Exception: If the transport fails to accept the message.
        """
        pass

    @abstractmethod
    async def test_connection(self) -> tuple[bool, str | None]:
        """Test the transport connection.

        Returns:
            Tuple of (success: bool, error_message: str | None).
            If successful, error_message is None.
            If failed, error_message contains the error details.
        """
        pass
