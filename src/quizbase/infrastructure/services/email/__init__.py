"""Mail transports and message rendering."""

from quizbase.core.config import Settings
from quizbase.infrastructure.services.email.console_transport import ConsoleMailTransport
from quizbase.infrastructure.services.email.mail_transport import (
    DeliveryResult,
    MailMessage,
    MailTransport,
)
from quizbase.infrastructure.services.email.smtp_transport import (
    SMTPMailTransport,
    SMTPSettings,
)
from quizbase.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)


def build_mail_transport(settings: Settings) -> MailTransport:
    """Select the mail transport for the given settings.

    SMTP is used when a host is configured, otherwise mail goes to the console.
    Production settings always carry a host.
    The preview link is only derived outside production.
    """
    if not settings.smtp_host:
        return ConsoleMailTransport()
    return SMTPMailTransport(
        SMTPSettings(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            use_ssl=settings.smtp_use_ssl,
            timeout=settings.smtp_timeout,
            validate_certs=settings.smtp_validate_certs,
            preview_base_url=None if settings.is_production else settings.mail_preview_base_url,
        )
    )


__all__ = [
    "ConsoleMailTransport",
    "DeliveryResult",
    "MailMessage",
    "MailTransport",
    "SMTPMailTransport",
    "SMTPSettings",
    "TemplateRenderer",
    "build_mail_transport",
    "get_template_renderer",
]
