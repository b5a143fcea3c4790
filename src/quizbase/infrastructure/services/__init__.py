"""Infrastructure services (outbound notifications)."""

from quizbase.infrastructure.services.notification_service import NotificationService

__all__ = ["NotificationService"]
