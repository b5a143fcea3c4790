"""FastAPI dependencies for services and authentication.

Services are built per request around the request's database session.
The authenticated caller is returned by ``get_current_user`` and passed to
handlers as a parameter; nothing is stored on the request.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from quizbase.core.config import get_settings
from quizbase.domain.services import AuthService, QuestionService, UserService
from quizbase.infrastructure.auth import SessionClaims, TokenService, token_service
from quizbase.infrastructure.persistence.database import get_db_session
from quizbase.infrastructure.persistence.repositories import UserRepository
from quizbase.infrastructure.services.email import MailTransport, build_mail_transport
from quizbase.infrastructure.services.notification_service import NotificationService

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_token_service() -> TokenService:
    """Get the shared token service."""
    return token_service


def get_mail_transport() -> MailTransport:
    """Build the mail transport selected by the settings."""
    return build_mail_transport(get_settings())


def get_notification_service(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    transport: Annotated[MailTransport, Depends(get_mail_transport)],
) -> NotificationService:
    settings = get_settings()
    return NotificationService(
        token_service=tokens,
        transport=transport,
        from_email=settings.mail_from_email,
        from_name=settings.mail_from_name,
    )


def get_auth_service(
    session: DbSession,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    notifications: Annotated[NotificationService, Depends(get_notification_service)],
) -> AuthService:
    return AuthService(
        session=session,
        user_repo=UserRepository(session),
        token_service=tokens,
        notification_service=notifications,
    )


def get_user_service(session: DbSession) -> UserService:
    return UserService(session)


def get_question_service(session: DbSession) -> QuestionService:
    return QuestionService(session)


async def get_current_user(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> SessionClaims:
    """Authenticate the caller from the Authorization header.

    Args:
        auth_service: Authentication service.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        SessionClaims: Identity claims of the caller.

    Raises:
        UnauthorizedError: If the header does not carry a valid session token.
    """
    return auth_service.validate_bearer_request(authorization)


# Type aliases for dependency injection
AuthenticatedUser = Annotated[SessionClaims, Depends(get_current_user)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
