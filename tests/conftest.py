"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from quizbase.infrastructure.auth import hash_password
from quizbase.infrastructure.persistence.database import Base
from quizbase.infrastructure.persistence.models import UserModel
from quizbase.infrastructure.services.email import DeliveryResult, MailMessage, MailTransport

TEST_PASSWORD = "secret123"
PREVIEW_URL = "https://ethereal.email/message/test-msg"


class RecordingMailTransport(MailTransport):
    """Mail transport that keeps sent messages in memory."""

    def __init__(self) -> None:
        self.sent: list[MailMessage] = []

    async def send(self, message: MailMessage) -> DeliveryResult:
        self.sent.append(message)
        return DeliveryResult(
            message_id=f"<msg-{len(self.sent)}@test>",
            preview_url=PREVIEW_URL,
        )

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None

    def last_token(self) -> str:
        """Extract the reset token from the last plain text body."""
        return self.sent[-1].text_body.rsplit(": ", 1)[-1].strip()


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database with foreign keys enforced.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def mail_transport() -> RecordingMailTransport:
    """Mail transport capturing outgoing messages."""
    return RecordingMailTransport()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, mail_transport: RecordingMailTransport
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database and mail dependencies."""
    from quizbase.infrastructure.api.app import app
    from quizbase.infrastructure.api.dependencies import get_mail_transport
    from quizbase.infrastructure.persistence.database import get_db_session

    async def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_mail_transport] = lambda: mail_transport

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def user(db_session: AsyncSession) -> UserModel:
    """Create a user whose password is ``TEST_PASSWORD``."""
    model = UserModel(
        name="Ada Lovelace",
        email="ada@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(model)
    await db_session.commit()
    await db_session.refresh(model)
    return model


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> UserModel:
    """Create a second user whose password is ``TEST_PASSWORD``."""
    model = UserModel(
        name="Grace Hopper",
        email="grace@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    db_session.add(model)
    await db_session.commit()
    await db_session.refresh(model)
    return model


def build_alternatives(correct_index: int | None = 0, count: int = 5) -> list[dict]:
    """Build alternative payloads with the given one marked correct."""
    return [
        {"description": f"Option {i + 1}", "is_correct": i == correct_index}
        for i in range(count)
    ]


@pytest.fixture
def make_alternatives():
    """Factory for alternative payloads, see ``build_alternatives``."""
    return build_alternatives
