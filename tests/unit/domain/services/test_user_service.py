"""Unit tests for the user service."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from quizbase.core.exceptions import InvalidArgumentError, NotFoundError
from quizbase.domain.entities import Alternative, UserProfile
from quizbase.domain.services import QuestionService, UserService
from quizbase.infrastructure.auth import verify_password
from quizbase.infrastructure.persistence.models import QuestionModel, UserModel


@pytest.fixture
def user_service(db_session, mock_logger) -> UserService:
    return UserService(db_session, logger=mock_logger)


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_profile_without_hash(self, user_service, db_session):
        profile = await user_service.create("Ada Lovelace", "ada@example.com", "secret123")

        assert isinstance(profile, UserProfile)
        assert profile.email == "ada@example.com"
        assert profile.name == "Ada Lovelace"
        assert profile.created_at is not None

        stored = await db_session.get(UserModel, profile.id)
        assert stored.password_hash != "secret123"
        assert verify_password("secret123", stored.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, user_service, user):
        with pytest.raises(InvalidArgumentError, match="A user with this email already exists"):
            await user_service.create("Someone", user.email, "secret123")

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, user_service, user):
        profile = await user_service.create("Ada Again", user.email.upper(), "secret123")

        assert profile.email == "ADA@EXAMPLE.COM"

    @pytest.mark.asyncio
    async def test_empty_email_rejected(self, user_service):
        with pytest.raises(InvalidArgumentError):
            await user_service.create("Nobody", "", "secret123")

    @pytest.mark.asyncio
    async def test_unique_constraint_is_the_final_guard(self, db_session, mock_logger):
        """A registration that passes the early check but loses the race still fails cleanly."""
        user_repo = AsyncMock()
        user_repo.email_exists.return_value = False
        user_repo.create.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))
        service = UserService(db_session, user_repo=user_repo, logger=mock_logger)

        with pytest.raises(InvalidArgumentError, match="A user with this email already exists"):
            await service.create("Ada", "ada@example.com", "secret123")


class TestRead:

    @pytest.mark.asyncio
    async def test_list_all(self, user_service, user, other_user):
        profiles = await user_service.list_all()

        assert {p.email for p in profiles} == {"ada@example.com", "grace@example.com"}
        assert all(isinstance(p, UserProfile) for p in profiles)

    @pytest.mark.asyncio
    async def test_get_by_id(self, user_service, user):
        profile = await user_service.get_by_id(user.id)

        assert profile.id == user.id

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.get_by_id("missing")

    @pytest.mark.asyncio
    async def test_get_by_id_empty(self, user_service):
        with pytest.raises(InvalidArgumentError, match="Invalid id"):
            await user_service.get_by_id("")


class TestChangePassword:

    @pytest.mark.asyncio
    async def test_change_password(self, user_service, user, db_session):
        await user_service.change_password(user.id, "new-secret")

        stored = await db_session.get(UserModel, user.id)
        await db_session.refresh(stored)
        assert verify_password("new-secret", stored.password_hash)
        assert not verify_password("secret123", stored.password_hash)

    @pytest.mark.asyncio
    async def test_change_password_missing_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.change_password("missing", "new-secret")


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete(self, user_service, user):
        result = await user_service.delete(user.id)

        assert result == {"deleted_user_id": user.id}
        with pytest.raises(NotFoundError):
            await user_service.get_by_id(user.id)

    @pytest.mark.asyncio
    async def test_delete_cascades_to_questions(self, user_service, user, db_session, mock_logger):
        await QuestionService(db_session, logger=mock_logger).create(
            "Q",
            "math",
            [Alternative(description=f"Option {i}", is_correct=i == 0) for i in range(5)],
            user.id,
        )
        db_session.expunge_all()

        await user_service.delete(user.id)

        count = await db_session.execute(select(func.count(QuestionModel.id)))
        assert count.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_delete_missing(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.delete("missing")
