"""Unit tests for the JWT signing backend."""

from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
import pytest

from quizbase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
)

SECRET_KEY = "jwt-test-secret-key-with-at-least-32-bytes"


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=SECRET_KEY, expires_delta=timedelta(minutes=15))


class TestJWTService:

    def test_sign_embeds_claims_and_registered_fields(self, jwt_service):
        token = jwt_service.sign({"id": "user123", "email": "test@example.com"})

        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="quizbase")

        assert decoded["id"] == "user123"
        assert decoded["email"] == "test@example.com"
        assert decoded["iss"] == "quizbase"
        assert "iat" in decoded
        assert "exp" in decoded

    def test_sign_applies_configured_lifetime(self, jwt_service):
        start_time = datetime.now(timezone.utc)
        token = jwt_service.sign({"id": "user123"})
        decoded = jwt.decode(token, SECRET_KEY, algorithms=["HS256"], issuer="quizbase")

        exp_dt = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)

        # Allow small window for execution time
        expected = start_time + timedelta(minutes=15)
        assert expected - timedelta(seconds=2) <= exp_dt <= expected + timedelta(seconds=2)

    def test_verify_round_trip(self, jwt_service):
        token = jwt_service.sign({"email": "test@example.com", "purpose": "reset"})

        payload = jwt_service.verify(token)

        assert payload["email"] == "test@example.com"
        assert payload["purpose"] == "reset"

    def test_verify_expired_token(self):
        expired_signer = JWTService(secret_key=SECRET_KEY, expires_delta=timedelta(seconds=-1))
        token = expired_signer.sign({"id": "user123"})

        with pytest.raises(TokenExpiredError):
            expired_signer.verify(token)

    def test_verify_wrong_secret(self, jwt_service):
        other = JWTService(secret_key="another-secret-key-with-at-least-32-bytes")
        token = other.sign({"id": "user123"})

        with pytest.raises(InvalidTokenError):
            jwt_service.verify(token)

    def test_verify_garbage(self, jwt_service):
        with pytest.raises(InvalidTokenError):
            jwt_service.verify("not.a.token")

    def test_verify_rejects_foreign_issuer(self, jwt_service):
        token = jwt.encode(
            {"id": "user123", "iss": "someone-else"}, SECRET_KEY, algorithm="HS256"
        )

        with pytest.raises(InvalidTokenError):
            jwt_service.verify(token)

    def test_errors_share_base_class(self):
        assert issubclass(TokenExpiredError, JWTError)
        assert issubclass(InvalidTokenError, JWTError)

    def test_defaults_come_from_settings(self):
        from quizbase.core.config import get_settings

        service = JWTService()
        settings = get_settings()

        assert service.secret_key == settings.secret_key
        assert service.expires_delta == timedelta(minutes=settings.token_expire_minutes)
