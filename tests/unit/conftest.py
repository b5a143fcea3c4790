"""Pytest configuration for unit tests."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from quizbase.infrastructure.auth import JWTService, TokenService

TEST_SECRET = "unit-test-secret-key-with-at-least-32-bytes"


@pytest.fixture
def signer() -> JWTService:
    """JWT signer with a fixed secret and one hour lifetime."""
    return JWTService(secret_key=TEST_SECRET, expires_delta=timedelta(hours=1))


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double recording structured calls."""
    return MagicMock()


@pytest.fixture
def token_service(signer: JWTService, mock_logger: MagicMock) -> TokenService:
    """Token service over the test signer."""
    return TokenService(signer=signer, logger=mock_logger)
