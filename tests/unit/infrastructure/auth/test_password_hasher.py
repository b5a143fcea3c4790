"""Unit tests for password hashing utilities."""

from unittest.mock import patch

import pytest
from argon2.exceptions import VerificationError

from quizbase.core.exceptions import UnauthorizedError
from quizbase.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2_hash(self):
        """Test that hash_password returns a valid Argon2 hash."""
        hashed = hash_password("secret123")

        assert hashed.startswith("$argon2id$")
        assert "secret123" not in hashed

    def test_hash_password_different_for_same_input(self):
        """Test that hashing the same password twice produces different hashes (due to salt)."""
        assert hash_password("secret123") != hash_password("secret123")


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        hashed = hash_password("secret123")

        assert verify_password("secret123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("secret123")

        assert verify_password("wrong-password", hashed) is False

    def test_verify_password_case_sensitive(self):
        hashed = hash_password("Secret123")

        assert verify_password("secret123", hashed) is False

    def test_verify_password_malformed_hash_is_auth_failure(self):
        """A digest that is not an Argon2 hash surfaces as an authentication failure."""
        with pytest.raises(UnauthorizedError):
            verify_password("secret123", "not-a-hash")

    def test_verify_password_library_error_is_auth_failure(self):
        with patch("quizbase.infrastructure.auth.password_hasher._hasher") as mock_hasher:
            mock_hasher.verify.side_effect = VerificationError("boom")

            with pytest.raises(UnauthorizedError, match="Invalid credentials"):
                verify_password("secret123", "$argon2id$whatever")


class TestNeedsRehash:
    """Tests for needs_rehash function."""

    def test_fresh_hash_does_not_need_rehash(self):
        assert needs_rehash(hash_password("secret123")) is False
