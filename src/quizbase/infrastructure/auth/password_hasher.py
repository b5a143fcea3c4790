"""Argon2id password digests.

Digests are self-describing PHC strings (``$argon2id$v=19$...``): the cost
parameters used at hashing time travel with the stored value, which is what
lets ``needs_rehash`` notice a digest made with weaker settings.
"""

from argon2 import PasswordHasher, Type
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from quizbase.core.exceptions import UnauthorizedError

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"

_hasher = PasswordHasher(type=Type.ID)


def hash_password(password: str) -> str:
    """Return a salted Argon2id digest of ``password``."""
    return _hasher.hash(password)


def verify_password(password: str, digest: str) -> bool:
    """Check ``password`` against a stored digest.

    Args:
        password: Plaintext candidate.
        digest: Stored Argon2 digest.

    Returns:
        True on a match, False on a plain mismatch.

    Raises:
        UnauthorizedError: If argon2 cannot parse or check the digest. An
            unusable stored credential fails the same way a wrong password
            does at the API.
    """
    try:
        return _hasher.verify(digest, password)
    except VerifyMismatchError:
        return False
    except (VerificationError, InvalidHashError) as e:
        raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE) from e


def needs_rehash(digest: str) -> bool:
    """Whether ``digest`` was produced with other parameters than the current ones."""
    return _hasher.check_needs_rehash(digest)
