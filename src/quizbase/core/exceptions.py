"""Domain error taxonomy.

Every failure a caller can observe is one of these kinds. Errors raised by
collaborators (database, mail transport) are not wrapped and propagate as-is.
"""


class QuizBaseError(Exception):
    """Base class for all domain errors."""

    kind = "Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(QuizBaseError):
    """Raised when a referenced entity does not exist."""

    kind = "Not found"


class UnauthorizedError(QuizBaseError):
    """Raised on credential or token failure.

    Expired, malformed and wrong-purpose tokens all surface as this error
    with the same message.
    """

    kind = "Unauthorized"


class InvalidArgumentError(QuizBaseError):
    """Raised when a request violates a domain rule."""

    kind = "Invalid argument"


class ForbiddenError(QuizBaseError):
    """Raised when an authenticated user may not act on a resource."""

    kind = "Forbidden"
