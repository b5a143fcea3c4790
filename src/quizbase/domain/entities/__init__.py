"""Domain entities for QuizBase.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from quizbase.domain.entities.question import Alternative
from quizbase.domain.entities.user import LoginResult, UserProfile

__all__ = [
    "Alternative",
    "LoginResult",
    "UserProfile",
]
