"""Validation of a question's alternatives.

A question has exactly five alternatives and exactly one of them is
marked correct.
"""

from typing import Any, Sequence

from quizbase.core.exceptions import InvalidArgumentError

ALTERNATIVES_PER_QUESTION = 5
EXACTLY_ONE_CORRECT_MESSAGE = "There must be exactly one correct alternative"


def validate_alternatives(alternatives: Sequence[Any]) -> None:
    """Check the alternative set of a question.

    Args:
        alternatives: Items exposing an ``is_correct`` attribute or key.

    Raises:
        InvalidArgumentError: If there are not exactly five alternatives or
            not exactly one of them is correct.
    """
    if len(alternatives) != ALTERNATIVES_PER_QUESTION:
        raise InvalidArgumentError(
            f"There must be exactly {ALTERNATIVES_PER_QUESTION} alternatives"
        )

    correct_count = sum(1 for alternative in alternatives if _is_correct(alternative))
    if correct_count != 1:
        raise InvalidArgumentError(EXACTLY_ONE_CORRECT_MESSAGE)


def _is_correct(alternative: Any) -> bool:
    if isinstance(alternative, dict):
        return alternative.get("is_correct") is True
    return getattr(alternative, "is_correct", False) is True
