"""Question entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Alternative:
    """One answer option of a multiple-choice question.

    Attributes:
        description: Alternative text.
        is_correct: Whether this is the correct answer.
    """

    description: str
    is_correct: bool = False

    def to_dict(self) -> dict:
        return {"description": self.description, "is_correct": self.is_correct}
