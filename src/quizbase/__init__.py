"""QuizBase - multiple-choice question bank.

Users register, authenticate with a bearer token, write questions with
five alternatives, and recover their password through an emailed token.
"""

__version__ = "0.1.0"
