"""Entry point for 'python -m quizbase' command.

This module allows the QuizBase CLI to be invoked using
'python -m quizbase'.
"""

from quizbase.cli import main

if __name__ == "__main__":
    main()
