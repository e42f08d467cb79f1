"""
Quiz system for proximity-quiz

Parses generated quiz text and drives generation for a location.
"""

from .schema import QuizQuestion, GeneratedQuiz, OPTION_LABELS
from .parser import QuizTextParser, parse_quiz
from .generator import QuizGenerator

__all__ = [
    "QuizQuestion",
    "GeneratedQuiz",
    "OPTION_LABELS",
    "QuizTextParser",
    "parse_quiz",
    "QuizGenerator",
]
