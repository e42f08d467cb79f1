"""
proximity-quiz: location dwell-time triggers and generated location quizzes.

Tracks where users are, decides when they have lingered long enough to be
offered a quiz, and turns model-generated quiz text into structured questions.
"""

__version__ = "0.1.0"

from .config import config
from .geo import Location, haversine_m
from .tracking import (
    LocationStore,
    InMemoryLocationStore,
    UserLocationState,
    LocationTracker,
    TrackOutcome,
    TrackResult,
)
from .quiz import QuizQuestion, GeneratedQuiz, QuizTextParser, QuizGenerator, parse_quiz
from .service import ProximityQuizService

__all__ = [
    # Config
    "config",
    # Geo
    "Location",
    "haversine_m",
    # Tracking
    "LocationStore",
    "InMemoryLocationStore",
    "UserLocationState",
    "LocationTracker",
    "TrackOutcome",
    "TrackResult",
    # Quiz
    "QuizQuestion",
    "GeneratedQuiz",
    "QuizTextParser",
    "QuizGenerator",
    "parse_quiz",
    # Service
    "ProximityQuizService",
]
