"""
Proximity quiz service

Ties the two halves together:
1. Location reports go through the dwell-time tracker
2. Quiz requests go to a text-generation provider and the quiz parser

The HTTP app and the CLI both sit on top of this class.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .config import config
from .geo import Location
from .providers import ModelProvider, get_provider
from .quiz.generator import QuizGenerator
from .quiz.schema import GeneratedQuiz
from .tracking.tracker import LocationTracker, TrackResult

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


class ProximityQuizService:
    """
    Handles location tracking and quiz generation requests.

    One instance owns the tracker state for the lifetime of the process.
    """

    def __init__(
        self,
        tracker: Optional[LocationTracker] = None,
        provider: Optional[ModelProvider] = None,
        model: Optional[str] = None,
    ):
        """
        Initialize service.

        Args:
            tracker: Location tracker (defaults to one with an in-memory store)
            provider: Text-generation provider (defaults to the configured one)
            model: Model override (defaults to the configured model)
        """
        self.tracker = tracker or LocationTracker()
        if provider is None:
            provider = get_provider(config.generation.provider)
            model = model or config.generation.get_model()
        self.provider = provider
        self.generator = QuizGenerator(provider, model=model)

    def track_location(
        self,
        user_id: str,
        latitude: float,
        longitude: float,
        now: Optional[datetime] = None,
    ) -> TrackResult:
        """Record a location report for a user; ``now`` defaults to the current time."""
        now = now or utcnow()
        result = self.tracker.update(user_id, Location(latitude, longitude), now)
        if result.triggered:
            logger.info(f"Quiz triggered for user {user_id} at ({latitude}, {longitude})")
        self.tracker.evict_stale(now)
        return result

    async def generate_quiz(self, location_keyword: str) -> GeneratedQuiz:
        """Generate a quiz about a location keyword. Provider errors propagate."""
        return await self.generator.generate(location_keyword)

    async def close(self) -> None:
        await self.provider.close()
