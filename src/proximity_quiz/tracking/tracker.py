"""
Dwell-time trigger engine

Decides, for each location report, whether the user is new, has moved (or
has not stayed long enough), or has dwelt near the same anchor point long
enough to be offered a quiz.

The anchor is NOT advanced on a trigger: every report after a trigger keeps
measuring dwell time from the original anchor until the user moves away.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from ..config import config
from ..geo import Location, haversine_m
from .store import InMemoryLocationStore, LocationStore, UserLocationState

logger = logging.getLogger(__name__)


class TrackOutcome(str, Enum):
    """Result of a single location report."""
    INITIALIZED = "initialized"
    UPDATED = "updated"
    TRIGGERED = "triggered"


OUTCOME_MESSAGES = {
    TrackOutcome.INITIALIZED: "User location initialized.",
    TrackOutcome.UPDATED: "Location updated.",
    TrackOutcome.TRIGGERED: "Trigger quiz",
}


@dataclass
class TrackResult:
    """Outcome of LocationTracker.update()."""
    kind: TrackOutcome
    location: Optional[Location] = None  # Only set when triggered
    distance_m: Optional[float] = None
    elapsed_minutes: Optional[float] = None

    @property
    def triggered(self) -> bool:
        return self.kind == TrackOutcome.TRIGGERED

    @property
    def message(self) -> str:
        return OUTCOME_MESSAGES[self.kind]

    def to_dict(self) -> dict:
        result = {"message": self.message}
        if self.location is not None:
            result["location"] = self.location.to_dict()
        return result


class LocationTracker:
    """
    Tracks per-user anchor points and decides when to trigger a quiz.

    Each update runs under the store's per-user lock, so concurrent reports
    for the same user are applied one at a time.
    """

    def __init__(
        self,
        store: Optional[LocationStore] = None,
        *,
        proximity_radius_m: Optional[float] = None,
        dwell_minutes: Optional[float] = None,
        distance_fn: Callable[[Location, Location], float] = haversine_m,
    ):
        """
        Initialize tracker.

        Args:
            store: State store (defaults to a fresh in-memory store)
            proximity_radius_m: Reports closer than this count as "still here"
            dwell_minutes: Minimum dwell time before triggering
            distance_fn: Distance in meters between two locations
        """
        self.store = store if store is not None else InMemoryLocationStore()
        self.proximity_radius_m = (
            proximity_radius_m if proximity_radius_m is not None
            else config.tracker.proximity_radius_m
        )
        self.dwell_minutes = (
            dwell_minutes if dwell_minutes is not None
            else config.tracker.dwell_minutes
        )
        self.distance_fn = distance_fn

    def update(self, user_id: str, location: Location, now: datetime) -> TrackResult:
        """
        Record a location report and decide the outcome.

        Args:
            user_id: Opaque user key
            location: Reported position
            now: Time of the report (caller-supplied, expected non-decreasing)

        Returns:
            TrackResult with kind initialized, updated or triggered
        """
        while True:
            lock = self.store.lock_for(user_id)
            with lock:
                # Eviction retired this lock while we waited on it
                if self.store.lock_for(user_id) is not lock:
                    continue
                return self._decide(user_id, location, now)

    def _decide(self, user_id: str, location: Location, now: datetime) -> TrackResult:
        state = self.store.get(user_id)

        if state is None:
            self.store.put(UserLocationState(user_id, location, now))
            logger.debug(f"Initialized location for user {user_id}")
            return TrackResult(kind=TrackOutcome.INITIALIZED)

        distance = self.distance_fn(state.last_location, location)
        elapsed = None

        if distance < self.proximity_radius_m:
            elapsed = (now - state.timestamp).total_seconds() / 60
            if elapsed >= self.dwell_minutes:
                logger.debug(
                    f"Triggered for user {user_id}: {distance:.1f}m from anchor "
                    f"after {elapsed:.1f} min"
                )
                return TrackResult(
                    kind=TrackOutcome.TRIGGERED,
                    location=location,
                    distance_m=distance,
                    elapsed_minutes=elapsed,
                )

        self.store.put(UserLocationState(user_id, location, now))
        logger.debug(f"Updated location for user {user_id} (moved {distance:.1f}m)")
        return TrackResult(
            kind=TrackOutcome.UPDATED,
            distance_m=distance,
            elapsed_minutes=elapsed,
        )

    def evict_stale(self, now: datetime, ttl_seconds: Optional[float] = None) -> int:
        """
        Drop users not heard from within the TTL.

        A TTL of 0 (the default config) disables eviction.

        Returns:
            Number of users evicted
        """
        ttl = ttl_seconds if ttl_seconds is not None else config.tracker.state_ttl_seconds
        if ttl <= 0:
            return 0
        evicted = self.store.evict_stale(now, timedelta(seconds=ttl))
        if evicted:
            logger.info(f"Evicted {evicted} stale user location(s)")
        return evicted
