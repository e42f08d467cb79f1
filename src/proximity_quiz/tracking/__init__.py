"""
Location tracking for proximity-quiz

Per-user anchor state and the dwell-time trigger decision.
"""

from .store import LocationStore, InMemoryLocationStore, UserLocationState
from .tracker import LocationTracker, TrackOutcome, TrackResult

__all__ = [
    "LocationStore",
    "InMemoryLocationStore",
    "UserLocationState",
    "LocationTracker",
    "TrackOutcome",
    "TrackResult",
]
