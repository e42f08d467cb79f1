"""
Per-user location state storage

The store is volatile and lives for the lifetime of the process. The tracker
holds the lock returned by ``lock_for`` around each read-decide-write;
``get`` and ``put`` on their own are not synchronized.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ContextManager, Optional

from ..geo import Location


@dataclass
class UserLocationState:
    """Anchor point and time of the last recorded report for one user."""
    user_id: str
    last_location: Location
    timestamp: datetime


class LocationStore(ABC):
    """Key-value store of UserLocationState keyed by user id."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[UserLocationState]:
        """Return the state for a user, or None if never seen."""
        pass

    @abstractmethod
    def put(self, state: UserLocationState) -> None:
        """Insert or replace the state for ``state.user_id``."""
        pass

    @abstractmethod
    def lock_for(self, user_id: str) -> ContextManager:
        """
        Mutual exclusion for one user's read-modify-write.

        Eviction may retire a user's lock, so a caller that has acquired
        the lock must check that ``lock_for`` still returns the same object.
        """
        pass

    @abstractmethod
    def evict_stale(self, now: datetime, max_age: timedelta) -> int:
        """Drop states last updated more than ``max_age`` before ``now``."""
        pass

    @abstractmethod
    def __contains__(self, user_id: str) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class InMemoryLocationStore(LocationStore):
    """
    Dict-backed store with one lock per user.

    Nothing is removed unless evict_stale() is called explicitly.
    """

    def __init__(self):
        self._states: dict[str, UserLocationState] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, user_id: str) -> Optional[UserLocationState]:
        return self._states.get(user_id)

    def put(self, state: UserLocationState) -> None:
        self._states[state.user_id] = state

    def lock_for(self, user_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    def evict_stale(self, now: datetime, max_age: timedelta) -> int:
        cutoff = now - max_age
        evicted = 0
        with self._guard:
            stale = [uid for uid, s in self._states.items() if s.timestamp < cutoff]
            for user_id in stale:
                lock = self._locks.get(user_id)
                # Skip users with an update in flight
                if lock is not None and not lock.acquire(blocking=False):
                    continue
                try:
                    del self._states[user_id]
                    self._locks.pop(user_id, None)
                    evicted += 1
                finally:
                    if lock is not None:
                        lock.release()
        return evicted

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._states

    def __len__(self) -> int:
        return len(self._states)
