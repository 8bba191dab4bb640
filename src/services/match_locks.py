"""One lock per game: requests that change the same game are handled one after the other."""

import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID
from weakref import WeakValueDictionary


class MatchLocks:
    """
    Registry of per-game locks. Different games never wait for each other.

    Entries are weak: a lock lives as long as some request holds it or waits for it, then it drops out of the registry.
    """

    def __init__(self) -> None:
        self._locks: WeakValueDictionary[UUID, threading.Lock] = WeakValueDictionary()
        self._registry_lock = threading.Lock()

    def lock_for(self, game_id: UUID) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def hold(self, game_id: UUID) -> Iterator[None]:
        with self.lock_for(game_id):
            yield

    def __len__(self) -> int:
        """Number of games that currently have a lock in use."""
        with self._registry_lock:
            return len(self._locks)


# Shared by every service in the process, so it does not matter whether a service is created per request or once.
MATCH_LOCKS = MatchLocks()
