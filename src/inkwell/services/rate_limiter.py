"""Per-identity sliding-window admission control."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, List, Protocol, Sequence

LOGGER = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 60.0
DEFAULT_MAX_REQUESTS = 5
UNKNOWN_IDENTITY = "unknown"


class RateWindowStore(Protocol):
    """Storage for each identity's recent request instants."""

    def get(self, identity: str) -> List[float]:  # pragma: no cover - protocol stub
        ...

    def set(self, identity: str, instants: Sequence[float]) -> None:  # pragma: no cover - protocol stub
        ...

    def clear(self, identity: str | None = None) -> None:  # pragma: no cover - protocol stub
        ...


class InMemoryRateWindowStore:
    """Process-local store; one instance per owning application."""

    def __init__(self) -> None:
        self._windows: Dict[str, List[float]] = {}

    def get(self, identity: str) -> List[float]:
        return list(self._windows.get(identity, ()))

    def set(self, identity: str, instants: Sequence[float]) -> None:
        self._windows[identity] = list(instants)

    def clear(self, identity: str | None = None) -> None:
        if identity is None:
            self._windows.clear()
        else:
            self._windows.pop(identity, None)

    def identities(self) -> tuple[str, ...]:
        return tuple(self._windows)


class RateLimiter:
    """Sliding window log limiter: at most ``max_requests`` per ``window``.

    An instant is stale once ``now - instant >= window``. Stale instants are
    pruned lazily on every :meth:`admit`, and the pruned list is written back
    even when the request is rejected. Each identity's read-modify-write runs
    under its own lock so distinct identities never contend.
    """

    def __init__(
        self,
        *,
        window: float = DEFAULT_WINDOW_SECONDS,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        store: RateWindowStore | None = None,
    ) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self._window = float(window)
        self._max_requests = int(max_requests)
        self._store: RateWindowStore = store if store is not None else InMemoryRateWindowStore()
        self._locks: Dict[str, Lock] = {}
        self._locks_guard = Lock()

    @property
    def window(self) -> float:
        return self._window

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def store(self) -> RateWindowStore:
        return self._store

    def admit(self, identity: str | None, now: float) -> bool:
        """Record a request for ``identity`` at ``now`` if the quota allows it."""

        key = normalize_identity(identity)
        with self._lock_for(key):
            recent = self._prune(self._store.get(key), now)
            if len(recent) >= self._max_requests:
                self._store.set(key, recent)
                LOGGER.warning(
                    "Rate limit exceeded for %s (%s requests in %ss window)",
                    key,
                    len(recent),
                    self._window,
                )
                return False
            recent.append(now)
            self._store.set(key, recent)
            return True

    def retry_after(self, identity: str | None, now: float) -> float:
        """Seconds until ``identity`` regains a slot; ``0.0`` when one is free."""

        key = normalize_identity(identity)
        with self._lock_for(key):
            recent = self._prune(self._store.get(key), now)
        if len(recent) < self._max_requests:
            return 0.0
        oldest = recent[len(recent) - self._max_requests]
        return max(0.0, oldest + self._window - now)

    def reset(self, identity: str | None = None) -> None:
        if identity is None:
            self._store.clear()
            return
        key = normalize_identity(identity)
        with self._lock_for(key):
            self._store.clear(key)

    def _prune(self, instants: Sequence[float], now: float) -> List[float]:
        return [instant for instant in instants if now - instant < self._window]

    def _lock_for(self, key: str) -> Lock:
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            return lock


def normalize_identity(identity: str | None) -> str:
    """Collapse missing identities into the shared sentinel bucket."""

    cleaned = (identity or "").strip()
    return cleaned or UNKNOWN_IDENTITY


__all__ = [
    "DEFAULT_MAX_REQUESTS",
    "DEFAULT_WINDOW_SECONDS",
    "InMemoryRateWindowStore",
    "RateLimiter",
    "RateWindowStore",
    "UNKNOWN_IDENTITY",
    "normalize_identity",
]
