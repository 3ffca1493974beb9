"""
Process-lifetime memo of enrichment results.

Keys are absolute file paths.  Each key has its own lock, so two threads
enriching the same file serialize (the second sees the first's result)
while unrelated files never wait on each other.  The guard lock is only
held long enough to fetch or create a key lock, never during a compute.
"""

import threading
from typing import Any, Callable, Dict, Hashable, Tuple


class ResultCache:
    """Thread-safe key/value memo with per-key mutual exclusion."""

    def __init__(self, name: str = "results"):
        self.name = name
        self._values: Dict[Hashable, Any] = {}
        self._key_locks: Dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock

    def get(self, key: Hashable) -> Tuple[Any, bool]:
        """Return ``(value, found)``."""
        with self._lock_for(key):
            if key in self._values:
                return self._values[key], True
            return None, False

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock_for(key):
            self._values[key] = value

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value, computing it at most once per key.

        If *compute* raises, nothing is stored and the exception propagates.
        """
        with self._lock_for(key):
            if key in self._values:
                return self._values[key]
            value = compute()
            self._values[key] = value
            return value

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key)[1]

    def __len__(self) -> int:
        with self._guard:
            return len(self._values)
