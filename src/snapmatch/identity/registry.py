"""
Name→count registry used to disambiguate repeated assertions.

Every resolution of a snapshot key takes the next sequence number for that
key, starting at 0. Numbers are never reused during the lifetime of the
registry, so two assertions with the same owner, method and name always land
in different files.

Lifecycle
---------
The registry lives in memory only. A default instance is shared by the whole
process (:func:`get_registry`); :func:`init_registry` replaces it with an
empty one at the start of a test run. Nothing is ever persisted, so the
numbering depends on the order assertions execute in.
"""

from __future__ import annotations

import threading
from typing import ClassVar


class CounterRegistry:
    """
    Thread-safe mapping from snapshot key to the next sequence number.

    A single lock guards the map, which makes :meth:`next_sequence` an atomic
    increment-and-fetch across threads.
    """

    _instance: ClassVar[CounterRegistry | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> CounterRegistry:
        """Accessor for the process-wide default registry."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def init(cls) -> CounterRegistry:
        """Install (and return) a fresh, empty process-wide registry."""
        with cls._instance_lock:
            cls._instance = cls()
            return cls._instance

    def next_sequence(self, key: str) -> int:
        """Return the current count for ``key`` and increment it atomically."""
        with self._lock:
            current = self._counts.get(key, 0)
            self._counts[key] = current + 1
        return current

    def peek(self, key: str) -> int:
        """Return the number the next call for ``key`` would hand out.

        Introspection helper for tests and debugging; resolution only ever
        goes through :meth:`next_sequence`.
        """
        with self._lock:
            return self._counts.get(key, 0)

    def counts(self) -> dict[str, int]:
        """Return a sorted copy of the key→next-sequence map.

        Introspection helper like :meth:`peek`; not used when resolving paths.
        """
        with self._lock:
            return dict(sorted(self._counts.items()))


def get_registry() -> CounterRegistry:
    return CounterRegistry.get_instance()


def init_registry() -> CounterRegistry:
    return CounterRegistry.init()


__all__ = ["CounterRegistry", "get_registry", "init_registry"]
