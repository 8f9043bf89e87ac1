"""Per-key locking for in-process critical sections."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock


class _Slot:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = Lock()
        self.holders = 0


class KeyedLocks:
    """Lock per key, created on first use and dropped once nobody holds or waits on it.

    Callers serialize on the same key while different keys never contend. The
    table only holds keys that are currently in use.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, _Slot] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            slot = self._locks.get(key)
            if slot is None:
                slot = self._locks[key] = _Slot()
            slot.holders += 1
        try:
            with slot.lock:
                yield
        finally:
            with self._guard:
                slot.holders -= 1
                if not slot.holders:
                    del self._locks[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
