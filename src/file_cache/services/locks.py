"""
Per-key mutual exclusion.

Locks are created on demand and dropped once no caller holds or waits
for them, so the map only grows with the number of keys in flight.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass
class _Slot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class KeyedLock:
    """Map of key to lock, reclaimed when uncontended."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._slots: dict[str, _Slot] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for key for the duration of the block."""
        with self._guard:
            slot = self._slots.get(key)
            if slot is None:
                slot = _Slot()
                self._slots[key] = slot
            slot.users += 1

        slot.lock.acquire()
        try:
            yield
        finally:
            slot.lock.release()
            with self._guard:
                slot.users -= 1
                if slot.users == 0:
                    del self._slots[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._slots)
