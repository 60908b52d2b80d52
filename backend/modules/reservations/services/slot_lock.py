# backend/modules/reservations/services/slot_lock.py

"""
Per-slot-key mutual exclusion for the reservation write paths.

Creates and deletes touching the same (date, time, theme) run one at a time
inside this process. Across processes the database row locks and the unique
constraint on the reservation slot take over.
"""

from contextlib import contextmanager
from typing import Dict, Iterator
import threading

from ..models.reservation_models import SlotKey


class SlotLockRegistry:
    """Hands out one lock per slot key and forgets it once nobody holds it"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[SlotKey, threading.Lock] = {}
        self._users: Dict[SlotKey, int] = {}

    @contextmanager
    def hold(self, slot_key: SlotKey) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(slot_key, threading.Lock())
            self._users[slot_key] = self._users.get(slot_key, 0) + 1

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                self._users[slot_key] -= 1
                if self._users[slot_key] == 0:
                    del self._users[slot_key]
                    del self._locks[slot_key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


slot_locks = SlotLockRegistry()
