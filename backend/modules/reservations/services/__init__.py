from .reservation_service import (
    ReservationService,
    ReservationOutcome,
    ReservationResult,
)
from .slot_lock import SlotLockRegistry, slot_locks

__all__ = [
    "ReservationService",
    "ReservationOutcome",
    "ReservationResult",
    "SlotLockRegistry",
    "slot_locks",
]
