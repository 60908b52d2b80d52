from .reservation_models import (
    SlotKey,
    Theme,
    ReservationTime,
    Reservation,
    WaitingEntry,
)

__all__ = [
    "SlotKey",
    "Theme",
    "ReservationTime",
    "Reservation",
    "WaitingEntry",
]
