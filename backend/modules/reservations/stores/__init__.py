from .reservation_store import ReservationStore
from .waiting_store import WaitingStore

__all__ = ["ReservationStore", "WaitingStore"]
