# backend/modules/reservations/stores/reservation_store.py

"""
Persistence for confirmed reservations.

Stores flush but never commit; the lifecycle service owns the transaction.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..models.reservation_models import Reservation, SlotKey


class ReservationStore:

    def __init__(self, db: Session):
        self.db = db

    def insert(self, reservation: Reservation) -> int:
        self.db.add(reservation)
        self.db.flush()
        return reservation.id

    def find_all(self) -> List[Reservation]:
        return (
            self.db.query(Reservation)
            .options(
                joinedload(Reservation.member),
                joinedload(Reservation.time),
                joinedload(Reservation.theme),
            )
            .order_by(Reservation.id)
            .all()
        )

    def find_by_id(
        self, reservation_id: int, for_update: bool = False
    ) -> Optional[Reservation]:
        query = self.db.query(Reservation).filter(Reservation.id == reservation_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_by_slot_key(
        self, slot_key: SlotKey, for_update: bool = False
    ) -> Optional[Reservation]:
        query = self.db.query(Reservation).filter(
            Reservation.date == slot_key.date,
            Reservation.time_id == slot_key.time_id,
            Reservation.theme_id == slot_key.theme_id,
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    def delete_by_id(self, reservation_id: int) -> bool:
        deleted = (
            self.db.query(Reservation)
            .filter(Reservation.id == reservation_id)
            .delete(synchronize_session="fetch")
        )
        return deleted > 0
