# backend/modules/reservations/stores/waiting_store.py

"""
Persistence for waiting entries, always read in FIFO order.
"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from ..models.reservation_models import SlotKey, WaitingEntry

# Earliest first; id breaks created_at ties deterministically
FIFO_ORDER = (WaitingEntry.created_at.asc(), WaitingEntry.id.asc())


class WaitingStore:

    def __init__(self, db: Session):
        self.db = db

    def insert(self, waiting: WaitingEntry) -> int:
        self.db.add(waiting)
        self.db.flush()
        return waiting.id

    def find_all(self) -> List[WaitingEntry]:
        return (
            self.db.query(WaitingEntry)
            .options(
                joinedload(WaitingEntry.member),
                joinedload(WaitingEntry.time),
                joinedload(WaitingEntry.theme),
            )
            .order_by(*FIFO_ORDER)
            .all()
        )

    def find_by_id(self, waiting_id: int) -> Optional[WaitingEntry]:
        return self.db.query(WaitingEntry).filter(WaitingEntry.id == waiting_id).first()

    def _slot_query(self, slot_key: SlotKey):
        return self.db.query(WaitingEntry).filter(
            WaitingEntry.date == slot_key.date,
            WaitingEntry.time_id == slot_key.time_id,
            WaitingEntry.theme_id == slot_key.theme_id,
        )

    def find_by_slot_key(self, slot_key: SlotKey) -> List[WaitingEntry]:
        return self._slot_query(slot_key).order_by(*FIFO_ORDER).all()

    def find_first_by_slot_key(
        self, slot_key: SlotKey, for_update: bool = False
    ) -> Optional[WaitingEntry]:
        query = self._slot_query(slot_key).order_by(*FIFO_ORDER)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def find_by_member_and_slot_key(
        self, member_id: int, slot_key: SlotKey
    ) -> Optional[WaitingEntry]:
        return (
            self._slot_query(slot_key)
            .filter(WaitingEntry.member_id == member_id)
            .first()
        )

    def delete_by_id(self, waiting_id: int) -> bool:
        deleted = (
            self.db.query(WaitingEntry)
            .filter(WaitingEntry.id == waiting_id)
            .delete(synchronize_session="fetch")
        )
        return deleted > 0
