# backend/modules/reservations/services/reservation_service.py

"""
Reservation lifecycle: create (or queue), list and delete with promotion of
the earliest waiting entry.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import (
    AuthorizationError,
    ConflictError,
    MissingArgumentError,
    NotFoundError,
    ValidationError,
)
from modules.members.models.member_models import Member
from ..models.reservation_models import (
    Reservation, ReservationTime, SlotKey, Theme, WaitingEntry
)
from ..stores import ReservationStore, WaitingStore
from .slot_lock import SlotLockRegistry, slot_locks

logger = logging.getLogger(__name__)

RESERVATION_NOT_FOUND = "존재하지 않는 예약입니다."
WAITING_NOT_FOUND = "존재하지 않는 예약 대기입니다."
MEMBER_NOT_FOUND = "존재하지 않는 회원입니다."
TIME_NOT_FOUND = "존재하지 않는 예약 시간입니다."
THEME_NOT_FOUND = "존재하지 않는 테마입니다."
ALREADY_WAITING = "이미 예약 대기 중인 슬롯입니다."
NOT_WAITING_OWNER = "본인의 예약 대기만 취소할 수 있습니다."
NOT_WAITING_VIEWER = "본인의 예약 대기만 조회할 수 있습니다."
SLOT_BUSY = "예약 요청이 몰리고 있습니다. 잠시 후 다시 시도해주세요."

# A create that loses the insert race re-reads the slot and tries again
SLOT_WRITE_ATTEMPTS = 3


class ReservationOutcome(str, Enum):
    CREATED = "CREATED"
    WAITING = "WAITING"


@dataclass
class ReservationResult:
    """What a create request turned into"""

    outcome: ReservationOutcome
    reservation: Optional[Reservation] = None
    waiting: Optional[WaitingEntry] = None

    @property
    def created(self) -> bool:
        return self.outcome == ReservationOutcome.CREATED

    @property
    def id(self) -> int:
        return self.reservation.id if self.created else self.waiting.id


class ReservationService:
    """Service for the reservation and waiting-entry lifecycle"""

    def __init__(self, db: Session, locks: SlotLockRegistry = slot_locks):
        self.db = db
        self.locks = locks
        self.reservations = ReservationStore(db)
        self.waitings = WaitingStore(db)

    def list_reservations(self) -> List[Reservation]:
        return self.reservations.find_all()

    def get_reservation(self, reservation_id: int) -> Reservation:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError(RESERVATION_NOT_FOUND)
        return reservation

    def create_reservation(
        self,
        member_id: Optional[int],
        reservation_date: Optional[date],
        time_id: Optional[int],
        theme_id: Optional[int],
    ) -> ReservationResult:
        """
        Reserve a free slot, or queue behind the current holder.

        Raises:
            MissingArgumentError: any argument is None
            ValidationError: unknown member/time/theme, or the member is already
                queued for this slot
        """
        if any(arg is None for arg in (member_id, reservation_date, time_id, theme_id)):
            raise MissingArgumentError()

        self._validate_references(member_id, time_id, theme_id)
        slot_key = SlotKey(reservation_date, time_id, theme_id)

        with self.locks.hold(slot_key):
            for attempt in range(1, SLOT_WRITE_ATTEMPTS + 1):
                # Row lock on the holder blocks a concurrent delete in another process
                holder = self.reservations.find_by_slot_key(slot_key, for_update=True)
                if holder is not None:
                    result = self._enqueue(member_id, slot_key, holder)
                    if result is not None:
                        return result
                    logger.warning(
                        f"Holder of slot {slot_key} was deleted while queueing "
                        f"(attempt {attempt}), re-reading"
                    )
                    continue

                reservation = Reservation(
                    member_id=member_id,
                    date=slot_key.date,
                    time_id=slot_key.time_id,
                    theme_id=slot_key.theme_id,
                )
                try:
                    self.reservations.insert(reservation)
                    self.db.commit()
                except IntegrityError:
                    # Another process took the slot between our read and insert
                    self.db.rollback()
                    logger.warning(
                        f"Insert race on slot {slot_key} (attempt {attempt}), re-reading"
                    )
                    continue

                self.db.refresh(reservation)
                logger.info(
                    f"Created reservation {reservation.id} for member {member_id} on {slot_key}"
                )
                return ReservationResult(ReservationOutcome.CREATED, reservation=reservation)

        raise ConflictError(SLOT_BUSY)

    def _enqueue(
        self, member_id: int, slot_key: SlotKey, holder: Reservation
    ) -> Optional[ReservationResult]:
        """
        Queue the member behind the holder.

        Returns None, with nothing written, when the holder disappeared before
        the waiting entry could be committed.
        """
        holder_id = holder.id
        if self.waitings.find_by_member_and_slot_key(member_id, slot_key) is not None:
            raise ValidationError(ALREADY_WAITING)

        waiting = WaitingEntry(
            member_id=member_id,
            date=slot_key.date,
            time_id=slot_key.time_id,
            theme_id=slot_key.theme_id,
        )
        try:
            self.waitings.insert(waiting)
            # The insert waits for any pending delete; a freed slot must not be queued for
            if self.reservations.find_by_slot_key(slot_key) is None:
                self.db.rollback()
                return None
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(ALREADY_WAITING)

        self.db.refresh(waiting)
        logger.info(
            f"Slot {slot_key} is held by reservation {holder_id}; "
            f"queued waiting entry {waiting.id} for member {member_id}"
        )
        return ReservationResult(ReservationOutcome.WAITING, waiting=waiting)

    def delete_reservation(self, reservation_id: int) -> Optional[Reservation]:
        """
        Delete a reservation and promote the earliest waiting entry for its slot.

        Deletion and promotion commit together under the slot lock.

        Returns:
            The reservation created by promotion, or None when nobody was waiting
        """
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError(RESERVATION_NOT_FOUND)
        slot_key = reservation.slot_key

        with self.locks.hold(slot_key):
            try:
                # Re-read under the lock; a concurrent delete may have won
                if self.reservations.find_by_id(reservation_id, for_update=True) is None:
                    raise NotFoundError(RESERVATION_NOT_FOUND)

                self.reservations.delete_by_id(reservation_id)
                promoted = self._promote_first_waiting(slot_key)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Database error deleting reservation {reservation_id}: {e}")
                raise

        if promoted is None:
            logger.info(f"Deleted reservation {reservation_id}; no waiting entries for {slot_key}")
            return None

        self.db.refresh(promoted)
        logger.info(
            f"Deleted reservation {reservation_id}; promoted member {promoted.member_id} "
            f"to reservation {promoted.id} on {slot_key}"
        )
        return promoted

    def _promote_first_waiting(self, slot_key: SlotKey) -> Optional[Reservation]:
        while True:
            waiting = self.waitings.find_first_by_slot_key(slot_key, for_update=True)
            if waiting is None:
                return None

            member_id = waiting.member_id
            if self.waitings.delete_by_id(waiting.id):
                break
            logger.warning(
                f"Waiting entry {waiting.id} on {slot_key} was removed before promotion, "
                "trying the next one"
            )

        promoted = Reservation(
            member_id=member_id,
            date=slot_key.date,
            time_id=slot_key.time_id,
            theme_id=slot_key.theme_id,
        )
        self.reservations.insert(promoted)
        return promoted

    # Waiting entries
    def list_waitings(self) -> List[WaitingEntry]:
        return self.waitings.find_all()

    def get_waiting(self, waiting_id: int) -> WaitingEntry:
        waiting = self.waitings.find_by_id(waiting_id)
        if waiting is None:
            raise NotFoundError(WAITING_NOT_FOUND)
        return waiting

    def get_waiting_for(
        self, waiting_id: int, member_id: int, is_admin: bool = False
    ) -> WaitingEntry:
        """Fetch a waiting entry on behalf of its owner (or an admin)"""
        waiting = self.get_waiting(waiting_id)
        if not is_admin and waiting.member_id != member_id:
            raise AuthorizationError(NOT_WAITING_VIEWER)
        return waiting

    def cancel_waiting(self, waiting_id: int, member_id: int, is_admin: bool = False):
        """Remove a waiting entry; members may only cancel their own"""
        waiting = self.get_waiting(waiting_id)

        if not is_admin and waiting.member_id != member_id:
            raise AuthorizationError(NOT_WAITING_OWNER)

        if not self.waitings.delete_by_id(waiting_id):
            raise NotFoundError(WAITING_NOT_FOUND)
        self.db.commit()

        logger.info(f"Cancelled waiting entry {waiting_id} by member {member_id}")

    def _validate_references(self, member_id: int, time_id: int, theme_id: int):
        if self.db.get(Member, member_id) is None:
            raise ValidationError(MEMBER_NOT_FOUND)
        if self.db.get(ReservationTime, time_id) is None:
            raise ValidationError(TIME_NOT_FOUND)
        if self.db.get(Theme, theme_id) is None:
            raise ValidationError(THEME_NOT_FOUND)
