# backend/modules/reservations/tests/test_reservation_concurrent.py

"""
Concurrent create and delete against one slot.

Every worker gets its own session, like request handlers running in the
threadpool. Workers share one lock registry unless a test simulates separate
processes, in which case each gets its own.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date

from core.exceptions import NotFoundError
from modules.reservations.models.reservation_models import Reservation, SlotKey, WaitingEntry
from modules.reservations.services import (
    ReservationOutcome,
    ReservationService,
    SlotLockRegistry,
)

SLOT = SlotKey(date(2040, 8, 1), 1, 1)  # reservation 1; members 3 then 5 waiting
QUIET_SLOT = SlotKey(date(2040, 8, 3), 3, 2)  # reservation 4; nobody waiting
FREE_SLOT = SlotKey(date(2040, 8, 5), 1, 1)
WORKERS = 5
STEP_TIMEOUT = 10


def run_concurrently(session_factory, operations, separate_locks=False):
    """Run each operation(service) on its own thread and session"""
    locks = SlotLockRegistry()
    start = threading.Barrier(len(operations))

    def worker(operation):
        session = session_factory()
        try:
            service = ReservationService(
                session, locks=SlotLockRegistry() if separate_locks else locks
            )
            start.wait(timeout=STEP_TIMEOUT)
            return operation(service)
        except Exception as e:
            return e
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=len(operations)) as executor:
        results = list(executor.map(worker, operations))

    return results, locks


def slot_rows(session_factory, model, slot_key):
    session = session_factory()
    try:
        return session.query(model).filter(
            model.date == slot_key.date,
            model.time_id == slot_key.time_id,
            model.theme_id == slot_key.theme_id,
        ).order_by(model.id).all()
    finally:
        session.close()


def create_for(member_id, slot_key):
    def create(service):
        return service.create_reservation(
            member_id, slot_key.date, slot_key.time_id, slot_key.theme_id
        )
    return create


def delete(reservation_id):
    def delete_reservation(service):
        return service.delete_reservation(reservation_id)
    return delete_reservation


class TestConcurrentReservationOperations:
    """Concurrent requests against the same slot"""

    def test_concurrent_deletes_promote_exactly_once(self, file_session_factory):
        results, locks = run_concurrently(
            file_session_factory, [delete(1)] * WORKERS
        )

        promoted = [r for r in results if isinstance(r, Reservation)]
        not_found = [r for r in results if isinstance(r, NotFoundError)]
        assert len(promoted) == 1
        assert len(not_found) == WORKERS - 1
        assert len(locks) == 0

        holders = slot_rows(file_session_factory, Reservation, SLOT)
        assert [h.member_id for h in holders] == [3]

        waitings = slot_rows(file_session_factory, WaitingEntry, SLOT)
        assert [(w.id, w.member_id) for w in waitings] == [(2, 5)]

    def test_concurrent_creates_leave_single_holder(self, file_session_factory):
        operations = [
            create_for(member_id, FREE_SLOT) for member_id in range(1, WORKERS + 1)
        ]
        results, locks = run_concurrently(file_session_factory, operations)

        assert not [r for r in results if isinstance(r, Exception)]
        outcomes = [r.outcome for r in results]
        assert outcomes.count(ReservationOutcome.CREATED) == 1
        assert outcomes.count(ReservationOutcome.WAITING) == WORKERS - 1
        assert len(locks) == 0

        assert len(slot_rows(file_session_factory, Reservation, FREE_SLOT)) == 1
        assert len(slot_rows(file_session_factory, WaitingEntry, FREE_SLOT)) == WORKERS - 1

    def test_create_racing_delete_is_queued_or_confirmed(self, file_session_factory):
        results, locks = run_concurrently(
            file_session_factory, [delete(4), create_for(5, QUIET_SLOT)]
        )

        assert not [r for r in results if isinstance(r, Exception)]
        assert len(locks) == 0

        holders = slot_rows(file_session_factory, Reservation, QUIET_SLOT)
        waitings = slot_rows(file_session_factory, WaitingEntry, QUIET_SLOT)
        assert (len(holders), len(waitings)) in {(1, 0), (1, 1)}
        # Queued first means promoted by the delete; freed first means created
        assert [h.member_id for h in holders] == [5]


class TestCrossProcessReservationOperations:
    """Separate lock registries stand in for separate server processes"""

    def test_create_reading_holder_mid_delete_takes_freed_slot(self, file_session_factory):
        delete_flushed = threading.Event()
        holder_read = threading.Event()

        def delete_pausing_before_commit(service):
            find_first = service.waitings.find_first_by_slot_key

            def find_first_after_holder_read(slot_key, for_update=False):
                delete_flushed.set()
                holder_read.wait(timeout=STEP_TIMEOUT)
                return find_first(slot_key, for_update=for_update)

            service.waitings.find_first_by_slot_key = find_first_after_holder_read
            return service.delete_reservation(4)

        def create_reading_holder_mid_delete(service):
            find_holder = service.reservations.find_by_slot_key

            def find_holder_once_deleted(slot_key, for_update=False):
                if holder_read.is_set():
                    return find_holder(slot_key, for_update=for_update)
                delete_flushed.wait(timeout=STEP_TIMEOUT)
                holder = find_holder(slot_key, for_update=for_update)
                holder_read.set()
                return holder

            service.reservations.find_by_slot_key = find_holder_once_deleted
            return create_for(5, QUIET_SLOT)(service)

        (deleted, created), _ = run_concurrently(
            file_session_factory,
            [delete_pausing_before_commit, create_reading_holder_mid_delete],
            separate_locks=True,
        )

        assert deleted is None
        assert not isinstance(created, Exception)
        assert created.outcome == ReservationOutcome.CREATED

        holders = slot_rows(file_session_factory, Reservation, QUIET_SLOT)
        assert [h.member_id for h in holders] == [5]
        assert slot_rows(file_session_factory, WaitingEntry, QUIET_SLOT) == []
