# backend/modules/reservations/routes/admin_routes.py

"""
Admin reservation routes.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from modules.members.auth import require_admin
from ..services import ReservationService
from ..schemas import (
    AdminReservationCreateRequest,
    ReservationResponse,
    WaitingResponse,
)
from .reservation_routes import reservation_result_response

router = APIRouter(
    prefix="/admin",
    tags=["Admin Reservations"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "/reservations",
    status_code=status.HTTP_201_CREATED,
    response_model=ReservationResponse,
    responses={status.HTTP_202_ACCEPTED: {"model": WaitingResponse}},
)
def create_reservation_for_member(
    reservation_request: AdminReservationCreateRequest,
    db: Session = Depends(get_db),
):
    """Book (or queue) a slot on behalf of any member."""
    service = ReservationService(db)
    result = service.create_reservation(
        reservation_request.member_id,
        reservation_request.reservation_date,
        reservation_request.time_id,
        reservation_request.theme_id,
    )
    return reservation_result_response(result)


@router.get("/waitings", response_model=List[WaitingResponse])
def list_waitings(db: Session = Depends(get_db)):
    """All waiting entries, earliest first."""
    service = ReservationService(db)
    return [WaitingResponse.from_entity(waiting) for waiting in service.list_waitings()]
