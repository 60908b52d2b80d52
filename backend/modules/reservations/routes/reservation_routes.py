# backend/modules/reservations/routes/reservation_routes.py

"""
Member-facing reservation API routes.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from modules.members.auth import LoginMember, get_login_member
from ..services import ReservationService, ReservationResult
from ..schemas import ReservationCreateRequest, ReservationResponse, WaitingResponse

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def reservation_result_response(result: ReservationResult) -> JSONResponse:
    """
    201 + Location /reservations/{id} when the slot was free,
    202 + Location /waitings/{id} when the request was queued.
    """
    if result.created:
        body = ReservationResponse.from_entity(result.reservation)
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=body.model_dump(mode="json", by_alias=True),
            headers={"Location": f"/reservations/{result.reservation.id}"},
        )

    body = WaitingResponse.from_entity(result.waiting)
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content=body.model_dump(mode="json", by_alias=True),
        headers={"Location": f"/waitings/{result.waiting.id}"},
    )


@router.get("", response_model=List[ReservationResponse])
def list_reservations(db: Session = Depends(get_db)):
    """List every confirmed reservation."""
    service = ReservationService(db)
    return [
        ReservationResponse.from_entity(reservation)
        for reservation in service.list_reservations()
    ]


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: int, db: Session = Depends(get_db)):
    service = ReservationService(db)
    return ReservationResponse.from_entity(service.get_reservation(reservation_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ReservationResponse,
    responses={status.HTTP_202_ACCEPTED: {"model": WaitingResponse}},
)
def create_reservation(
    reservation_request: ReservationCreateRequest,
    login_member: LoginMember = Depends(get_login_member),
    db: Session = Depends(get_db),
):
    """
    Reserve a slot for the logged-in member.

    - Free slot: reservation is created (201)
    - Reserved slot: member joins the waiting queue (202)
    """
    service = ReservationService(db)
    result = service.create_reservation(
        login_member.id,
        reservation_request.reservation_date,
        reservation_request.time_id,
        reservation_request.theme_id,
    )
    return reservation_result_response(result)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(reservation_id: int, db: Session = Depends(get_db)):
    """Delete a reservation; the earliest waiting member takes the slot."""
    ReservationService(db).delete_reservation(reservation_id)
