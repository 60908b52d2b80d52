# backend/modules/reservations/routes/waiting_routes.py

"""
Waiting entry routes.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from core.database import get_db
from modules.members.auth import LoginMember, get_login_member
from ..services import ReservationService
from ..schemas import WaitingResponse

router = APIRouter(prefix="/waitings", tags=["Waitings"])


@router.get("/{waiting_id}", response_model=WaitingResponse)
def get_waiting(
    waiting_id: int,
    login_member: LoginMember = Depends(get_login_member),
    db: Session = Depends(get_db),
):
    """Show a waiting entry to its owner or an admin."""
    service = ReservationService(db)
    waiting = service.get_waiting_for(
        waiting_id, login_member.id, is_admin=login_member.is_admin
    )
    return WaitingResponse.from_entity(waiting)


@router.delete("/{waiting_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_waiting(
    waiting_id: int,
    login_member: LoginMember = Depends(get_login_member),
    db: Session = Depends(get_db),
):
    """Leave the queue. Admins may remove anyone's entry."""
    ReservationService(db).cancel_waiting(
        waiting_id, login_member.id, is_admin=login_member.is_admin
    )
