from .reservation_schemas import (
    ReservationCreateRequest,
    AdminReservationCreateRequest,
    ReservationResponse,
    WaitingResponse,
    TimeResponse,
    ThemeResponse,
)

__all__ = [
    "ReservationCreateRequest",
    "AdminReservationCreateRequest",
    "ReservationResponse",
    "WaitingResponse",
    "TimeResponse",
    "ThemeResponse",
]
