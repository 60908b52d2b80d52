# backend/modules/reservations/schemas/reservation_schemas.py

"""
Pydantic schemas for the reservation API.

Field names are exposed in camelCase (``timeId``, ``startAt``...).
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from datetime import date, time, datetime
from typing import Optional

from modules.members.schemas import MemberResponse


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ReservationCreateRequest(CamelModel):
    """Schema for creating a reservation as the logged-in member"""

    # Ignored on the member endpoint; the session decides who books
    member_id: Optional[int] = None
    reservation_date: date = Field(..., alias="date")
    time_id: int
    theme_id: int


class AdminReservationCreateRequest(CamelModel):
    """Schema for an admin booking on behalf of a member"""

    member_id: int
    reservation_date: date = Field(..., alias="date")
    time_id: int
    theme_id: int


class TimeResponse(CamelModel):
    id: int
    start_at: time

    @field_serializer("start_at")
    def serialize_start_at(self, value: time) -> str:
        return value.strftime("%H:%M")


class ThemeResponse(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None


class ReservationResponse(CamelModel):
    """Schema for reservation response"""

    id: int
    member: MemberResponse
    reservation_date: date = Field(..., alias="date")
    time: TimeResponse
    theme: ThemeResponse

    @classmethod
    def from_entity(cls, reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            member=MemberResponse.model_validate(reservation.member),
            reservation_date=reservation.date,
            time=TimeResponse.model_validate(reservation.time),
            theme=ThemeResponse.model_validate(reservation.theme),
        )


class WaitingResponse(CamelModel):
    """Schema for waiting entry response"""

    id: int
    member: MemberResponse
    reservation_date: date = Field(..., alias="date")
    time: TimeResponse
    theme: ThemeResponse
    created_at: datetime

    @classmethod
    def from_entity(cls, waiting) -> "WaitingResponse":
        return cls(
            id=waiting.id,
            member=MemberResponse.model_validate(waiting.member),
            reservation_date=waiting.date,
            time=TimeResponse.model_validate(waiting.time),
            theme=ThemeResponse.model_validate(waiting.theme),
            created_at=waiting.created_at,
        )
