# backend/modules/reservations/models/reservation_models.py

"""
Reservation and waiting-entry models plus the read-only slot catalog
(themes and reservation times) they reference.
"""

from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, Date, Time, Text,
    UniqueConstraint, Index
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from core.database import Base
from modules.members.models.member_models import Member
from datetime import datetime
from typing import NamedTuple
import datetime as dt


class SlotKey(NamedTuple):
    """(date, time slot, theme) - one bookable unit"""
    date: dt.date
    time_id: int
    theme_id: int

    def __str__(self):
        return f"{self.date.isoformat()}/time={self.time_id}/theme={self.theme_id}"


class Theme(Base):
    """Escape room theme"""
    __tablename__ = "themes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text)
    thumbnail = Column(String(500))

    def __repr__(self):
        return f"<Theme {self.id} - {self.name}>"


class ReservationTime(Base):
    """Bookable start time of day"""
    __tablename__ = "reservation_times"

    id = Column(Integer, primary_key=True, index=True)
    start_at = Column(Time, nullable=False, unique=True)

    def __repr__(self):
        return f"<ReservationTime {self.id} - {self.start_at}>"


class Reservation(Base):
    """Confirmed reservation; at most one per slot key"""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time_id = Column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    member = relationship(Member)
    time = relationship("ReservationTime")
    theme = relationship("Theme")

    __table_args__ = (
        UniqueConstraint("date", "time_id", "theme_id", name="uq_reservation_slot"),
    )

    @property
    def slot_key(self) -> SlotKey:
        return SlotKey(self.date, self.time_id, self.theme_id)

    def __repr__(self):
        return f"<Reservation {self.id} - member {self.member_id} on {self.slot_key}>"


class WaitingEntry(Base):
    """Queued request for an already reserved slot, promoted in FIFO order"""
    __tablename__ = "waiting_entries"

    id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    time_id = Column(Integer, ForeignKey("reservation_times.id"), nullable=False)
    theme_id = Column(Integer, ForeignKey("themes.id"), nullable=False)

    # FIFO position; equal timestamps fall back to id order
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    member = relationship(Member)
    time = relationship("ReservationTime")
    theme = relationship("Theme")

    __table_args__ = (
        UniqueConstraint(
            "member_id", "date", "time_id", "theme_id", name="uq_waiting_member_slot"
        ),
        Index("idx_waiting_slot_created", "date", "time_id", "theme_id", "created_at"),
    )

    @property
    def slot_key(self) -> SlotKey:
        return SlotKey(self.date, self.time_id, self.theme_id)

    def __repr__(self):
        return f"<WaitingEntry {self.id} - member {self.member_id} on {self.slot_key}>"
