# backend/modules/members/models/member_models.py

from sqlalchemy import Column, Integer, String, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from core.database import Base
from enum import Enum


class MemberRole(str, Enum):
    """Member role"""
    USER = "USER"
    ADMIN = "ADMIN"


class Member(Base):
    """Registered member who can hold reservations and waiting entries"""
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(MemberRole), nullable=False, default=MemberRole.USER)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    def __repr__(self):
        return f"<Member {self.id} - {self.email} ({self.role.value if self.role else None})>"
