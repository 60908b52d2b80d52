# backend/modules/members/services/member_service.py

from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from passlib.context import CryptContext

from core.exceptions import AuthenticationError
from ..models.member_models import Member, MemberRole

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

INVALID_CREDENTIALS_MESSAGE = "이메일 또는 비밀번호가 올바르지 않습니다."


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class MemberService:
    """Service for looking up members and checking their credentials"""

    def __init__(self, db: Session):
        self.db = db

    def get_member(self, member_id: int) -> Optional[Member]:
        return self.db.query(Member).filter(Member.id == member_id).first()

    def get_member_by_email(self, email: str) -> Optional[Member]:
        return self.db.query(Member).filter(Member.email == email).first()

    def list_members(self) -> List[Member]:
        return self.db.query(Member).order_by(Member.id).all()

    def add_member(
        self,
        name: str,
        email: str,
        password: str,
        role: MemberRole = MemberRole.USER,
    ) -> Member:
        """Persist a member with a hashed password (used by seeding and tests)"""
        member = Member(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            role=role,
        )
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def authenticate(self, email: str, password: str) -> Member:
        """Return the member for valid credentials, otherwise raise"""
        member = self.get_member_by_email(email)

        if not member or not verify_password(password, member.password_hash):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"Member {member.id} logged in")
        return member
