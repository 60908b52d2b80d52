# backend/modules/members/auth/member_auth.py

"""
Cookie-based authentication and role checks for members.

The login endpoint issues a signed JWT in the ``token`` cookie; the
dependencies below resolve it into a :class:`LoginMember` before any
reservation operation runs. Services never parse credentials themselves.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import logging

from fastapi import Depends, Request
from jose import JWTError, jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.exceptions import AuthenticationError, AuthorizationError
from ..models.member_models import Member, MemberRole
from ..services.member_service import MemberService

logger = logging.getLogger(__name__)

TOKEN_TYPE = "member_access"


class LoginMember(BaseModel):
    """Identity resolved from the session cookie"""

    id: int
    name: str
    role: MemberRole

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    @classmethod
    def from_member(cls, member: Member) -> "LoginMember":
        return cls(id=member.id, name=member.name, role=member.role)


def create_access_token(
    member: Member, expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT for the member"""
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    )
    to_encode: Dict[str, Any] = {
        "sub": str(member.id),
        "name": member.name,
        "role": member.role.value,
        "type": TOKEN_TYPE,
        "exp": expire,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[int]:
    """Decode a token and return the member id it was issued for"""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if payload.get("type") != TOKEN_TYPE:
        return None

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


async def get_login_member(
    request: Request, db: Session = Depends(get_db)
) -> LoginMember:
    """Resolve the caller from the session cookie or fail with 401"""
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise AuthenticationError()

    member_id = verify_token(token)
    if member_id is None:
        raise AuthenticationError()

    member = MemberService(db).get_member(member_id)
    if member is None:
        logger.warning(f"Token refers to unknown member {member_id}")
        raise AuthenticationError()

    return LoginMember.from_member(member)


async def require_admin(
    login_member: LoginMember = Depends(get_login_member),
) -> LoginMember:
    """Allow only admins through"""
    if not login_member.is_admin:
        raise AuthorizationError()
    return login_member
