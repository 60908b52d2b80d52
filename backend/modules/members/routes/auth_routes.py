# backend/modules/members/routes/auth_routes.py

"""
Login, session check and logout routes.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from ..auth import LoginMember, create_access_token, get_login_member
from ..schemas import LoginCheckResponse, LoginRequest
from ..services import MemberService

router = APIRouter(tags=["Auth"])


@router.post("/login")
def login(
    login_request: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Verify credentials and set the session cookie."""
    member = MemberService(db).authenticate(login_request.email, login_request.password)
    token = create_access_token(member)

    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=settings.jwt_access_token_expire_minutes * 60,
        path="/",
    )
    return {"message": "ok"}


@router.get("/login/check", response_model=LoginCheckResponse)
def login_check(login_member: LoginMember = Depends(get_login_member)):
    return LoginCheckResponse(name=login_member.name)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=settings.auth_cookie_name, path="/")
    return {"message": "ok"}
