from .member_auth import (
    LoginMember,
    create_access_token,
    verify_token,
    get_login_member,
    require_admin,
)

__all__ = [
    "LoginMember",
    "create_access_token",
    "verify_token",
    "get_login_member",
    "require_admin",
]
