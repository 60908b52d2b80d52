from .member_schemas import LoginRequest, LoginCheckResponse, MemberResponse

__all__ = ["LoginRequest", "LoginCheckResponse", "MemberResponse"]
