from .member_service import MemberService, get_password_hash, verify_password

__all__ = ["MemberService", "get_password_hash", "verify_password"]
