from .member_models import Member, MemberRole

__all__ = ["Member", "MemberRole"]
