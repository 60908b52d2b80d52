# backend/modules/members/schemas/member_schemas.py

"""
Pydantic schemas for members and login.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginCheckResponse(BaseModel):
    name: str


class MemberResponse(BaseModel):
    """Member as embedded in reservation and waiting responses"""

    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )

    id: int
    name: str
