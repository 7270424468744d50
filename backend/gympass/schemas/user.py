"""
GymPass Backend — User & Session Schemas
=========================================

What:  Request/response contracts for registration, authentication, token
       refresh and the profile endpoint.
Note:  `UserResponse` deliberately has no password_hash field; it is built
       from the ORM object with `from_attributes`, so the hash can never leak.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from gympass.models import Role


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)


class AuthenticateRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)


class UserResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class UserEnvelope(BaseModel):
    """Returned by POST /users (201) and GET /me (200)."""
    user: UserResponse


class TokenResponse(BaseModel):
    """
    Access token body for POST /sessions and PATCH /token/refresh.

    The refresh token travels in the `refreshToken` httpOnly cookie only.
    """
    token: str = Field(description="Bearer access token (JWT)")
