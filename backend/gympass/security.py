"""
GymPass Backend — Password Hashing & Tokens
============================================

What:  bcrypt password hashing and HS256 JWT issuance/verification.
How:   Passwords are SHA-256 pre-hashed before bcrypt so inputs longer than
       bcrypt's 72-byte limit keep all their entropy. Tokens carry the user
       id (`sub`), the role, and a `type` claim separating access tokens
       (Authorization header) from refresh tokens (httpOnly cookie).
Who:   Users service (hash/verify), session routes (issue), auth
       dependencies (verify).

Token Claims:
    {
        "sub":  "<user uuid>",
        "role": "ADMIN" | "MEMBER",
        "type": "access" | "refresh",
        "iat":  <issued at>,
        "exp":  <expiry>
    }
"""

import base64
import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

import bcrypt
import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from gympass.config import settings
from gympass.exceptions import UnauthorizedError
from gympass.models import Role
from gympass.services.clock import utcnow

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
REFRESH_TOKEN_COOKIE = "refreshToken"


# ── Passwords ─────────────────────────────────────────────────────────────

def _prehash_password(password: str) -> bytes:
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    salt = bcrypt.gensalt(rounds=rounds or settings.password_hash_rounds)
    return bcrypt.hashpw(_prehash_password(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison of a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_prehash_password(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ── Tokens ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TokenClaims:
    """Verified identity extracted from a token."""

    user_id: UUID
    role: Role
    token_type: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def _encode(user_id: UUID, role: Role, token_type: str, lifetime: timedelta,
            now: Optional[datetime] = None) -> str:
    issued_at = now or utcnow()
    payload = {
        "sub": str(user_id),
        "role": Role(role).value,
        "type": token_type,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: UUID, role: Role, now: Optional[datetime] = None) -> str:
    return _encode(
        user_id, role, ACCESS_TOKEN,
        timedelta(minutes=settings.access_token_expire_minutes), now,
    )


def create_refresh_token(user_id: UUID, role: Role, now: Optional[datetime] = None) -> str:
    return _encode(
        user_id, role, REFRESH_TOKEN,
        timedelta(days=settings.refresh_token_expire_days), now,
    )


def decode_token(token: str, expected_type: str = ACCESS_TOKEN) -> TokenClaims:
    """
    Verify signature, expiry and token type, and return the claims.

    Raises:
        UnauthorizedError: expired, tampered, wrong type, or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except ExpiredSignatureError:
        raise UnauthorizedError("Token expired.")
    except InvalidTokenError:
        raise UnauthorizedError("Invalid token.")

    if payload.get("type") != expected_type:
        raise UnauthorizedError("Invalid token type.")

    try:
        return TokenClaims(
            user_id=UUID(payload["sub"]),
            role=Role(payload.get("role", Role.MEMBER.value)),
            token_type=expected_type,
        )
    except ValueError:
        raise UnauthorizedError("Invalid token claims.")
