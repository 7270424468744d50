"""
GymPass Backend — Session Route Handlers
=========================================

What:  POST /sessions (log in) and PATCH /token/refresh (rotate tokens).
How:   Both return a fresh access token in the body and set a fresh refresh
       token in the `refreshToken` httpOnly cookie.

Token Flow:
    POST /sessions {email, password}
        → 200 {token}  + Set-Cookie: refreshToken=...; HttpOnly
    ... access token expires (10 min) ...
    PATCH /token/refresh  (Cookie: refreshToken=...)
        → 200 {token}  + Set-Cookie: refreshToken=<rotated>
"""

import logging

from fastapi import APIRouter, Depends, Response

from gympass.config import settings
from gympass.dependencies import get_refresh_claims, get_users_service
from gympass.models import Role
from gympass.schemas.common import ErrorResponse
from gympass.schemas.user import AuthenticateRequest, TokenResponse
from gympass.security import (
    REFRESH_TOKEN_COOKIE,
    TokenClaims,
    create_access_token,
    create_refresh_token,
)
from gympass.services.users_service import UsersService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Sessions"])


def _issue_tokens(response: Response, user_id, role: Role) -> TokenResponse:
    """Mint an access/refresh pair; the refresh token only goes in the cookie."""
    refresh_token = create_refresh_token(user_id, role)
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.refresh_cookie_secure,
        samesite="strict",
    )
    return TokenResponse(token=create_access_token(user_id, role))


@router.post(
    "/sessions",
    response_model=TokenResponse,
    responses={
        400: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Authenticate with e-mail and password",
)
async def authenticate(
    body: AuthenticateRequest,
    response: Response,
    users_service: UsersService = Depends(get_users_service),
) -> TokenResponse:
    user = await users_service.authenticate(email=body.email, password=body.password)
    return _issue_tokens(response, user.id, user.role)


@router.patch(
    "/token/refresh",
    response_model=TokenResponse,
    responses={
        401: {"description": "Missing, expired or invalid refresh token", "model": ErrorResponse},
    },
    summary="Rotate the access and refresh tokens",
)
async def refresh(
    response: Response,
    claims: TokenClaims = Depends(get_refresh_claims),
) -> TokenResponse:
    # Role is carried over from the refresh token, as issued at login
    return _issue_tokens(response, claims.user_id, claims.role)
