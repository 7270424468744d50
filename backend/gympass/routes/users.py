"""
GymPass Backend — Users Route Handlers
=======================================

What:  POST /users (registration) and GET /me (authenticated profile).
"""

import logging

from fastapi import APIRouter, Depends

from gympass.dependencies import get_current_user, get_users_service
from gympass.schemas.common import ErrorResponse
from gympass.schemas.user import RegisterRequest, UserEnvelope, UserResponse
from gympass.security import TokenClaims
from gympass.services.users_service import UsersService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserEnvelope,
    responses={
        409: {"description": "E-mail already registered", "model": ErrorResponse},
    },
    summary="Register a new member",
)
async def register(
    body: RegisterRequest,
    users_service: UsersService = Depends(get_users_service),
) -> UserEnvelope:
    user = await users_service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.get(
    "/me",
    response_model=UserEnvelope,
    responses={
        401: {"description": "Missing or invalid access token", "model": ErrorResponse},
        404: {"description": "User no longer exists", "model": ErrorResponse},
    },
    summary="Get the authenticated user's profile",
)
async def get_profile(
    claims: TokenClaims = Depends(get_current_user),
    users_service: UsersService = Depends(get_users_service),
) -> UserEnvelope:
    user = await users_service.get_profile(claims.user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))
