"""
GymPass Backend — FastAPI Dependencies
=======================================

What:  Per-request wiring: repositories over the request's session, services
       over those repositories, and the authentication/role guards.
How:   Routes declare `Depends(get_check_ins_service)` etc. Tests swap pieces
       through `app.dependency_overrides` (e.g. `get_clock`).

Auth Guards:
    get_current_user    → verifies the bearer access token, returns TokenClaims
    require_role(ADMIN) → additionally rejects other roles with 403
    get_refresh_claims  → verifies the refreshToken cookie (PATCH /token/refresh)
"""

from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from gympass.database import get_db_session
from gympass.exceptions import ForbiddenError, UnauthorizedError
from gympass.models import Role
from gympass.repositories.sql import (
    SqlAlchemyCheckInsRepository,
    SqlAlchemyGymsRepository,
    SqlAlchemyUsersRepository,
)
from gympass.security import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    REFRESH_TOKEN_COOKIE,
    TokenClaims,
    decode_token,
)
from gympass.services.check_ins_service import CheckInsService
from gympass.services.clock import Clock, utcnow
from gympass.services.gyms_service import GymsService
from gympass.services.users_service import UsersService

# auto_error=False: a missing header is reported through UnauthorizedError
# so it gets the same JSON error body as every other failure
bearer_scheme = HTTPBearer(auto_error=False)


# ── Clock ─────────────────────────────────────────────────────────────────
def get_clock() -> Clock:
    return utcnow


# ── Services ──────────────────────────────────────────────────────────────
def get_users_service(db: AsyncSession = Depends(get_db_session)) -> UsersService:
    return UsersService(SqlAlchemyUsersRepository(db))


def get_gyms_service(db: AsyncSession = Depends(get_db_session)) -> GymsService:
    return GymsService(SqlAlchemyGymsRepository(db))


def get_check_ins_service(
    db: AsyncSession = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> CheckInsService:
    return CheckInsService(
        check_ins_repository=SqlAlchemyCheckInsRepository(db),
        gyms_repository=SqlAlchemyGymsRepository(db),
        clock=clock,
    )


# ── Authentication ────────────────────────────────────────────────────────
async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenClaims:
    """Verify `Authorization: Bearer <access token>` and return its claims."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return decode_token(credentials.credentials, expected_type=ACCESS_TOKEN)


def require_role(role: Role) -> Callable:
    """
    Build a dependency that only lets tokens carrying `role` through.

    Example:
        @router.post("/gyms", dependencies=[Depends(require_role(Role.ADMIN))])
    """

    async def guard(claims: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if claims.role != role:
            raise ForbiddenError(context={"required_role": role.value})
        return claims

    return guard


async def get_refresh_claims(request: Request) -> TokenClaims:
    """Verify the refresh token stored in the `refreshToken` cookie."""
    token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not token:
        raise UnauthorizedError()
    return decode_token(token, expected_type=REFRESH_TOKEN)
