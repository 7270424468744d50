"""
GymPass Backend — Users Service
================================

What:  Registration, authentication and profile lookup.
Who:   POST /users, POST /sessions, PATCH /token/refresh, GET /me.

bcrypt is CPU-bound, so hashing and verification run in the threadpool and
the event loop keeps serving other requests meanwhile.
"""

import logging
from uuid import UUID

from starlette.concurrency import run_in_threadpool

from gympass.exceptions import (
    InvalidCredentialsError,
    ResourceNotFoundError,
    UserAlreadyExistsError,
)
from gympass.models import User
from gympass.repositories.base import UsersRepository
from gympass.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UsersService:

    def __init__(self, users_repository: UsersRepository):
        self.users_repository = users_repository

    async def register(self, name: str, email: str, password: str) -> User:
        """
        Create a MEMBER account.

        Raises:
            UserAlreadyExistsError: the e-mail is already registered. Checked
                up front and again by the unique index on insert.
        """
        if await self.users_repository.find_by_email(email) is not None:
            raise UserAlreadyExistsError(email=email)

        user = await self.users_repository.create(
            name=name,
            email=email,
            password_hash=await run_in_threadpool(hash_password, password),
        )
        logger.info("User registered: %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Resolve credentials to a user.

        Raises:
            InvalidCredentialsError: unknown e-mail or wrong password
        """
        user = await self.users_repository.find_by_email(email)
        if user is None or not await run_in_threadpool(
            verify_password, password, user.password_hash
        ):
            logger.info("Failed authentication attempt")
            raise InvalidCredentialsError()
        return user

    async def get_profile(self, user_id: UUID) -> User:
        user = await self.users_repository.find_by_id(user_id)
        if user is None:
            raise ResourceNotFoundError(resource="user", resource_id=str(user_id))
        return user
