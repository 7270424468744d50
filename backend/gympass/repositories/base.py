"""
GymPass Backend — Repository Interfaces
========================================

What:  Abstract persistence contracts for users, gyms and check-ins.
How:   Services depend only on these classes. Two implementations exist:
       - SQLAlchemy (`gympass.repositories.sql`): production, async sessions
       - In-memory (`gympass.repositories.in_memory`): unit tests
Who:   Constructed per request by `gympass.dependencies`, or directly in tests.

Contract shared by all implementations:
    - find_* methods return None when nothing matches (never raise)
    - paginated listings return PAGE_SIZE items per 1-based page
    - create() enforces the storage-level uniqueness rules and raises the
      matching domain error (UserAlreadyExistsError, MaxNumberOfCheckInsError)
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from gympass.models import CheckIn, Gym, Role, User
from gympass.services.geo import Coordinate

PAGE_SIZE = 20


def page_offset(page: int) -> int:
    """Row offset of a 1-based page."""
    return (max(page, 1) - 1) * PAGE_SIZE


class UsersRepository(ABC):

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.MEMBER,
    ) -> User:
        """
        Persist a new user.

        Raises:
            UserAlreadyExistsError: the e-mail is taken (unique index)
        """
        ...


class GymsRepository(ABC):

    @abstractmethod
    async def find_by_id(self, gym_id: UUID) -> Optional[Gym]:
        ...

    @abstractmethod
    async def create(
        self,
        title: str,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Gym:
        ...

    @abstractmethod
    async def search_many(self, query: str, page: int) -> List[Gym]:
        """Gyms whose title contains `query` (case-insensitive), one page."""
        ...

    @abstractmethod
    async def find_many_nearby(self, coordinate: Coordinate, radius_km: float) -> List[Gym]:
        """All gyms within `radius_km` (haversine) of `coordinate`."""
        ...


class CheckInsRepository(ABC):

    @abstractmethod
    async def find_by_id(self, check_in_id: UUID) -> Optional[CheckIn]:
        ...

    @abstractmethod
    async def find_by_user_id_on_date(self, user_id: UUID, day: date) -> Optional[CheckIn]:
        """The user's check-in on the given UTC calendar date, if any."""
        ...

    @abstractmethod
    async def find_many_by_user_id(self, user_id: UUID, page: int) -> List[CheckIn]:
        """One page of the user's check-ins, newest first."""
        ...

    @abstractmethod
    async def count_by_user_id(self, user_id: UUID) -> int:
        ...

    @abstractmethod
    async def create(self, user_id: UUID, gym_id: UUID, created_at: datetime) -> CheckIn:
        """
        Persist a pending check-in stamped with `created_at`.

        Raises:
            MaxNumberOfCheckInsError: the user already has a check-in on the
                UTC date of `created_at`
        """
        ...

    @abstractmethod
    async def save(self, check_in: CheckIn) -> CheckIn:
        """Persist changes made to an existing check-in (validation)."""
        ...
