"""
GymPass Backend — In-Memory Repositories
=========================================

What:  Dict/list-backed implementations of the repository interfaces.
Who:   Unit tests for the services layer (no database needed).

They mirror the SQLAlchemy repositories' observable behavior, including the
unique e-mail and one-check-in-per-day rules, and fill in the column
defaults (id, created_at, role) that the database would otherwise supply.
"""

import uuid
from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from gympass.exceptions import MaxNumberOfCheckInsError, UserAlreadyExistsError
from gympass.models import CheckIn, Gym, Role, User
from gympass.repositories.base import (
    PAGE_SIZE,
    CheckInsRepository,
    GymsRepository,
    UsersRepository,
    page_offset,
)
from gympass.services.clock import Clock, utc_date, utcnow
from gympass.services.geo import Coordinate, get_distance_between_coordinates


class InMemoryUsersRepository(UsersRepository):

    def __init__(self, clock: Clock = utcnow):
        self.items: Dict[UUID, User] = {}
        self.clock = clock

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        return self.items.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.items.values() if u.email == email), None)

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.MEMBER,
    ) -> User:
        if await self.find_by_email(email) is not None:
            raise UserAlreadyExistsError(email=email)
        user = User(
            id=uuid.uuid4(),
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=self.clock(),
        )
        self.items[user.id] = user
        return user


class InMemoryGymsRepository(GymsRepository):

    def __init__(self):
        self.items: Dict[UUID, Gym] = {}

    async def find_by_id(self, gym_id: UUID) -> Optional[Gym]:
        return self.items.get(gym_id)

    async def create(
        self,
        title: str,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Gym:
        gym = Gym(
            id=uuid.uuid4(),
            title=title,
            description=description,
            phone=phone,
            latitude=latitude,
            longitude=longitude,
        )
        self.items[gym.id] = gym
        return gym

    async def search_many(self, query: str, page: int) -> List[Gym]:
        needle = query.lower()
        matches = sorted(
            (g for g in self.items.values() if needle in g.title.lower()),
            key=lambda g: (g.title, str(g.id)),
        )
        start = page_offset(page)
        return matches[start:start + PAGE_SIZE]

    async def find_many_nearby(self, coordinate: Coordinate, radius_km: float) -> List[Gym]:
        return [
            gym
            for gym in self.items.values()
            if get_distance_between_coordinates(
                coordinate, Coordinate(gym.latitude, gym.longitude)
            ) <= radius_km
        ]


class InMemoryCheckInsRepository(CheckInsRepository):

    def __init__(self):
        self.items: Dict[UUID, CheckIn] = {}

    async def find_by_id(self, check_in_id: UUID) -> Optional[CheckIn]:
        return self.items.get(check_in_id)

    async def find_by_user_id_on_date(self, user_id: UUID, day: date) -> Optional[CheckIn]:
        return next(
            (
                c for c in self.items.values()
                if c.user_id == user_id and c.check_in_date == day
            ),
            None,
        )

    async def find_many_by_user_id(self, user_id: UUID, page: int) -> List[CheckIn]:
        own = sorted(
            (c for c in self.items.values() if c.user_id == user_id),
            key=lambda c: c.created_at,
            reverse=True,
        )
        start = page_offset(page)
        return own[start:start + PAGE_SIZE]

    async def count_by_user_id(self, user_id: UUID) -> int:
        return sum(1 for c in self.items.values() if c.user_id == user_id)

    async def create(self, user_id: UUID, gym_id: UUID, created_at: datetime) -> CheckIn:
        day = utc_date(created_at)
        if await self.find_by_user_id_on_date(user_id, day) is not None:
            raise MaxNumberOfCheckInsError(context={"date": day.isoformat()})
        check_in = CheckIn(
            id=uuid.uuid4(),
            user_id=user_id,
            gym_id=gym_id,
            created_at=created_at,
            check_in_date=day,
            validated_at=None,
        )
        self.items[check_in.id] = check_in
        return check_in

    async def save(self, check_in: CheckIn) -> CheckIn:
        self.items[check_in.id] = check_in
        return check_in
