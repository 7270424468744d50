"""
GymPass Backend — SQLAlchemy Repositories
==========================================

What:  Production repository implementations on top of an `AsyncSession`.
How:   Each repository wraps the request-scoped session injected by
       `get_db_session`. Writes are flushed (not committed); the session
       dependency commits once the route returns.
Who:   Built per request by `gympass.dependencies`.

Error Handling:
    - IntegrityError on insert → domain error for the violated rule
      (duplicate e-mail, second check-in on the same day). The transaction
      is rolled back first, since the session cannot be reused afterwards.
    - Any other SQLAlchemyError → DatabaseError (generic 500, details logged)
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gympass.exceptions import (
    DatabaseError,
    MaxNumberOfCheckInsError,
    UserAlreadyExistsError,
)
from gympass.models import CheckIn, Gym, Role, User
from gympass.repositories.base import (
    PAGE_SIZE,
    CheckInsRepository,
    GymsRepository,
    UsersRepository,
    page_offset,
)
from gympass.services.clock import utc_date
from gympass.services.geo import Coordinate, bounding_box, get_distance_between_coordinates

logger = logging.getLogger(__name__)


@contextmanager
def translate_database_errors(operation: str) -> Iterator[None]:
    """Convert unexpected SQLAlchemy failures into DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error during %s: %s", operation, str(e), exc_info=True)
        raise DatabaseError(context={"operation": operation, "error_type": type(e).__name__})


class SqlAlchemyUsersRepository(UsersRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        with translate_database_errors("users.find_by_id"):
            return await self.session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        with translate_database_errors("users.find_by_email"):
            result = await self.session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.MEMBER,
    ) -> User:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            logger.info("Rejected duplicate e-mail on insert: %s", email)
            raise UserAlreadyExistsError(email=email)
        except SQLAlchemyError as e:
            logger.error("Failed to insert user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "users.create"})
        return user


class SqlAlchemyGymsRepository(GymsRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, gym_id: UUID) -> Optional[Gym]:
        with translate_database_errors("gyms.find_by_id"):
            return await self.session.get(Gym, gym_id)

    async def create(
        self,
        title: str,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Gym:
        gym = Gym(
            title=title,
            description=description,
            phone=phone,
            latitude=latitude,
            longitude=longitude,
        )
        with translate_database_errors("gyms.create"):
            self.session.add(gym)
            await self.session.flush()
        return gym

    async def search_many(self, query: str, page: int) -> List[Gym]:
        stmt = (
            select(Gym)
            .where(Gym.title.icontains(query, autoescape=True))
            .order_by(Gym.title, Gym.id)
            .offset(page_offset(page))
            .limit(PAGE_SIZE)
        )
        with translate_database_errors("gyms.search_many"):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def find_many_nearby(self, coordinate: Coordinate, radius_km: float) -> List[Gym]:
        # Bounding box narrows candidates using idx_gyms_coordinates;
        # the haversine check below is the exact filter.
        min_lat, max_lat, min_lon, max_lon = bounding_box(coordinate, radius_km)
        stmt = select(Gym).where(
            and_(
                Gym.latitude.between(min_lat, max_lat),
                Gym.longitude.between(min_lon, max_lon),
            )
        )
        with translate_database_errors("gyms.find_many_nearby"):
            result = await self.session.execute(stmt)
            candidates = result.scalars().all()

        return [
            gym
            for gym in candidates
            if get_distance_between_coordinates(
                coordinate, Coordinate(gym.latitude, gym.longitude)
            ) <= radius_km
        ]


class SqlAlchemyCheckInsRepository(CheckInsRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, check_in_id: UUID) -> Optional[CheckIn]:
        with translate_database_errors("check_ins.find_by_id"):
            return await self.session.get(CheckIn, check_in_id)

    async def find_by_user_id_on_date(self, user_id: UUID, day: date) -> Optional[CheckIn]:
        stmt = select(CheckIn).where(
            CheckIn.user_id == user_id,
            CheckIn.check_in_date == day,
        )
        with translate_database_errors("check_ins.find_by_user_id_on_date"):
            result = await self.session.execute(stmt)
            return result.scalars().first()

    async def find_many_by_user_id(self, user_id: UUID, page: int) -> List[CheckIn]:
        stmt = (
            select(CheckIn)
            .where(CheckIn.user_id == user_id)
            .order_by(CheckIn.created_at.desc(), CheckIn.id)
            .offset(page_offset(page))
            .limit(PAGE_SIZE)
        )
        with translate_database_errors("check_ins.find_many_by_user_id"):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def count_by_user_id(self, user_id: UUID) -> int:
        stmt = select(func.count(CheckIn.id)).where(CheckIn.user_id == user_id)
        with translate_database_errors("check_ins.count_by_user_id"):
            result = await self.session.execute(stmt)
            return result.scalar() or 0

    async def create(self, user_id: UUID, gym_id: UUID, created_at: datetime) -> CheckIn:
        check_in = CheckIn(
            user_id=user_id,
            gym_id=gym_id,
            created_at=created_at,
            check_in_date=utc_date(created_at),
        )
        self.session.add(check_in)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            # PostgreSQL names the constraint; SQLite lists the columns
            if "check_in_date" not in str(e.orig):
                logger.error("Check-in insert violated a constraint: %s", str(e))
                raise DatabaseError(context={"operation": "check_ins.create"})
            logger.info("Rejected second check-in for user %s on %s", user_id, check_in.check_in_date)
            raise MaxNumberOfCheckInsError(context={"date": check_in.check_in_date.isoformat()})
        except SQLAlchemyError as e:
            logger.error("Failed to insert check-in: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "check_ins.create"})
        return check_in

    async def save(self, check_in: CheckIn) -> CheckIn:
        with translate_database_errors("check_ins.save"):
            self.session.add(check_in)
            await self.session.flush()
        return check_in
