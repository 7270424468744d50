"""
GymPass Backend — Check-ins Service Unit Tests
===============================================

What:  Tests for the eligibility and validation policies in CheckInsService.
How:   In-memory repositories and a FixedClock (no database, no real time).

What we test:
    ✅ Check-in inside 100 m succeeds and starts pending
    ✅ 0.0999 km accepted, 0.1001 km rejected with MaxDistanceError
    ✅ Unknown gym raises ResourceNotFoundError
    ✅ Second check-in on the same UTC day is rejected
    ✅ Check-in on the next UTC day is allowed (midnight boundary)
    ✅ Validation at 19:59 / exactly 20:00 succeeds, 20:01 fails
    ✅ Re-validation raises CheckInAlreadyValidatedError
    ✅ History is newest first, 20 per page; metrics counts everything
"""

import math
from uuid import uuid4

import pytest

from gympass.exceptions import (
    CheckInAlreadyValidatedError,
    LateCheckInValidationError,
    MaxDistanceError,
    MaxNumberOfCheckInsError,
    ResourceNotFoundError,
)
from gympass.services.check_ins_service import CheckInsService
from gympass.services.geo import EARTH_RADIUS_KM

GYM_LATITUDE = -27.2092052
GYM_LONGITUDE = -49.6401091
KM_PER_DEGREE = math.pi * EARTH_RADIUS_KM / 180


def latitude_offset(km: float) -> float:
    """Latitude `km` north of the gym along its meridian."""
    return GYM_LATITUDE + km / KM_PER_DEGREE


@pytest.fixture
def service(check_ins_repository, gyms_repository, clock):
    return CheckInsService(
        check_ins_repository=check_ins_repository,
        gyms_repository=gyms_repository,
        clock=clock,
    )


class TestCheckIn:

    @pytest.mark.asyncio
    async def test_check_in_at_the_gym(self, service, gyms_repository, clock):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        user_id = uuid4()

        check_in = await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE)

        assert check_in.id is not None
        assert check_in.user_id == user_id
        assert check_in.gym_id == gym.id
        assert check_in.created_at == clock.now
        assert check_in.validated_at is None

    @pytest.mark.asyncio
    async def test_just_inside_max_distance(self, service, gyms_repository):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )

        check_in = await service.check_in(uuid4(), gym.id, latitude_offset(0.0999), GYM_LONGITUDE)

        assert check_in.gym_id == gym.id

    @pytest.mark.asyncio
    async def test_just_outside_max_distance(self, service, gyms_repository, check_ins_repository):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )

        with pytest.raises(MaxDistanceError):
            await service.check_in(uuid4(), gym.id, latitude_offset(0.1001), GYM_LONGITUDE)
        assert check_ins_repository.items == {}

    @pytest.mark.asyncio
    async def test_far_away_is_rejected(self, service, gyms_repository):
        gym = await gyms_repository.create(
            title="TypeScript Gym", latitude=-27.0747279, longitude=-49.4889672
        )

        with pytest.raises(MaxDistanceError):
            await service.check_in(uuid4(), gym.id, GYM_LATITUDE, GYM_LONGITUDE)

    @pytest.mark.asyncio
    async def test_unknown_gym(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.check_in(uuid4(), uuid4(), GYM_LATITUDE, GYM_LONGITUDE)

    @pytest.mark.asyncio
    async def test_twice_on_the_same_day(self, service, gyms_repository, clock):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        user_id = uuid4()
        await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE)

        clock.advance(hours=11, minutes=59)  # 23:59 UTC, same day

        with pytest.raises(MaxNumberOfCheckInsError):
            await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE)

    @pytest.mark.asyncio
    async def test_twice_on_different_days(self, service, gyms_repository, clock):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        user_id = uuid4()
        clock.advance(hours=11, minutes=59, seconds=59)  # 23:59:59 UTC
        await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE)

        clock.advance(seconds=1)  # 00:00:00 UTC next day
        check_in = await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE)

        assert check_in.check_in_date.day == 16

    @pytest.mark.asyncio
    async def test_other_users_are_independent(self, service, gyms_repository):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        await service.check_in(uuid4(), gym.id, GYM_LATITUDE, GYM_LONGITUDE)
        await service.check_in(uuid4(), gym.id, GYM_LATITUDE, GYM_LONGITUDE)


class TestValidateCheckIn:

    async def _pending(self, service, gyms_repository):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        return await service.check_in(uuid4(), gym.id, GYM_LATITUDE, GYM_LONGITUDE)

    @pytest.mark.asyncio
    async def test_validate(self, service, gyms_repository, check_ins_repository, clock):
        check_in = await self._pending(service, gyms_repository)
        clock.advance(minutes=5)

        validated = await service.validate_check_in(check_in.id)

        assert validated.validated_at == clock.now
        assert check_ins_repository.items[check_in.id].validated_at == clock.now

    @pytest.mark.asyncio
    @pytest.mark.parametrize("elapsed", [
        {"minutes": 19, "seconds": 59},
        {"minutes": 20},
    ])
    async def test_inside_window(self, service, gyms_repository, clock, elapsed):
        check_in = await self._pending(service, gyms_repository)
        clock.advance(**elapsed)

        validated = await service.validate_check_in(check_in.id)

        assert validated.is_validated

    @pytest.mark.asyncio
    async def test_after_twenty_minutes(self, service, gyms_repository, check_ins_repository, clock):
        check_in = await self._pending(service, gyms_repository)
        clock.advance(minutes=20, seconds=1)

        with pytest.raises(LateCheckInValidationError):
            await service.validate_check_in(check_in.id)
        assert check_ins_repository.items[check_in.id].validated_at is None

    @pytest.mark.asyncio
    async def test_unknown_check_in(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.validate_check_in(uuid4())

    @pytest.mark.asyncio
    async def test_validated_once(self, service, gyms_repository, clock):
        check_in = await self._pending(service, gyms_repository)
        clock.advance(minutes=1)
        first = await service.validate_check_in(check_in.id)
        first_validated_at = first.validated_at

        clock.advance(minutes=1)
        with pytest.raises(CheckInAlreadyValidatedError):
            await service.validate_check_in(check_in.id)
        assert first.validated_at == first_validated_at


class TestHistoryAndMetrics:

    async def _check_in_daily(self, service, gyms_repository, clock, user_id, days):
        gym = await gyms_repository.create(
            title="JavaScript Gym", latitude=GYM_LATITUDE, longitude=GYM_LONGITUDE
        )
        created = []
        for _ in range(days):
            created.append(await service.check_in(user_id, gym.id, GYM_LATITUDE, GYM_LONGITUDE))
            clock.advance(days=1)
        return created

    @pytest.mark.asyncio
    async def test_history_is_paginated_newest_first(self, service, gyms_repository, clock):
        user_id = uuid4()
        created = await self._check_in_daily(service, gyms_repository, clock, user_id, 22)

        first_page = await service.fetch_history(user_id, page=1)
        second_page = await service.fetch_history(user_id, page=2)

        assert len(first_page) == 20
        assert len(second_page) == 2
        assert first_page[0].id == created[-1].id
        assert [c.id for c in second_page] == [created[1].id, created[0].id]

    @pytest.mark.asyncio
    async def test_history_only_lists_own_check_ins(self, service, gyms_repository, clock):
        user_id = uuid4()
        await self._check_in_daily(service, gyms_repository, clock, uuid4(), 3)

        assert await service.fetch_history(user_id) == []

    @pytest.mark.asyncio
    async def test_metrics(self, service, gyms_repository, clock):
        user_id = uuid4()
        await self._check_in_daily(service, gyms_repository, clock, user_id, 3)
        await self._check_in_daily(service, gyms_repository, clock, uuid4(), 2)

        assert await service.get_metrics(user_id) == 3

    @pytest.mark.asyncio
    async def test_metrics_without_check_ins(self, service):
        assert await service.get_metrics(uuid4()) == 0
