"""
GymPass Backend — Gyms Service Unit Tests
==========================================

What we test:
    ✅ Gym creation with optional description/phone
    ✅ Title search: case-insensitive substring, 20 per page
    ✅ Nearby: gyms within 10 km only
"""

import pytest

from gympass.services.gyms_service import GymsService


@pytest.fixture
def service(gyms_repository):
    return GymsService(gyms_repository)


class TestCreateGym:

    @pytest.mark.asyncio
    async def test_create_gym(self, service, gyms_repository):
        gym = await service.create_gym(
            title="JavaScript Gym",
            description=None,
            phone=None,
            latitude=-27.2092052,
            longitude=-49.6401091,
        )

        assert gym.id in gyms_repository.items
        assert gym.description is None
        assert gym.phone is None


class TestSearchGyms:

    @pytest.mark.asyncio
    async def test_search_by_title(self, service):
        await service.create_gym(title="JavaScript Gym", latitude=-27.2092052, longitude=-49.6401091)
        await service.create_gym(title="TypeScript Gym", latitude=-27.2092052, longitude=-49.6401091)

        gyms = await service.search_gyms("JavaScript")

        assert [g.title for g in gyms] == ["JavaScript Gym"]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, service):
        await service.create_gym(title="JavaScript Gym", latitude=-27.2092052, longitude=-49.6401091)

        gyms = await service.search_gyms("javascript")

        assert len(gyms) == 1

    @pytest.mark.asyncio
    async def test_search_pagination(self, service):
        for i in range(1, 23):
            await service.create_gym(
                title=f"JavaScript Gym {i:02d}", latitude=-27.2092052, longitude=-49.6401091
            )

        first_page = await service.search_gyms("JavaScript", page=1)
        second_page = await service.search_gyms("JavaScript", page=2)

        assert len(first_page) == 20
        assert [g.title for g in second_page] == ["JavaScript Gym 21", "JavaScript Gym 22"]

    @pytest.mark.asyncio
    async def test_no_match(self, service):
        await service.create_gym(title="JavaScript Gym", latitude=-27.2092052, longitude=-49.6401091)

        assert await service.search_gyms("Python") == []


class TestFetchNearbyGyms:

    @pytest.mark.asyncio
    async def test_only_gyms_within_ten_km(self, service):
        await service.create_gym(title="Near Gym", latitude=-27.2092052, longitude=-49.6401091)
        await service.create_gym(title="Far Gym", latitude=-27.0610928, longitude=-49.5229501)

        gyms = await service.fetch_nearby_gyms(latitude=-27.2092052, longitude=-49.6401091)

        assert [g.title for g in gyms] == ["Near Gym"]
