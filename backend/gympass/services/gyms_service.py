"""
GymPass Backend — Gyms Service
===============================

What:  Gym registration (admin), title search and nearby lookup.
"""

import logging
from typing import List, Optional

from gympass.models import Gym
from gympass.repositories.base import GymsRepository
from gympass.services.geo import Coordinate

logger = logging.getLogger(__name__)

# Members see gyms within this radius of their position
NEARBY_RADIUS_KM = 10.0


class GymsService:

    def __init__(self, gyms_repository: GymsRepository):
        self.gyms_repository = gyms_repository

    async def create_gym(
        self,
        title: str,
        latitude: float,
        longitude: float,
        description: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Gym:
        gym = await self.gyms_repository.create(
            title=title,
            latitude=latitude,
            longitude=longitude,
            description=description,
            phone=phone,
        )
        logger.info("Gym created: %s (%s)", gym.id, gym.title)
        return gym

    async def search_gyms(self, query: str, page: int = 1) -> List[Gym]:
        return await self.gyms_repository.search_many(query, page)

    async def fetch_nearby_gyms(self, latitude: float, longitude: float) -> List[Gym]:
        return await self.gyms_repository.find_many_nearby(
            Coordinate(latitude, longitude),
            radius_km=NEARBY_RADIUS_KM,
        )
