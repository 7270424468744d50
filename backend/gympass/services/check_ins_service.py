"""
GymPass Backend — Check-ins Service (Eligibility & Validation Policies)
=======================================================================

What:  The check-in rules: who may check in where and when, and how long an
       admin has to validate a check-in. Also history and metrics.
How:   Pure policy checks over data loaded through the repository
       interfaces; "now" comes from the injected clock.
Who:   POST /gyms/{gym_id}/check-ins, PATCH /check-ins/{id}/validate,
       GET /check-ins/history, GET /check-ins/metrics.

Eligibility (check_in):
    ┌───────────┐   ┌──────────────┐   ┌────────────────┐   ┌──────────┐
    │ Load gym  │──▶│ Distance     │──▶│ Same UTC day?  │──▶│ Persist  │
    │ (404)     │   │ ≤ 0.1 km     │   │ (re-queried)   │   │ pending  │
    └───────────┘   └──────────────┘   └────────────────┘   └──────────┘
         ResourceNotFound   MaxDistance      MaxNumberOfCheckIns

    The same-day lookup is an early, friendly rejection. The authoritative
    guard is the (user_id, check_in_date) unique constraint, which the
    repository surfaces as MaxNumberOfCheckInsError when two requests race.

Validation (validate_check_in):
    Precondition: the caller is an ADMIN. The route's role guard rejects
    everyone else before this method runs.
    1. Unknown id → ResourceNotFoundError
    2. Already validated → CheckInAlreadyValidatedError (validated_at is
       written exactly once)
    3. now − created_at > 20 minutes → LateCheckInValidationError
       (exactly 20:00 is still on time)
    4. validated_at = now
"""

import logging
from datetime import timedelta
from typing import List
from uuid import UUID

from gympass.exceptions import (
    CheckInAlreadyValidatedError,
    LateCheckInValidationError,
    MaxDistanceError,
    MaxNumberOfCheckInsError,
    ResourceNotFoundError,
)
from gympass.models import CheckIn
from gympass.repositories.base import CheckInsRepository, GymsRepository
from gympass.services.clock import Clock, as_utc, utc_date, utcnow
from gympass.services.geo import Coordinate, get_distance_between_coordinates

logger = logging.getLogger(__name__)

MAX_DISTANCE_KM = 0.1
VALIDATION_WINDOW = timedelta(minutes=20)


class CheckInsService:

    def __init__(
        self,
        check_ins_repository: CheckInsRepository,
        gyms_repository: GymsRepository,
        clock: Clock = utcnow,
    ):
        self.check_ins_repository = check_ins_repository
        self.gyms_repository = gyms_repository
        self.clock = clock

    async def check_in(
        self,
        user_id: UUID,
        gym_id: UUID,
        user_latitude: float,
        user_longitude: float,
    ) -> CheckIn:
        """
        Create a pending check-in if the member is at the gym and has not
        checked in yet today (UTC).

        Raises:
            ResourceNotFoundError: unknown gym
            MaxDistanceError: member is more than 100 m from the gym
            MaxNumberOfCheckInsError: member already checked in today
        """
        gym = await self.gyms_repository.find_by_id(gym_id)
        if gym is None:
            raise ResourceNotFoundError(resource="gym", resource_id=str(gym_id))

        distance_km = get_distance_between_coordinates(
            Coordinate(user_latitude, user_longitude),
            Coordinate(gym.latitude, gym.longitude),
        )
        if distance_km > MAX_DISTANCE_KM:
            logger.info(
                "Check-in rejected for user %s: %.4f km from gym %s",
                user_id, distance_km, gym_id,
            )
            raise MaxDistanceError(distance_km=distance_km, max_distance_km=MAX_DISTANCE_KM)

        now = as_utc(self.clock())
        today = utc_date(now)
        existing = await self.check_ins_repository.find_by_user_id_on_date(user_id, today)
        if existing is not None:
            raise MaxNumberOfCheckInsError(context={"date": today.isoformat()})

        check_in = await self.check_ins_repository.create(
            user_id=user_id,
            gym_id=gym_id,
            created_at=now,
        )
        logger.info("Check-in %s created for user %s at gym %s", check_in.id, user_id, gym_id)
        return check_in

    async def validate_check_in(self, check_in_id: UUID) -> CheckIn:
        """
        Mark a check-in as validated. Caller must be an admin.

        Raises:
            ResourceNotFoundError: unknown check-in
            CheckInAlreadyValidatedError: validated_at already set
            LateCheckInValidationError: more than 20 minutes since creation
        """
        check_in = await self.check_ins_repository.find_by_id(check_in_id)
        if check_in is None:
            raise ResourceNotFoundError(resource="check-in", resource_id=str(check_in_id))

        if check_in.validated_at is not None:
            raise CheckInAlreadyValidatedError(context={"check_in_id": str(check_in_id)})

        now = as_utc(self.clock())
        elapsed = now - as_utc(check_in.created_at)
        if elapsed > VALIDATION_WINDOW:
            raise LateCheckInValidationError(
                context={"elapsed_seconds": int(elapsed.total_seconds())}
            )

        check_in.validated_at = now
        await self.check_ins_repository.save(check_in)
        logger.info("Check-in %s validated", check_in.id)
        return check_in

    async def fetch_history(self, user_id: UUID, page: int = 1) -> List[CheckIn]:
        """One page (20 items) of the user's check-ins, newest first."""
        return await self.check_ins_repository.find_many_by_user_id(user_id, page)

    async def get_metrics(self, user_id: UUID) -> int:
        """Total number of check-ins the user has made."""
        return await self.check_ins_repository.count_by_user_id(user_id)
