"""
GymPass Backend — Gyms Route Handlers
======================================

What:  POST /gyms (admin only), GET /gyms/search, GET /gyms/nearby.
"""

import logging

from fastapi import APIRouter, Depends, Query

from gympass.dependencies import get_current_user, get_gyms_service, require_role
from gympass.models import Role
from gympass.schemas.common import ErrorResponse
from gympass.schemas.gym import CreateGymRequest, GymEnvelope, GymListResponse, GymResponse
from gympass.services.gyms_service import GymsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/gyms", tags=["Gyms"])


@router.post(
    "",
    status_code=201,
    response_model=GymEnvelope,
    dependencies=[Depends(require_role(Role.ADMIN))],
    responses={
        401: {"description": "Missing or invalid access token", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
    },
    summary="Register a gym (admin only)",
)
async def create_gym(
    body: CreateGymRequest,
    gyms_service: GymsService = Depends(get_gyms_service),
) -> GymEnvelope:
    gym = await gyms_service.create_gym(
        title=body.title,
        description=body.description,
        phone=body.phone,
        latitude=body.latitude,
        longitude=body.longitude,
    )
    return GymEnvelope(gym=GymResponse.model_validate(gym))


@router.get(
    "/search",
    response_model=GymListResponse,
    dependencies=[Depends(get_current_user)],
    summary="Search gyms by title",
    description="Case-insensitive substring match on the title, 20 gyms per page.",
)
async def search_gyms(
    q: str = Query(min_length=1, description="Text to look for in gym titles"),
    page: int = Query(default=1, ge=1),
    gyms_service: GymsService = Depends(get_gyms_service),
) -> GymListResponse:
    gyms = await gyms_service.search_gyms(q, page)
    return GymListResponse(gyms=[GymResponse.model_validate(g) for g in gyms])


@router.get(
    "/nearby",
    response_model=GymListResponse,
    dependencies=[Depends(get_current_user)],
    summary="Gyms within 10 km",
)
async def fetch_nearby_gyms(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
    gyms_service: GymsService = Depends(get_gyms_service),
) -> GymListResponse:
    gyms = await gyms_service.fetch_nearby_gyms(latitude, longitude)
    return GymListResponse(gyms=[GymResponse.model_validate(g) for g in gyms])
