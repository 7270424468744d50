"""
GymPass Backend — Check-ins Route Handlers
===========================================

What:  Check-in creation, admin validation, history and metrics.

Route Inventory:
    POST  /gyms/{gym_id}/check-ins          → 201 {check_in}
    PATCH /check-ins/{check_in_id}/validate → 204 (admin only)
    GET   /check-ins/history?page=          → 200 {check_ins}
    GET   /check-ins/metrics                → 200 {checkInsCount}
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from gympass.dependencies import get_check_ins_service, get_current_user, require_role
from gympass.models import Role
from gympass.schemas.check_in import (
    CheckInEnvelope,
    CheckInHistoryResponse,
    CheckInMetricsResponse,
    CheckInResponse,
    CreateCheckInRequest,
)
from gympass.schemas.common import ErrorResponse
from gympass.security import TokenClaims
from gympass.services.check_ins_service import CheckInsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Check-ins"])


@router.post(
    "/gyms/{gym_id}/check-ins",
    status_code=201,
    response_model=CheckInEnvelope,
    responses={
        400: {"description": "Too far from the gym, or already checked in today", "model": ErrorResponse},
        404: {"description": "Gym not found", "model": ErrorResponse},
    },
    summary="Check in at a gym",
)
async def create_check_in(
    gym_id: UUID,
    body: CreateCheckInRequest,
    claims: TokenClaims = Depends(get_current_user),
    check_ins_service: CheckInsService = Depends(get_check_ins_service),
) -> CheckInEnvelope:
    check_in = await check_ins_service.check_in(
        user_id=claims.user_id,
        gym_id=gym_id,
        user_latitude=body.latitude,
        user_longitude=body.longitude,
    )
    return CheckInEnvelope(check_in=CheckInResponse.model_validate(check_in))


@router.patch(
    "/check-ins/{check_in_id}/validate",
    status_code=204,
    response_class=Response,
    dependencies=[Depends(require_role(Role.ADMIN))],
    responses={
        400: {"description": "Validation window (20 min) has passed", "model": ErrorResponse},
        403: {"description": "Caller is not an admin", "model": ErrorResponse},
        404: {"description": "Check-in not found", "model": ErrorResponse},
        409: {"description": "Check-in already validated", "model": ErrorResponse},
    },
    summary="Validate a check-in (admin only)",
)
async def validate_check_in(
    check_in_id: UUID,
    check_ins_service: CheckInsService = Depends(get_check_ins_service),
) -> Response:
    await check_ins_service.validate_check_in(check_in_id)
    return Response(status_code=204)


@router.get(
    "/check-ins/history",
    response_model=CheckInHistoryResponse,
    summary="The caller's check-ins, newest first",
)
async def fetch_history(
    page: int = Query(default=1, ge=1),
    claims: TokenClaims = Depends(get_current_user),
    check_ins_service: CheckInsService = Depends(get_check_ins_service),
) -> CheckInHistoryResponse:
    check_ins = await check_ins_service.fetch_history(claims.user_id, page)
    return CheckInHistoryResponse(
        check_ins=[CheckInResponse.model_validate(c) for c in check_ins]
    )


@router.get(
    "/check-ins/metrics",
    response_model=CheckInMetricsResponse,
    summary="Total number of check-ins for the caller",
)
async def get_metrics(
    claims: TokenClaims = Depends(get_current_user),
    check_ins_service: CheckInsService = Depends(get_check_ins_service),
) -> CheckInMetricsResponse:
    count = await check_ins_service.get_metrics(claims.user_id)
    return CheckInMetricsResponse(check_ins_count=count)
