"""
GymPass Backend — Check-in Schemas
===================================

What:  Contracts for creating check-ins, history listing and metrics.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateCheckInRequest(BaseModel):
    """The member's current position, compared against the gym's coordinates."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class CheckInResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    gym_id: uuid.UUID
    created_at: datetime
    validated_at: Optional[datetime] = Field(
        default=None,
        description="When an admin validated the check-in (null while pending)",
    )

    model_config = {"from_attributes": True}


class CheckInEnvelope(BaseModel):
    check_in: CheckInResponse


class CheckInHistoryResponse(BaseModel):
    check_ins: List[CheckInResponse] = Field(description="Newest first, 20 per page")


class CheckInMetricsResponse(BaseModel):
    check_ins_count: int = Field(alias="checkInsCount")

    model_config = ConfigDict(populate_by_name=True)
