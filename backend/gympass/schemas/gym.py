"""
GymPass Backend — Gym Schemas
==============================

What:  Contracts for gym creation, title search and nearby lookup.
How:   Coordinate ranges are validated here (latitude −90..90, longitude
       −180..180); services and the distance calculator trust them.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class CreateGymRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None, max_length=32)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("title must not be blank")
        return stripped


class GymResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    phone: Optional[str] = None
    latitude: float
    longitude: float

    model_config = {"from_attributes": True}


class GymEnvelope(BaseModel):
    gym: GymResponse


class GymListResponse(BaseModel):
    gyms: List[GymResponse]
