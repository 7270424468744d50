"""
GymPass Backend — Gym SQLAlchemy Model
=======================================

What:  ORM model for the `gyms` table.
When:  Created once by an admin (POST /gyms); never updated afterwards.

Coordinates are plain floats in decimal degrees. Range validation happens in
the request schema; the nearby query filters on the latitude/longitude pair,
hence the composite index.
"""

import uuid
from typing import Optional

from sqlalchemy import Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gympass.database import Base


class Gym(Base):
    __tablename__ = "gyms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, default=None)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        Index("idx_gyms_coordinates", "latitude", "longitude"),
    )

    def __repr__(self) -> str:
        return (
            f"<Gym(id={self.id}, title='{self.title}', "
            f"latitude={self.latitude}, longitude={self.longitude})>"
        )
