"""
GymPass Backend — CheckIn SQLAlchemy Model
===========================================

What:  ORM model for the `check_ins` table.
Who:   Created by the check-in use case; updated once by admin validation.

Lifecycle:
    1. Created with validated_at = NULL (pending)
    2. Validated by an admin within 20 minutes of created_at
       → validated_at set, never cleared afterwards

One-per-day rule:
    check_in_date holds the UTC calendar date of created_at. The unique
    constraint on (user_id, check_in_date) makes the storage layer reject a
    second check-in for the same user and day, even when two requests race
    past the application-level lookup.

Index on (user_id, created_at DESC):
    Serves the history listing (newest first, per user) and the metrics count.
"""

import uuid
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, ForeignKey, Index, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from gympass.database import Base, UTCDateTime


class CheckIn(Base):
    __tablename__ = "check_ins"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    gym_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("gyms.id", ondelete="CASCADE"),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the check-in was created (UTC)",
    )

    check_in_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="UTC calendar date of created_at; one check-in per user per date",
    )

    validated_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="When an admin validated the check-in (NULL while pending)",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "check_in_date", name="uq_check_ins_user_id_check_in_date"),
    )

    @property
    def is_validated(self) -> bool:
        return self.validated_at is not None

    def __repr__(self) -> str:
        return (
            f"<CheckIn(id={self.id}, user_id={self.user_id}, gym_id={self.gym_id}, "
            f"created_at='{self.created_at}', validated_at='{self.validated_at}')>"
        )


Index("idx_check_ins_user_id_created_at", CheckIn.user_id, CheckIn.created_at.desc())
