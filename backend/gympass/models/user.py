"""
GymPass Backend — User SQLAlchemy Model
========================================

What:  ORM model for the `users` table.
Who:   Created by the register use case; read by authentication and profile.

Table Design:
    - UUID primary key generated in Python (portable across PostgreSQL/SQLite)
    - email: unique index; the register use case also checks before inserting
    - password_hash: bcrypt hash, never serialized into API responses
    - role: MEMBER by default; ADMIN unlocks gym creation and check-in validation
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Enum, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from gympass.database import Base, UTCDateTime


class Role(str, enum.Enum):
    """Authorization role embedded in access tokens."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class User(Base):
    """A registered gym member or administrator."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Login identifier; unique across all users",
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(
        Enum(Role, name="role", native_enum=False, length=16),
        nullable=False,
        default=Role.MEMBER,
        server_default=text("'MEMBER'"),
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
