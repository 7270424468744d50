"""
GymPass Backend — ORM Models
=============================

Importing this package registers every table on `Base.metadata`
(used by Alembic autogenerate and `Database.create_all`).
"""

from gympass.models.check_in import CheckIn
from gympass.models.gym import Gym
from gympass.models.user import Role, User

__all__ = ["CheckIn", "Gym", "Role", "User"]
