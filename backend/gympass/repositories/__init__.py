"""
GymPass Backend — Repositories Package
=======================================

Repository Inventory:
    - base.py:      Abstract interfaces (UsersRepository, GymsRepository, CheckInsRepository)
    - sql.py:       SQLAlchemy implementations (production)
    - in_memory.py: Dict-backed implementations (service unit tests)
"""
