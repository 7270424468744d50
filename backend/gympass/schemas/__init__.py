"""
GymPass Backend — API Schemas Package
======================================

Pydantic request/response contracts, one module per resource
(user.py, gym.py, check_in.py) plus shared error/health payloads (common.py).
They are kept separate from the ORM models so internal columns such as
password_hash and check_in_date never reach the API surface.
"""
