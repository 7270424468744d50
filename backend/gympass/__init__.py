"""
GymPass Backend — Application Package Initializer
==================================================

What: Marks the `gympass` directory as a Python package.
Who:  Imported by uvicorn (`gympass.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth guards
    ├─────────────────────────────────────┤
    │         Services (Use Cases)        │  ← Check-in policies, orchestration
    ├─────────────────────────────────────┤
    │     Repositories (Interfaces)       │  ← SQLAlchemy + in-memory backends
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine owned by the app
    └─────────────────────────────────────┘

    Services only talk to repository interfaces, so every use case can be
    exercised against the in-memory repositories without a database.
"""

__version__ = "1.0.0"
