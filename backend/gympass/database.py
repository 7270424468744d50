"""
GymPass Backend — Database Handle & Session Management
=======================================================

What:  The `Database` storage handle (async engine + session factory), the ORM
       base class, and the per-request session dependency.
How:   `Database` is constructed explicitly by the application lifespan,
       stored on `app.state.database`, and disposed at shutdown. Route
       dependencies pull sessions from whichever handle the app owns, so
       tests can point the app at a throwaway SQLite file.
When:  Engine is created at startup; sessions are created per request.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:      Persistent connections for normal load
    max_overflow=10:   Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:     Validates connections before use
    pool_recycle=3600: Recycles connections every hour

    SQLite URLs get the driver's default pool; the sizing arguments are
    rejected by SQLite's pool classes.
"""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import DateTime, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from gympass.config import settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for autogenerate
    and the test suite uses for `create_all`.
    """
    pass


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp column that always round-trips as UTC.

    PostgreSQL stores TIMESTAMP WITH TIME ZONE natively; SQLite drops the
    offset on the way back. Naive values read from the database are tagged
    as UTC and aware values are normalized to UTC before binding, so service
    code only ever compares aware datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Database:
    """
    Explicit storage handle: owns the engine and the session factory.

    Lifecycle:
        db = Database(url)        # at process start (lifespan)
        await db.create_all()     # optional; tests and local SQLite runs
        ...                       # requests open sessions via db.session()
        await db.dispose()        # at shutdown
    """

    def __init__(self, url: Optional[str] = None, echo: Optional[bool] = None):
        self.url = url or settings.database_url
        engine_kwargs: Dict[str, Any] = {
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG" if echo is None else echo,
        }
        if not self.url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit,
        # when responses are serialized outside the session context
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def session(self) -> AsyncSession:
        """Open a new session (use as `async with db.session() as s:`)."""
        return self.session_factory()

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` (no migrations)."""
        # Import models so their tables are registered before create_all
        import gympass.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Run `SELECT 1`; used by the health check."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Return the storage handle owned by the running application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the application's Database handle
        2. Yields it to the route (services and repositories run queries)
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
