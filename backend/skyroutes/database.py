"""
SkyRoutes Backend - Database Engine and Session Management
===========================================================

What:  Async SQLAlchemy engine, session factory, FastAPI session dependency and
       the startup schema check.
How:   One process-wide engine is created at import time from
       `settings.database_url`. Each request receives its own AsyncSession;
       sessions only ever read.
Who:   Route handlers (via Depends), the app lifespan and the test suite.

Connection Strategy:
    SQLite (default):   NullPool, a fresh aiosqlite connection per session.
                        Opening a read-only file connection is cheap and no
                        connection outlives the event loop that opened it.
    Other backends:     Queue pool sized from settings, with pre-ping and
                        hourly recycling.

Consistency:
    The dataset never changes while the process runs. The count query and the
    row query of one request still run on the same session, hence inside one
    read transaction, so they observe the same snapshot even on a backend that
    is written to by someone else.
"""

import logging
from typing import Any, AsyncGenerator, Dict, List, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from skyroutes.config import settings
from skyroutes.exceptions import DatabaseError

logger = logging.getLogger(__name__)

# Objects the query engine and catalog endpoints read from
REQUIRED_VIEW = "route_details"
REQUIRED_TABLES = ("airports", "airlines", "routes", "route_airlines")


def _engine_kwargs() -> Dict[str, Any]:
    """Pool configuration for the configured backend."""
    kwargs: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        kwargs["poolclass"] = NullPool
    else:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return kwargs


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_kwargs())

# ── Session Factory ───────────────────────────────────────────────────────
# autoflush off: sessions never hold pending writes
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """
    Base class for the ORM mappings of the dataset.

    The metadata is never used to create tables: the dataset ships fully built
    and `route_details` is a view, not a table.
    """
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a read-only database session per request.

    How it works:
        1. Creates a new session from the factory (no connection yet)
        2. Yields it to the route handler, which runs its SELECTs
        3. Closes the session, ending the read transaction and releasing
           the connection, whether the handler succeeded or raised

    Nothing is ever committed. Exceptions propagate to the global handlers.
    """
    async with async_session_factory() as session:
        yield session


# ── Schema Verification ───────────────────────────────────────────────────
def _inspect_schema(sync_conn) -> Tuple[List[str], List[str], List[str]]:
    inspector = inspect(sync_conn)
    views = inspector.get_view_names()
    tables = inspector.get_table_names()
    columns: List[str] = []
    if REQUIRED_VIEW in views:
        columns = [col["name"] for col in inspector.get_columns(REQUIRED_VIEW)]
    return views, tables, columns


async def verify_schema(bind: Optional[AsyncEngine] = None) -> List[str]:
    """
    Confirm the dataset exposes everything the API reads.

    What:    Checks for the `route_details` view and the base tables, then logs
             the view's columns.
    When:    Once during application startup (lifespan), before traffic.

    Returns:
        Column names of the `route_details` view.

    Raises:
        DatabaseError: The database cannot be opened, or a required view or
                       table is missing.
    """
    bind = bind or engine
    try:
        async with bind.connect() as conn:
            views, tables, columns = await conn.run_sync(_inspect_schema)
    except SQLAlchemyError as e:
        logger.error("Could not inspect database schema: %s", str(e))
        raise DatabaseError(
            message="The routes database could not be opened.",
            context={"error_type": type(e).__name__},
        )

    if REQUIRED_VIEW not in views:
        raise DatabaseError(
            message=f"{REQUIRED_VIEW} view does not exist in the database",
            context={"views": views},
        )

    missing = [name for name in REQUIRED_TABLES if name not in tables]
    if missing:
        raise DatabaseError(
            message=f"Required tables are missing: {', '.join(missing)}",
            context={"missing_tables": missing},
        )

    logger.info(
        "%s view schema verified. Columns found: %s",
        REQUIRED_VIEW,
        ", ".join(columns),
    )
    return columns


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
