"""Async SQLAlchemy engine, session factory, and declarative base."""

import logging

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)


def build_engine(
    url: str,
    *,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 20,
    command_timeout: float | None = None,
) -> AsyncEngine:
    """Create an async engine for ``url``.

    PostgreSQL gets a regular connection pool and an asyncpg per-statement
    timeout. SQLite (used by the test suite) shares one connection when it is
    in-memory and has foreign keys switched on, so the image cascade rule is
    enforced on both backends.
    """
    parsed = make_url(url)

    if parsed.get_backend_name() != "sqlite":
        connect_args = {}
        if command_timeout is not None and parsed.get_driver_name() == "asyncpg":
            connect_args["command_timeout"] = command_timeout
        return create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
            connect_args=connect_args,
        )

    kwargs = {"echo": echo, "connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_async_engine(url, **kwargs)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose objects stay readable after commit."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    command_timeout=settings.db_command_timeout,
)

async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet."""
    # Register the tables on Base.metadata before create_all.
    import app.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def close_db(bind: AsyncEngine = engine) -> None:
    """Dispose pooled connections."""
    await bind.dispose()
