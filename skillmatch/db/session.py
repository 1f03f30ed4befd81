"""Database engine ownership and the transaction helper."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Awaitable, Callable, TypeVar

import structlog
from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from skillmatch.config import Settings

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # Leave BEGIN to _on_sqlite_begin so DDL runs inside the transaction too
    dbapi_connection.isolation_level = None


def _on_sqlite_begin(conn) -> None:
    conn.exec_driver_sql("BEGIN")


class Database:
    """
    Owns the async engine (and therefore the bounded connection pool) and the
    session factory. One instance is created per process by the application
    lifespan or a script, and released with :meth:`dispose`.
    """

    def __init__(self, url: str, echo: bool = False, **engine_options: Any):
        self.engine = create_async_engine(url, echo=echo, **engine_options)
        if self.engine.dialect.name == "sqlite":
            # Foreign keys (ON DELETE CASCADE) and transactional DDL are opt-in on SQLite
            event.listen(self.engine.sync_engine, "connect", _on_sqlite_connect)
            event.listen(self.engine.sync_engine, "begin", _on_sqlite_begin)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("database_engine_created", dialect=self.engine.dialect.name)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the pool from configuration: fixed size, acquisition timeout, idle recycle."""
        options: dict = {}
        if not settings.is_sqlite:
            options.update(
                pool_size=settings.DATABASE_POOL_SIZE,
                max_overflow=0,
                pool_timeout=settings.DATABASE_POOL_TIMEOUT,
                pool_recycle=settings.DATABASE_POOL_RECYCLE,
                pool_pre_ping=True,
            )
            if settings.DATABASE_SSL:
                options["connect_args"] = {"ssl": "require"}
        return cls(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, **options)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Scoped unit of work.

        Checks a connection out of the pool, commits when the block exits
        normally, rolls back and re-raises on any exception, and always
        returns the connection to the pool.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def run_in_transaction(self, work: Callable[[AsyncSession], Awaitable[T]]) -> T:
        """Run ``work(session)`` inside :meth:`transaction` and return its result."""
        async with self.transaction() as session:
            return await work(session)

    async def ping(self) -> bool:
        """Test the database connection."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("database_ping_failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
        logger.info("database_engine_disposed")


def insert_for(dialect_name: str):
    """Return the dialect's ``insert`` construct, which supports ON CONFLICT."""
    if dialect_name == "postgresql":
        return postgresql.insert
    if dialect_name == "sqlite":
        return sqlite.insert
    raise NotImplementedError(f"Upserts are not supported on dialect {dialect_name!r}")


def session_insert(session: AsyncSession):
    """``insert_for`` resolved from the session's bind."""
    return insert_for(session.get_bind().dialect.name)


def get_database(request: Request) -> Database:
    """Dependency to get the process-wide Database."""
    return request.app.state.db


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session wrapped in a transaction."""
    async with get_database(request).transaction() as session:
        yield session
