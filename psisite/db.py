"""
Async SQLAlchemy engine and sessions.

PostgreSQL (asyncpg) in production; sqlite (aiosqlite) for local runs and tests.
"""

import asyncio
import logging
import ssl
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from psisite.settings import settings

logger = logging.getLogger(__name__)

# Hosts that never need TLS (dev machines and docker-compose service names)
LOCAL_DB_HOSTS = ("localhost", "127.0.0.1", "@db:", "@db/", "@postgres:", "@postgres/")
INIT_RETRIES = 10
INIT_RETRY_DELAY = 5


class Base(DeclarativeBase):
    """Declarative base shared by every psisite table."""


def _postgres_connect_args() -> dict:
    if any(host in settings.database_url for host in LOCAL_DB_HOSTS):
        return {}
    # Hosted Postgres usually presents a self-signed chain
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    logger.info("Using TLS for the database connection")
    return {"ssl": context}


def _create_engine():
    if settings.is_sqlite:
        # aiosqlite connections are bound to the loop that opened them
        return create_async_engine(settings.database_url, echo=settings.debug, poolclass=NullPool)
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=_postgres_connect_args(),
    )


engine = _create_engine()

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: committed on success, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, committed when the handler returns."""
    async with get_db_context() as session:
        yield session


async def init_db() -> None:
    """Create missing tables, waiting for the database to come up."""
    from psisite import models  # noqa: F401  (registers every table)

    attempts = 1 if settings.is_sqlite else INIT_RETRIES
    for attempt in range(1, attempts + 1):
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except OSError as exc:
            if attempt == attempts:
                logger.error("Database unreachable after %d attempts", attempts)
                raise
            logger.warning("Database not ready (%s); attempt %d/%d", exc, attempt, attempts)
            await asyncio.sleep(INIT_RETRY_DELAY)
        else:
            logger.info("Database tables ready")
            return


async def close_db() -> None:
    await engine.dispose()
