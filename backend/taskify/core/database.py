"""
Async database engine, session factory and transaction helpers.
"""
import logging
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from taskify.core.config import settings
from taskify.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


engine = create_async_engine(settings.database_url, echo=settings.echo_sql, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def utcnow() -> datetime:
    """Naive UTC timestamp used for every created_at/updated_at column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


@contextmanager
def store_errors(operation: str = "read") -> Iterator[None]:
    """Re-raise SQLAlchemy failures inside the block as StoreError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Database {operation} failed: {e}")
        raise StoreError(f"Database {operation} failed: {e.__class__.__name__}") from e


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a multi-statement mutation as a single transaction.

    Everything executed inside the block is committed together on exit. Any
    exception rolls the whole block back; SQLAlchemy failures are re-raised
    as StoreError, domain errors propagate unchanged.
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Transaction rolled back after store failure: {e}")
        raise StoreError(f"Database operation failed: {e.__class__.__name__}") from e
    except Exception:
        await db.rollback()
        raise
