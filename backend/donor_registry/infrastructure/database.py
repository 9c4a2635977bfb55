"""Database Session Manager — async engine, request-scoped sessions, store error mapping.

Invariants:
    - A session that sees any exception is rolled back before the exception leaves it
    - IntegrityError surfaces as ConflictError (409): a uniqueness rule was broken
    - Every other SQLAlchemyError surfaces as StoreError (503), tagged with the
      operation class that failed
    - Registry errors raised inside a session pass through unchanged

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Pool sizing only for server databases; SQLite uses its own static pool
    - Failure table ordered most specific first (OperationalError is a DBAPIError)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from donor_registry.core.errors import ConflictError, DonorRegistryError, StoreError

logger = logging.getLogger(__name__)

_STORE_FAILURES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
)


def translate_store_error(exc: SQLAlchemyError) -> DonorRegistryError:
    """Map a SQLAlchemy exception onto the registry error taxonomy."""
    if isinstance(exc, IntegrityError):
        return ConflictError("Uniqueness constraint violated")
    for exc_type, message, operation in _STORE_FAILURES:
        if isinstance(exc, exc_type):
            return StoreError(message, operation)
    return StoreError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Owns the engine and hands out sessions that roll back and translate failures."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as exc:
            await session.rollback()
            error = translate_store_error(exc)
            level = logging.WARNING if error.http_status < 500 else logging.ERROR
            logger.log(
                level,
                f"{type(exc).__name__} mapped to {error.code}: {exc}",
                extra={"error_code": error.code},
            )
            raise error from exc
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Round-trip SELECT 1; False on any store failure."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False
        except OSError as e:
            logger.error(f"DB unreachable: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
