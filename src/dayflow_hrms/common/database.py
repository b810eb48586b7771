"""Async database manager for DayFlow HRMS."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dayflow_hrms.common.config import DayflowSettings, get_settings
from dayflow_hrms.common.exceptions import ConflictError, TransientStoreError
from dayflow_hrms.common.models import Base

# Import all model modules so Base.metadata is complete for create_all().
import dayflow_hrms.tenants.models  # noqa: F401
import dayflow_hrms.counters.models  # noqa: F401
import dayflow_hrms.accounts.models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages a single async database engine.

    Sessions handed out by :meth:`get_session` commit on success and roll
    back on failure. Driver errors are translated into the domain taxonomy:
    unique-constraint violations become :class:`ConflictError`, lock waits,
    lost connections and timeouts become :class:`TransientStoreError`.
    """

    def __init__(self, settings: DayflowSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def store_timeout(self) -> float:
        return self._settings.store_timeout

    async def init(self) -> None:
        url = self._settings.db_url
        connect_args = {}
        if url.startswith("sqlite") or url.startswith("postgresql+asyncpg"):
            # Bounds lock waits (sqlite) and connection setup (asyncpg).
            connect_args["timeout"] = self._settings.store_timeout
        self.engine = create_async_engine(url, echo=False, connect_args=connect_args)
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise ConflictError(_conflict_message(exc)) from exc
            except (OperationalError, asyncio.TimeoutError) as exc:
                await session.rollback()
                logger.warning("Store operation failed: %s", type(exc).__name__)
                raise TransientStoreError() from exc
            except DBAPIError as exc:
                await session.rollback()
                if exc.connection_invalidated:
                    logger.warning("Store connection lost")
                    raise TransientStoreError() from exc
                raise
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        if self.engine is None:
            raise RuntimeError("DatabaseManager not initialized — call init() first")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None


def _conflict_message(exc: IntegrityError) -> str:
    """Name the violated field without echoing the offending value."""
    text = str(exc.orig).lower()
    if "email" in text:
        return "Email already registered"
    if "login_id" in text:
        return "Login ID already exists"
    if "code" in text:
        return "Company with similar name already exists"
    return "Resource already exists"
