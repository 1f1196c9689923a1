"""
The Ledger store: an explicitly owned in-memory database plus the lock that
serializes access to it.

CONCURRENCY STRATEGY: One Writer at a Time
==========================================

Problem:
  A booking is check-then-reserve over a shared calendar followed by a fee
  transfer. Two participants racing for the same slot both see it free;
  a reader arriving mid-booking could see the slot taken but the fee not yet
  moved.

Solution:
  Every operation runs inside Ledger.transaction() or Ledger.snapshot().
  Both hold the same asyncio.Lock for their whole duration and use a single
  AsyncSession:

  1. Acquire the ledger lock
  2. Validate, then mutate calendar and balances in the session
  3. Commit on success; roll back on any exception, cancellation included

  This gives:
  - No interleaving of mutating operations
  - Readers only ever see committed, complete bookings
  - All-or-nothing bookings: the slot row and both balance changes share one
    transaction
  - DB unique/check constraints stay as the final safety net (I3, I5)

The in-memory SQLite database lives on a single StaticPool connection, so it
exists exactly as long as the Ledger's engine does.
"""

import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from training_ledger.core.config import get_settings
from training_ledger.core.logging import get_logger
from training_ledger.db.base import Base

logger = get_logger(__name__)


class Ledger:
    """Owns the engine, the session factory and the ledger lock."""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        settings = get_settings()
        self.database_url = database_url or settings.DATABASE_URL
        engine_kwargs = {}
        if self.database_url.startswith("sqlite"):
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        self.engine = create_async_engine(
            self.database_url,
            echo=settings.DATABASE_ECHO if echo is None else echo,
            **engine_kwargs,
        )
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._lock = asyncio.Lock()
        # Scopes anything stored outside the engine (the schedule cache) to this ledger
        self.instance_id = uuid.uuid4().hex

    async def create_all(self) -> None:
        # Import models so their tables are registered on the metadata
        from training_ledger import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("ledger_ready", url=self.database_url)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("ledger_disposed")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Exclusive read-write unit of work: commit on success, roll back on any exception."""
        async with self._lock:
            async with self.session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except BaseException:
                    await session.rollback()
                    raise

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[AsyncSession]:
        """
        Read-only view of committed state; never commits.

        Loaded records are detached before the rollback so their attributes
        stay readable after the block closes.
        """
        async with self._lock:
            async with self.session_factory() as session:
                try:
                    yield session
                finally:
                    session.expunge_all()
                    await session.rollback()


def get_ledger(request: Request) -> Ledger:
    """FastAPI dependency returning the application's ledger."""
    return request.app.state.ledger
