"""
Session handling shared by every store.

Each storage call acquires its own session from the injected factory and
releases it on return. Writes run inside ``session.begin()`` so they commit on
success and roll back on any exception, which then propagates unchanged.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.errors import DomainError
from app.core.logging import get_logger
from app.core.metrics import record_domain_error, record_storage_operation
from app.db.base import utcnow

logger = get_logger(__name__)


class StorageBase:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _reader(self, operation: str) -> AsyncIterator[AsyncSession]:
        start = time.perf_counter()
        async with self._session_factory() as session:
            yield session
        record_storage_operation(operation, "read", time.perf_counter() - start)

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        start = time.perf_counter()
        async with self._session_factory() as session:
            async with session.begin():
                yield session
        record_storage_operation(operation, "write", time.perf_counter() - start)

    @staticmethod
    def _apply(row, changes: dict, ignore: Iterable[str] = ()) -> None:
        """Copy changes onto a loaded row and refresh updated_at when it has one."""
        skipped = set(ignore)
        for field, value in changes.items():
            if field not in skipped:
                setattr(row, field, value)
        if hasattr(row, "updated_at"):
            row.updated_at = utcnow()

    @staticmethod
    def _fail(error: DomainError, **context) -> DomainError:
        record_domain_error(error.code.value)
        logger.warning("storage_domain_error", code=error.code.value, message=error.message, **context)
        return error
