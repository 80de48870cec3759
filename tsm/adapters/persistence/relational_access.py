"""SQLAlchemy implementation of the RelationalAccess port."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from tsm.application.ports.relational_access import RelationalAccess
from tsm.domain.errors import NotFoundError, OperationCancelledError, PersistenceError

logger = logging.getLogger(__name__)


class SqlRelationalAccess(RelationalAccess):
    """Runs statements on a caller-owned AsyncSession.

    The session's transaction is never committed here; the caller decides.
    ``timeout`` bounds every statement, expiry raises OperationCancelledError.
    """

    def __init__(self, session: AsyncSession, timeout: float | None = None):
        self._s = session
        self._timeout = timeout

    async def fetch_one(self, stmt: Executable) -> Any:
        result = await self._run(stmt)
        row = result.first()
        if row is None:
            raise NotFoundError("no rows in result set")
        return row

    async def fetch_all(self, stmt: Executable) -> list[Any]:
        result = await self._run(stmt)
        return list(result.all())

    async def execute(self, stmt: Executable) -> int:
        result = await self._run(stmt)
        return result.rowcount

    async def _run(self, stmt: Executable):
        try:
            if self._timeout is None:
                return await self._s.execute(stmt)
            return await asyncio.wait_for(self._s.execute(stmt), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            logger.warning("Statement exceeded %.3fs deadline", self._timeout)
            raise OperationCancelledError(
                f"statement cancelled after {self._timeout}s"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Statement failed: %s", exc)
            raise PersistenceError(str(exc)) from exc
