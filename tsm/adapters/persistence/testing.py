"""In-memory RelationalAccess for unit tests.

Replays queued results in call order, or raises an injected error on every
call. Executed statements are recorded so tests can inspect the SQL.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from sqlalchemy.sql import Executable

from tsm.application.ports.relational_access import RelationalAccess
from tsm.domain.errors import NotFoundError

_EXHAUSTED = object()


def row(**values: Any) -> SimpleNamespace:
    """Build a row-like object with attribute access, like sqlalchemy's Row."""
    return SimpleNamespace(**values)


class FakeRelationalAccess(RelationalAccess):
    def __init__(self, results: list[Any] | None = None, error: Exception | None = None):
        self.results = list(results or [])
        self.error = error
        self.statements: list[Executable] = []

    async def fetch_one(self, stmt: Executable) -> Any:
        value = self._next(stmt)
        if value is _EXHAUSTED or value is None or value == []:
            raise NotFoundError("no rows in result set")
        if isinstance(value, list):
            return value[0]
        return value

    async def fetch_all(self, stmt: Executable) -> list[Any]:
        value = self._next(stmt)
        if value is _EXHAUSTED or value is None:
            return []
        return list(value)

    async def execute(self, stmt: Executable) -> int:
        value = self._next(stmt)
        if value is _EXHAUSTED or value is None:
            return 1
        return int(value)

    def _next(self, stmt: Executable) -> Any:
        self.statements.append(stmt)
        if self.error is not None:
            raise self.error
        if not self.results:
            return _EXHAUSTED
        return self.results.pop(0)
