"""Tests for SqlRelationalAccess error translation (stub session, no database)."""

from __future__ import annotations

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from tsm.adapters.persistence.models import SchedulerModel
from tsm.adapters.persistence.relational_access import SqlRelationalAccess
from tsm.adapters.persistence.testing import row
from tsm.domain.errors import NotFoundError, OperationCancelledError, PersistenceError

STMT = select(SchedulerModel.id)


class StubResult:
    def __init__(self, rows=(), rowcount=0):
        self._rows = list(rows)
        self.rowcount = rowcount

    def first(self):
        return self._rows[0] if self._rows else None

    def all(self):
        return list(self._rows)


class StubSession:
    def __init__(self, result=None, error=None, delay=0.0):
        self._result = result or StubResult()
        self._error = error
        self._delay = delay
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._result


@pytest.mark.asyncio
async def test_fetch_one_returns_first_row():
    db = SqlRelationalAccess(StubSession(StubResult([row(id=1), row(id=2)])))
    assert (await db.fetch_one(STMT)).id == 1


@pytest.mark.asyncio
async def test_fetch_one_no_rows_is_not_found():
    db = SqlRelationalAccess(StubSession(StubResult([])))
    with pytest.raises(NotFoundError):
        await db.fetch_one(STMT)


@pytest.mark.asyncio
async def test_fetch_all_empty_is_empty_list():
    db = SqlRelationalAccess(StubSession(StubResult([])))
    assert await db.fetch_all(STMT) == []


@pytest.mark.asyncio
async def test_execute_returns_rowcount():
    db = SqlRelationalAccess(StubSession(StubResult(rowcount=3)))
    assert await db.execute(STMT) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        IntegrityError("INSERT", {}, Exception("duplicate key value")),
        OperationalError("SELECT", {}, Exception("connection refused")),
    ],
    ids=["constraint", "connectivity"],
)
async def test_driver_errors_become_persistence_errors(error):
    db = SqlRelationalAccess(StubSession(error=error))
    with pytest.raises(PersistenceError) as exc_info:
        await db.fetch_all(STMT)
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_deadline_expiry_is_cancellation():
    db = SqlRelationalAccess(StubSession(delay=0.5), timeout=0.01)
    with pytest.raises(OperationCancelledError):
        await db.fetch_all(STMT)


@pytest.mark.asyncio
async def test_no_timeout_waits_for_result():
    db = SqlRelationalAccess(StubSession(StubResult([row(id=1)]), delay=0.01), timeout=None)
    assert len(await db.fetch_all(STMT)) == 1


@pytest.mark.asyncio
async def test_task_cancellation_propagates_unchanged():
    db = SqlRelationalAccess(StubSession(error=asyncio.CancelledError()))
    with pytest.raises(asyncio.CancelledError):
        await db.fetch_one(STMT)
