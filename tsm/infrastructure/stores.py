"""Store wiring: binds the SQLAlchemy adapters to a caller's session."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from tsm.adapters.persistence import database
from tsm.adapters.persistence.relational_access import SqlRelationalAccess
from tsm.adapters.persistence.repositories import SqlAssignmentStore, SqlSchedulerStore
from tsm.application.ports.assignment_store import AssignmentStore
from tsm.application.ports.scheduler_store import SchedulerStore
from tsm.config import settings


@dataclass
class Stores:
    assignments: AssignmentStore
    schedulers: SchedulerStore


def get_relational_access(session: AsyncSession) -> SqlRelationalAccess:
    return SqlRelationalAccess(session, timeout=settings.statement_timeout_seconds)


def get_assignment_store(session: AsyncSession) -> SqlAssignmentStore:
    return SqlAssignmentStore(get_relational_access(session))


def get_scheduler_store(session: AsyncSession) -> SqlSchedulerStore:
    return SqlSchedulerStore(get_relational_access(session))


@asynccontextmanager
async def open_stores() -> AsyncIterator[Stores]:
    """Both stores sharing one session; the transaction commits on exit."""
    async with database.session_scope() as session:
        db = get_relational_access(session)
        yield Stores(
            assignments=SqlAssignmentStore(db),
            schedulers=SqlSchedulerStore(db),
        )
