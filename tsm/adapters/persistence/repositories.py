"""SQLAlchemy store implementations."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, insert, select, update

from tsm.adapters.persistence.models import (
    AssignmentAssigneeModel,
    AssignmentLogModel,
    AssignmentModel,
    SchedulerAssigneeModel,
    SchedulerModel,
)
from tsm.adapters.persistence.query_filter import FilterBuilder, Pagination
from tsm.application.ports.assignment_store import AssignmentStore
from tsm.application.ports.relational_access import RelationalAccess
from tsm.application.ports.scheduler_store import SchedulerStore
from tsm.domain.entities.assignment import Assignment, AssignmentDTO, AssignmentLog
from tsm.domain.entities.scheduler import Scheduler, SchedulerAssignee, SchedulerDTO
from tsm.domain.errors import NotFoundError, PersistenceError
from tsm.domain.value_objects.search import (
    SearchAssignmentQuery,
    SearchAssignmentQueryResult,
    SearchSchedulerQuery,
    SearchSchedulerQueryResult,
)

logger = logging.getLogger(__name__)

_assignments = AssignmentModel.__table__
_schedulers = SchedulerModel.__table__


def _utcnow() -> datetime:
    # Columns are naive UTC timestamps.
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ─── Mappers ─────────────────────────────────────────────────────────


def _assignment_to_domain(r: Any, assignees: list[int] | None = None) -> Assignment:
    return Assignment(
        id=r.id,
        member_id=r.member_id,
        status=r.status,
        priority=r.priority,
        assignees=assignees or [],
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


def _assignment_to_dto(r: Any, assignees: list[int]) -> AssignmentDTO:
    return AssignmentDTO(
        id=r.id,
        member_id=r.member_id,
        status=r.status,
        priority=r.priority,
        assignees=assignees,
        created_at=r.created_at,
        updated_at=r.updated_at,
        log_count=r.log_count or 0,
    )


def _log_to_domain(r: Any) -> AssignmentLog:
    return AssignmentLog(
        id=r.id,
        assignment_id=r.assignment_id,
        actor_id=r.actor_id,
        payload=r.payload or {},
        created_at=r.created_at,
    )


def _scheduler_to_domain(r: Any) -> Scheduler:
    return Scheduler(
        id=r.id,
        name=r.name,
        currency=r.currency,
        priority=r.priority,
        status=r.status,
        created_at=r.created_at,
        updated_at=r.updated_at,
    )


def _scheduler_to_dto(r: Any, roster: list[int | None]) -> SchedulerDTO:
    return SchedulerDTO(
        id=r.id,
        name=r.name,
        currency=r.currency,
        priority=r.priority,
        status=r.status,
        created_at=r.created_at,
        updated_at=r.updated_at,
        assignees=[user_id for user_id in roster if user_id is not None],
        assignee_count=len(roster),
    )


def _scheduler_assignee_to_domain(r: Any) -> SchedulerAssignee:
    return SchedulerAssignee(
        id=r.id,
        scheduler_id=r.scheduler_id,
        user_id=r.user_id,
        assigned_at=r.assigned_at,
    )


# ─── Stores ──────────────────────────────────────────────────────────


class SqlAssignmentStore(AssignmentStore):
    def __init__(self, db: RelationalAccess, log: logging.Logger | None = None):
        self._db = db
        self._log = log or logger

    async def create(self, entity: Assignment) -> int:
        created_at = entity.created_at or _utcnow()
        r = await self._db.fetch_one(
            insert(AssignmentModel)
            .values(
                member_id=entity.member_id,
                status=entity.status,
                priority=entity.priority,
                created_at=created_at,
            )
            .returning(AssignmentModel.id)
        )
        assignees = sorted(set(entity.assignees))
        if assignees:
            await self._db.execute(
                insert(AssignmentAssigneeModel.__table__).values(
                    [{"assignment_id": r.id, "user_id": user_id} for user_id in assignees]
                )
            )
        entity.id = r.id
        entity.created_at = created_at
        self._log.info(
            "Created assignment %d for member %d (%d assignees)",
            r.id, entity.member_id, len(assignees),
        )
        return r.id

    async def create_assignment_log(self, entity: AssignmentLog) -> None:
        created_at = entity.created_at or _utcnow()
        r = await self._db.fetch_one(
            insert(AssignmentLogModel)
            .values(
                assignment_id=entity.assignment_id,
                actor_id=entity.actor_id,
                payload=entity.payload,
                created_at=created_at,
            )
            .returning(AssignmentLogModel.id)
        )
        entity.id = r.id
        entity.created_at = created_at
        self._log.info("Assignment %d: log entry %d by actor %d", entity.assignment_id, r.id, entity.actor_id)

    async def get_by_id(self, assignment_id: int) -> AssignmentDTO:
        try:
            r = await self._db.fetch_one(
                self._detail_query().where(AssignmentModel.id == assignment_id)
            )
        except NotFoundError:
            self._log.debug("Assignment %d not found", assignment_id)
            raise
        return _assignment_to_dto(r, await self._assignee_ids(r.id))

    async def get_by_member_id(self, member_id: int) -> AssignmentDTO:
        try:
            r = await self._db.fetch_one(
                self._detail_query()
                .where(AssignmentModel.member_id == member_id)
                .order_by(AssignmentModel.created_at.desc(), AssignmentModel.id.desc())
                .limit(1)
            )
        except NotFoundError:
            self._log.debug("No assignment for member %d", member_id)
            raise
        return _assignment_to_dto(r, await self._assignee_ids(r.id))

    async def search(self, query: SearchAssignmentQuery) -> SearchAssignmentQueryResult:
        pagination = Pagination.resolve(query.page, query.per_page)
        filters = (
            FilterBuilder()
            .equals(AssignmentModel.member_id, query.member_id)
            .any_related(
                AssignmentModel.id,
                AssignmentAssigneeModel.assignment_id,
                AssignmentAssigneeModel.user_id,
                query.assignees,
            )
            .between(AssignmentModel.created_at, query.date_from, query.date_to)
        )

        total = await self._db.fetch_one(filters.count(_assignments))
        rows = await self._db.fetch_all(
            filters.apply(select(_assignments), pagination, AssignmentModel.id)
        )

        assignees: dict[int, list[int]] = defaultdict(list)
        if rows:
            links = await self._db.fetch_all(
                select(AssignmentAssigneeModel.assignment_id, AssignmentAssigneeModel.user_id)
                .where(AssignmentAssigneeModel.assignment_id.in_([r.id for r in rows]))
                .order_by(AssignmentAssigneeModel.assignment_id, AssignmentAssigneeModel.user_id)
            )
            for link in links:
                assignees[link.assignment_id].append(link.user_id)

        return SearchAssignmentQueryResult(
            assignments=[_assignment_to_domain(r, assignees.get(r.id)) for r in rows],
            total_count=total.total,
            page=pagination.page,
            per_page=pagination.per_page,
        )

    async def get_by_assignees_id(self, assignment_ids: list[int]) -> list[int]:
        if not assignment_ids:
            raise NotFoundError("no assignment ids given")
        rows = await self._db.fetch_all(
            select(AssignmentAssigneeModel.user_id)
            .where(AssignmentAssigneeModel.assignment_id.in_(assignment_ids))
            .distinct()
            .order_by(AssignmentAssigneeModel.user_id)
        )
        if not rows:
            self._log.debug("No assignees for assignments %s", assignment_ids)
            raise NotFoundError(f"no assignees for assignments {assignment_ids}")
        return sorted({r.user_id for r in rows})

    async def update(self, entity: Assignment) -> None:
        count = await self._db.execute(
            update(AssignmentModel)
            .where(AssignmentModel.id == entity.id)
            .values(
                member_id=entity.member_id,
                status=entity.status,
                priority=entity.priority,
                updated_at=_utcnow(),
            )
        )
        if count == 0:
            raise PersistenceError(f"assignment {entity.id} was not updated")
        self._log.info("Updated assignment %d: status=%d priority=%d", entity.id, entity.status, entity.priority)

    async def get_assignment_log(self, assignment_id: int) -> list[AssignmentLog]:
        rows = await self._db.fetch_all(
            select(AssignmentLogModel.__table__)
            .where(AssignmentLogModel.assignment_id == assignment_id)
            .order_by(AssignmentLogModel.created_at, AssignmentLogModel.id)
        )
        return [_log_to_domain(r) for r in rows]

    @staticmethod
    def _detail_query():
        log_count = (
            select(func.count(AssignmentLogModel.id))
            .where(AssignmentLogModel.assignment_id == AssignmentModel.id)
            .scalar_subquery()
        )
        return select(_assignments, log_count.label("log_count"))

    async def _assignee_ids(self, assignment_id: int) -> list[int]:
        rows = await self._db.fetch_all(
            select(AssignmentAssigneeModel.user_id)
            .where(AssignmentAssigneeModel.assignment_id == assignment_id)
            .order_by(AssignmentAssigneeModel.user_id)
        )
        return [r.user_id for r in rows]


class SqlSchedulerStore(SchedulerStore):
    def __init__(self, db: RelationalAccess, log: logging.Logger | None = None):
        self._db = db
        self._log = log or logger

    async def create(self, entity: Scheduler) -> int:
        created_at = entity.created_at or _utcnow()
        r = await self._db.fetch_one(
            insert(SchedulerModel)
            .values(
                name=entity.name,
                currency=entity.currency,
                priority=entity.priority,
                status=entity.status,
                created_at=created_at,
            )
            .returning(SchedulerModel.id)
        )
        entity.id = r.id
        entity.created_at = created_at
        self._log.info("Created scheduler %d (%s, %s)", r.id, entity.name, entity.currency)
        return r.id

    async def create_assignee(self, entity: SchedulerAssignee) -> None:
        assigned_at = entity.assigned_at or _utcnow()
        r = await self._db.fetch_one(
            insert(SchedulerAssigneeModel)
            .values(
                scheduler_id=entity.scheduler_id,
                user_id=entity.user_id,
                assigned_at=assigned_at,
            )
            .returning(SchedulerAssigneeModel.id)
        )
        entity.id = r.id
        entity.assigned_at = assigned_at
        self._log.info("Scheduler %d: assigned user %s", entity.scheduler_id, entity.user_id)

    async def update_scheduler(self, entity: Scheduler) -> None:
        count = await self._db.execute(
            update(SchedulerModel)
            .where(SchedulerModel.id == entity.id)
            .values(
                name=entity.name,
                currency=entity.currency,
                priority=entity.priority,
                status=entity.status,
                updated_at=_utcnow(),
            )
        )
        if count == 0:
            raise PersistenceError(f"scheduler {entity.id} was not updated")
        self._log.info("Updated scheduler %d", entity.id)

    async def update_schedule_status(self, entity: Scheduler) -> None:
        count = await self._db.execute(
            update(SchedulerModel)
            .where(SchedulerModel.id == entity.id)
            .values(status=entity.status, updated_at=_utcnow())
        )
        if count == 0:
            raise PersistenceError(f"scheduler {entity.id} status was not updated")
        self._log.info("Scheduler %d: status -> %d", entity.id, entity.status)

    async def get_scheduler_by_id(self, scheduler_id: int) -> SchedulerDTO:
        try:
            r = await self._db.fetch_one(
                select(_schedulers).where(SchedulerModel.id == scheduler_id)
            )
        except NotFoundError:
            self._log.debug("Scheduler %d not found", scheduler_id)
            raise
        return _scheduler_to_dto(r, await self.get_scheduler_user_ids_by_id(r.id))

    async def get_scheduler_assign_by_id(self, scheduler_id: int) -> list[SchedulerAssignee]:
        rows = await self._db.fetch_all(
            select(SchedulerAssigneeModel.__table__)
            .where(SchedulerAssigneeModel.scheduler_id == scheduler_id)
            .order_by(SchedulerAssigneeModel.id)
        )
        return [_scheduler_assignee_to_domain(r) for r in rows]

    async def get_scheduler_user_ids_by_id(self, scheduler_id: int) -> list[int | None]:
        rows = await self._db.fetch_all(
            select(SchedulerAssigneeModel.user_id)
            .where(SchedulerAssigneeModel.scheduler_id == scheduler_id)
            .order_by(SchedulerAssigneeModel.id)
        )
        return [r.user_id for r in rows]

    async def search(self, query: SearchSchedulerQuery) -> SearchSchedulerQueryResult:
        pagination = Pagination.resolve(query.page, query.per_page)
        filters = (
            FilterBuilder()
            .contains(SchedulerModel.name, query.name)
            .equals(SchedulerModel.currency, query.currency)
            .equals(SchedulerModel.priority, query.priority)
            .equals(SchedulerModel.status, query.status)
            .any_related(
                SchedulerModel.id,
                SchedulerAssigneeModel.scheduler_id,
                SchedulerAssigneeModel.user_id,
                query.assignees,
            )
            .between(SchedulerModel.created_at, query.date_from, query.date_to)
        )

        total = await self._db.fetch_one(filters.count(_schedulers))
        rows = await self._db.fetch_all(
            filters.apply(select(_schedulers), pagination, SchedulerModel.id)
        )
        return SearchSchedulerQueryResult(
            schedulers=[_scheduler_to_domain(r) for r in rows],
            total_count=total.total,
            page=pagination.page,
            per_page=pagination.per_page,
        )

    async def unassign_assignee(self, scheduler_assignee_id: int) -> None:
        count = await self._db.execute(
            delete(SchedulerAssigneeModel).where(
                SchedulerAssigneeModel.id == scheduler_assignee_id
            )
        )
        if count == 0:
            raise NotFoundError(f"scheduler assignee {scheduler_assignee_id} not found")
        self._log.info("Removed scheduler assignee %d", scheduler_assignee_id)

    async def delete_by_scheduler_id_and_user_id(self, scheduler_id: int, user_id: int) -> None:
        count = await self._db.execute(
            delete(SchedulerAssigneeModel).where(
                SchedulerAssigneeModel.scheduler_id == scheduler_id,
                SchedulerAssigneeModel.user_id == user_id,
            )
        )
        if count == 0:
            raise NotFoundError(f"user {user_id} is not assigned to scheduler {scheduler_id}")
        self._log.info("Scheduler %d: unassigned user %d", scheduler_id, user_id)

    async def get_scheduler_list(self) -> list[SchedulerDTO]:
        rows = await self._db.fetch_all(select(_schedulers).order_by(SchedulerModel.id))
        if not rows:
            return []

        rosters: dict[int, list[int | None]] = defaultdict(list)
        links = await self._db.fetch_all(
            select(SchedulerAssigneeModel.scheduler_id, SchedulerAssigneeModel.user_id)
            .where(SchedulerAssigneeModel.scheduler_id.in_([r.id for r in rows]))
            .order_by(SchedulerAssigneeModel.scheduler_id, SchedulerAssigneeModel.id)
        )
        for link in links:
            rosters[link.scheduler_id].append(link.user_id)
        return [_scheduler_to_dto(r, rosters.get(r.id, [])) for r in rows]
