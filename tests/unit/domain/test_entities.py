"""Tests for domain entities and search containers."""

from tsm.domain.entities.assignment import Assignment, AssignmentDTO, AssignmentLog
from tsm.domain.entities.scheduler import Scheduler, SchedulerAssignee, SchedulerDTO
from tsm.domain.errors import (
    NotFoundError,
    OperationCancelledError,
    PersistenceError,
    StoreError,
)
from tsm.domain.value_objects.enums import Priority, SchedulerStatus
from tsm.domain.value_objects.search import (
    SearchAssignmentQuery,
    SearchAssignmentQueryResult,
    SearchSchedulerQuery,
    SearchSchedulerQueryResult,
)


def test_assignment_defaults():
    a = Assignment(id=None, member_id=1, status=1, priority=2)
    assert a.assignees == []
    assert a.created_at is None


def test_assignment_assignees_not_shared():
    a = Assignment(id=None, member_id=1, status=1, priority=2)
    b = Assignment(id=None, member_id=2, status=1, priority=2)
    a.assignees.append(5)
    assert b.assignees == []


def test_assignment_dto_is_an_assignment():
    dto = AssignmentDTO(id=1, member_id=1, status=1, priority=1, assignees=[3], log_count=2)
    assert isinstance(dto, Assignment)
    assert dto.log_count == 2


def test_assignment_log_payload_defaults_to_empty_dict():
    log = AssignmentLog(id=None, assignment_id=1, actor_id=9)
    assert log.payload == {}


def test_scheduler_dto_roster_defaults():
    dto = SchedulerDTO(id=1, name="nightly", currency="USD", priority=1, status=1)
    assert isinstance(dto, Scheduler)
    assert dto.assignees == []
    assert dto.assignee_count == 0


def test_scheduler_assignee_allows_unset_user():
    link = SchedulerAssignee(id=None, scheduler_id=1, user_id=None)
    assert link.user_id is None


def test_enums_are_plain_ints():
    s = Scheduler(
        id=None, name="n", currency="USD",
        priority=Priority.HIGH, status=SchedulerStatus.ACTIVE,
    )
    assert s.priority == 1
    assert s.status == 1


def test_empty_queries_filter_nothing():
    q = SearchAssignmentQuery()
    assert q.member_id == 0 and q.assignees == [] and q.per_page == 0
    sq = SearchSchedulerQuery()
    assert sq.name == "" and sq.currency == "" and sq.date_from is None


def test_result_lists_are_never_none():
    assert SearchAssignmentQueryResult().assignments == []
    assert SearchSchedulerQueryResult().schedulers == []


def test_error_taxonomy():
    for exc in (NotFoundError, PersistenceError, OperationCancelledError):
        assert issubclass(exc, StoreError)
    assert not issubclass(NotFoundError, PersistenceError)
