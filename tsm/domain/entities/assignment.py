"""Assignment entities: a work item owned by a member and its audit trail."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Assignment:
    id: int | None
    member_id: int
    status: int
    priority: int
    assignees: list[int] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class AssignmentDTO(Assignment):
    """Read projection: the assignment plus fields derived on read."""

    log_count: int = 0


@dataclass
class AssignmentLog:
    """Immutable record of one state change of an assignment."""

    id: int | None
    assignment_id: int
    actor_id: int
    payload: dict = field(default_factory=dict)
    created_at: datetime | None = None
