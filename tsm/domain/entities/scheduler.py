"""Scheduler entities: a recurring dispatch definition and its roster."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Scheduler:
    id: int | None
    name: str
    currency: str
    priority: int
    status: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class SchedulerDTO(Scheduler):
    """Read projection: the scheduler plus a summary of its roster."""

    assignees: list[int] = field(default_factory=list)
    assignee_count: int = 0


@dataclass
class SchedulerAssignee:
    """Link between a scheduler and a user.

    ``user_id`` is a weak reference: user identity lives in another service,
    and the column may be unset.
    """

    id: int | None
    scheduler_id: int
    user_id: int | None
    assigned_at: datetime | None = None
