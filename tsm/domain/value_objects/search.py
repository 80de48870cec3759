"""Search query objects and their result containers.

Every filter field is optional: zero / empty / None means "not filtered".
"""

from dataclasses import dataclass, field
from datetime import datetime

from tsm.domain.entities.assignment import Assignment
from tsm.domain.entities.scheduler import Scheduler


@dataclass
class SearchAssignmentQuery:
    member_id: int = 0
    assignees: list[int] = field(default_factory=list)
    date_from: datetime | None = None
    date_to: datetime | None = None
    page: int = 1
    per_page: int = 0


@dataclass
class SearchAssignmentQueryResult:
    assignments: list[Assignment] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    per_page: int = 0


@dataclass
class SearchSchedulerQuery:
    name: str = ""
    currency: str = ""
    priority: int = 0
    status: int = 0
    assignees: list[int] = field(default_factory=list)
    date_from: datetime | None = None
    date_to: datetime | None = None
    page: int = 1
    per_page: int = 0


@dataclass
class SearchSchedulerQueryResult:
    schedulers: list[Scheduler] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    per_page: int = 0
