"""Port interface for scheduler persistence."""

from abc import ABC, abstractmethod

from tsm.domain.entities.scheduler import Scheduler, SchedulerAssignee, SchedulerDTO
from tsm.domain.value_objects.search import (
    SearchSchedulerQuery,
    SearchSchedulerQueryResult,
)


class SchedulerStore(ABC):
    @abstractmethod
    async def create(self, entity: Scheduler) -> int:
        ...

    @abstractmethod
    async def create_assignee(self, entity: SchedulerAssignee) -> None:
        ...

    @abstractmethod
    async def update_scheduler(self, entity: Scheduler) -> None:
        ...

    @abstractmethod
    async def update_schedule_status(self, entity: Scheduler) -> None:
        """Write only the status column of an existing scheduler."""
        ...

    @abstractmethod
    async def get_scheduler_by_id(self, scheduler_id: int) -> SchedulerDTO:
        ...

    @abstractmethod
    async def get_scheduler_assign_by_id(self, scheduler_id: int) -> list[SchedulerAssignee]:
        ...

    @abstractmethod
    async def get_scheduler_user_ids_by_id(self, scheduler_id: int) -> list[int | None]:
        """One entry per roster row; None where the user reference is unset."""
        ...

    @abstractmethod
    async def search(self, query: SearchSchedulerQuery) -> SearchSchedulerQueryResult:
        ...

    @abstractmethod
    async def unassign_assignee(self, scheduler_assignee_id: int) -> None:
        ...

    @abstractmethod
    async def delete_by_scheduler_id_and_user_id(self, scheduler_id: int, user_id: int) -> None:
        ...

    @abstractmethod
    async def get_scheduler_list(self) -> list[SchedulerDTO]:
        ...
