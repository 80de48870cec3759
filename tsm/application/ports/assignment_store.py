"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod

from tsm.domain.entities.assignment import Assignment, AssignmentDTO, AssignmentLog
from tsm.domain.value_objects.search import (
    SearchAssignmentQuery,
    SearchAssignmentQueryResult,
)


class AssignmentStore(ABC):
    @abstractmethod
    async def create(self, entity: Assignment) -> int:
        ...

    @abstractmethod
    async def create_assignment_log(self, entity: AssignmentLog) -> None:
        ...

    @abstractmethod
    async def get_by_id(self, assignment_id: int) -> AssignmentDTO:
        ...

    @abstractmethod
    async def get_by_member_id(self, member_id: int) -> AssignmentDTO:
        """Return the member's most recent assignment."""
        ...

    @abstractmethod
    async def search(self, query: SearchAssignmentQuery) -> SearchAssignmentQueryResult:
        ...

    @abstractmethod
    async def get_by_assignees_id(self, assignment_ids: list[int]) -> list[int]:
        """Distinct assignee ids linked to the given assignments."""
        ...

    @abstractmethod
    async def update(self, entity: Assignment) -> None:
        ...

    @abstractmethod
    async def get_assignment_log(self, assignment_id: int) -> list[AssignmentLog]:
        ...
