"""Port interface for parameterized statement execution."""

from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.sql import Executable


class RelationalAccess(ABC):
    """Executes SQLAlchemy statements and hands back rows.

    Implementations translate driver failures into the store error taxonomy:
    no rows -> NotFoundError, anything else -> PersistenceError.
    """

    @abstractmethod
    async def fetch_one(self, stmt: Executable) -> Any:
        """Return the first row. Raises NotFoundError when there is none."""
        ...

    @abstractmethod
    async def fetch_all(self, stmt: Executable) -> list[Any]:
        ...

    @abstractmethod
    async def execute(self, stmt: Executable) -> int:
        """Run a write statement and return the affected row count."""
        ...
