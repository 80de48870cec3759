"""Store error taxonomy. Pure Python, no external dependencies."""


class StoreError(Exception):
    """Base class for every failure surfaced by a store."""


class NotFoundError(StoreError):
    """The query ran fine but matched no row where one was required."""


class PersistenceError(StoreError):
    """Failure raised by the relational layer (constraint, connectivity, SQL)."""


class OperationCancelledError(StoreError):
    """The statement deadline expired before the database answered."""
