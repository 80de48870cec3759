"""Dynamic WHERE clause and pagination builder shared by the stores.

Predicates are added only for filters that are set, and every value travels
as a bound parameter.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, FromClause, Select, exists, func, select

from tsm.config import settings


@dataclass(frozen=True)
class Pagination:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @classmethod
    def resolve(cls, page: int, per_page: int) -> Pagination:
        """Normalize caller input.

        A page size of zero (or less) falls back to the configured default,
        and anything above the configured maximum is clamped.
        """
        if per_page <= 0:
            per_page = settings.default_per_page
        per_page = min(per_page, settings.max_per_page)
        return cls(page=max(page, 1), per_page=per_page)


class FilterBuilder:
    def __init__(self) -> None:
        self._conditions: list[ColumnElement[bool]] = []

    @property
    def conditions(self) -> list[ColumnElement[bool]]:
        return list(self._conditions)

    def equals(self, column: Any, value: Any) -> FilterBuilder:
        if value:
            self._conditions.append(column == value)
        return self

    def contains(self, column: Any, value: str | None) -> FilterBuilder:
        """Case-insensitive substring match; LIKE wildcards in value are escaped."""
        if value:
            self._conditions.append(column.icontains(value, autoescape=True))
        return self

    def between(
        self, column: Any, date_from: datetime | None, date_to: datetime | None
    ) -> FilterBuilder:
        """Inclusive range, open-ended on whichever side is None."""
        if date_from is not None:
            self._conditions.append(column >= date_from)
        if date_to is not None:
            self._conditions.append(column <= date_to)
        return self

    def any_related(
        self, id_column: Any, owner_column: Any, value_column: Any, values: list[int] | None
    ) -> FilterBuilder:
        """Semi-join: keep rows linked to at least one of ``values``.

        ``owner_column`` is the link table's foreign key to ``id_column``.
        """
        if values:
            self._conditions.append(
                exists().where(owner_column == id_column, value_column.in_(values))
            )
        return self

    def apply(self, stmt: Select, pagination: Pagination, *order_by: Any) -> Select:
        return (
            stmt.where(*self._conditions)
            .order_by(*order_by)
            .offset(pagination.offset)
            .limit(pagination.per_page)
        )

    def count(self, table: FromClause) -> Select:
        return select(func.count().label("total")).select_from(table).where(*self._conditions)
