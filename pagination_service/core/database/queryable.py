"""SQLAlchemy implementation of the Queryable contract.

Wraps a 2.0-style ``Select`` and an ``AsyncSession``. Field names are
resolved against the selected ORM entity, so the paginator never sees
SQLAlchemy constructs.

Usage:
    from sqlalchemy import select

    stmt = select(Task).where(Task.tenant_id == tenant_id)
    page = await Paginator().paginate(SelectQueryable(session, stmt), ctx)
"""

from __future__ import annotations

import operator
from datetime import datetime
from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import false, func, or_, select, true
from sqlalchemy.orm import InstrumentedAttribute

from pagination_service.core.exceptions import UnknownSortFieldError
from pagination_service.core.pagination.context import SortDirection
from pagination_service.core.pagination.cursor import align_timezone, coerce_boundary, read_field

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from pagination_service.core.pagination.queryable import RangePredicate

_OPERATORS = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
}


class SelectQueryable[T]:
    """Queryable over a SQLAlchemy select statement.

    The wrapped statement is rebuilt on every builder call (SQLAlchemy
    statements are immutable); the queryable itself is the mutable handle
    the paginator works with.

    Nullable columns order NULL first ascending and last descending, and
    range predicates treat NULL as smaller than every value, the same
    ordering the in-memory adapter uses.

    Args:
        session: Async session used to execute the statement
        statement: Select over a single ORM entity, with caller scoping applied
        model: Mapped class; inferred from the statement when omitted
    """

    supports_count = True

    def __init__(
        self,
        session: AsyncSession,
        statement: Select[Any],
        model: type[T] | None = None,
    ) -> None:
        self.session = session
        self._statement = statement
        self.model: type[T] = model or statement.column_descriptions[0]["entity"]

    @property
    def statement(self) -> Select[Any]:
        """Statement with everything applied so far."""
        return self._statement

    def where(self, predicate: RangePredicate) -> Self:
        column = self._column(predicate.field)
        value = self._convert_value(column, predicate.value)
        self._statement = self._statement.where(self._range_clause(column, predicate.operator, value))
        return self

    def order_by(self, field: str, direction: SortDirection) -> Self:
        self._statement = self._statement.order_by(None)
        return self.add_order_by(field, direction)

    def add_order_by(self, field: str, direction: SortDirection) -> Self:
        column = self._column(field)
        if SortDirection(direction) is SortDirection.DESC:
            clause = column.desc().nulls_last() if _nullable(column) else column.desc()
        else:
            clause = column.asc().nulls_first() if _nullable(column) else column.asc()
        self._statement = self._statement.order_by(clause)
        return self

    def limit(self, n: int) -> Self:
        self._statement = self._statement.limit(n)
        return self

    def offset(self, n: int) -> Self:
        self._statement = self._statement.offset(n)
        return self

    def skip(self, n: int) -> Self:
        return self.offset(n)

    def take(self, n: int) -> Self:
        return self.limit(n)

    def clone(self) -> Self:
        return type(self)(self.session, self._statement, self.model)

    def value_of(self, row: T, field: str) -> Any:
        return read_field(row, field)

    async def execute(self) -> list[T]:
        result = await self.session.execute(self._statement)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count rows matching the statement, ignoring order, limit and offset."""
        base = self._statement.order_by(None).limit(None).offset(None)
        count_stmt = select(func.count()).select_from(base.subquery())
        return (await self.session.execute(count_stmt)).scalar_one()

    async def execute_and_count(self) -> tuple[list[T], int]:
        items = await self.execute()
        return items, await self.count()

    def _column(self, field: str) -> InstrumentedAttribute[Any]:
        attr = getattr(self.model, field, None)
        if not isinstance(attr, InstrumentedAttribute):
            raise UnknownSortFieldError(getattr(self.model, "__name__", str(self.model)), field)
        return attr

    @staticmethod
    def _range_clause(column: InstrumentedAttribute[Any], op: str, value: Any) -> Any:
        """Build ``column <op> value`` with NULL ranked below every value."""
        if value is None:
            return {
                ">": column.is_not(None),
                ">=": true(),
                "<": false(),
                "<=": column.is_(None),
            }[op]
        clause = _OPERATORS[op](column, value)
        if op in ("<", "<=") and _nullable(column):
            return or_(clause, column.is_(None))
        return clause

    @staticmethod
    def _convert_value(column: InstrumentedAttribute[Any], value: Any) -> Any:
        """Convert a cursor value to the column's Python type.

        Handles datetime strings, UUIDs, etc. that were serialized
        when the cursor was created.
        """
        if value is None:
            return None

        column_type = getattr(column.type, "impl", column.type)
        try:
            python_type = column_type.python_type
        except NotImplementedError:
            return value

        converted = coerce_boundary(value, python_type)
        if isinstance(converted, datetime):
            converted = align_timezone(converted, aware=bool(getattr(column_type, "timezone", False)))
        return converted


def _nullable(column: InstrumentedAttribute[Any]) -> bool:
    return bool(getattr(column.expression, "nullable", False))


__all__ = ["SelectQueryable"]
