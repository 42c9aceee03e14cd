"""In-memory Queryable over a sequence of rows.

Useful for data that is already loaded (configuration lists, results from a
remote API, fixtures in tests). Rows may be objects or mappings.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Self

from pagination_service.core.exceptions import CountUnavailableError
from pagination_service.core.pagination.context import SortDirection
from pagination_service.core.pagination.cursor import coerce_boundary, read_field
from pagination_service.core.pagination.queryable import RangePredicate, null_first_key


class SequenceQueryable[T]:
    """Evaluate the Queryable contract against a Python list.

    Ordering is stable and applied key by key; ``None`` sorts before any
    value in ascending order. Cursor values are converted to the type of the
    row value they are compared with (datetimes, dates, UUIDs, decimals).

    Example:
        rows = [{"id": 1, "created_at": ...}, ...]
        page = await Paginator().paginate(SequenceQueryable(rows), ctx)

    Args:
        rows: Rows to paginate, already scoped by the caller
        supports_count: Set False to emulate a source that cannot count
    """

    def __init__(self, rows: Iterable[T], *, supports_count: bool = True) -> None:
        self._rows: list[T] = list(rows)
        self.supports_count = supports_count
        self._predicates: list[RangePredicate] = []
        self._ordering: list[tuple[str, SortDirection]] = []
        self._offset = 0
        self._limit: int | None = None

    @property
    def predicates(self) -> tuple[RangePredicate, ...]:
        return tuple(self._predicates)

    @property
    def ordering(self) -> tuple[tuple[str, SortDirection], ...]:
        return tuple(self._ordering)

    @property
    def window(self) -> tuple[int, int | None]:
        """Applied ``(offset, limit)``."""
        return self._offset, self._limit

    def where(self, predicate: RangePredicate) -> Self:
        self._predicates.append(predicate)
        return self

    def order_by(self, field: str, direction: SortDirection) -> Self:
        self._ordering = [(field, SortDirection(direction))]
        return self

    def add_order_by(self, field: str, direction: SortDirection) -> Self:
        self._ordering.append((field, SortDirection(direction)))
        return self

    def limit(self, n: int) -> Self:
        self._limit = n
        return self

    def offset(self, n: int) -> Self:
        self._offset = n
        return self

    def skip(self, n: int) -> Self:
        return self.offset(n)

    def take(self, n: int) -> Self:
        return self.limit(n)

    def clone(self) -> Self:
        copy = type(self)(self._rows, supports_count=self.supports_count)
        copy._predicates = list(self._predicates)
        copy._ordering = list(self._ordering)
        copy._offset = self._offset
        copy._limit = self._limit
        return copy

    def value_of(self, row: T, field: str) -> Any:
        return read_field(row, field)

    async def execute(self) -> list[T]:
        rows = self._sorted(self._filtered())
        end = None if self._limit is None else self._offset + self._limit
        return rows[self._offset:end]

    async def count(self) -> int:
        if not self.supports_count:
            raise CountUnavailableError(type(self).__name__, "counting disabled")
        return len(self._filtered())

    async def execute_and_count(self) -> tuple[list[T], int]:
        return await self.execute(), await self.count()

    def _filtered(self) -> list[T]:
        return [row for row in self._rows if all(self._matches(row, p) for p in self._predicates)]

    def _matches(self, row: T, predicate: RangePredicate) -> bool:
        candidate = self.value_of(row, predicate.field)
        boundary = coerce_boundary(predicate.value, candidate)
        try:
            return RangePredicate(predicate.field, predicate.operator, boundary).matches(candidate)
        except TypeError:
            # Boundary of another type (e.g. an int against datetimes) selects nothing
            return False

    def _sorted(self, rows: list[T]) -> list[T]:
        # Sort by the least significant key first; list.sort is stable
        for field, direction in reversed(self._ordering):
            rows.sort(
                key=lambda row, f=field: null_first_key(self.value_of(row, f)),
                reverse=direction is SortDirection.DESC,
            )
        return rows


__all__ = ["SequenceQueryable"]
