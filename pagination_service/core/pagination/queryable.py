"""Capability contract the paginator requires from a data-access layer.

A Queryable wraps one query over an already-scoped dataset (tenant
isolation and business filters applied by the caller). The paginator only
adds ordering, one range predicate, and positional bounds on top.

Builder methods mutate the queryable in place and return it, so calls can be
chained. Each pagination call must own its queryable; use ``clone()`` for a
second, independent query over the same dataset.

Counting is an explicit capability. Sources that cannot count set
``supports_count = False``; sources that can count only sometimes raise
``CountUnavailableError`` from ``count()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, Self, runtime_checkable

if TYPE_CHECKING:
    from pagination_service.core.pagination.context import SortDirection

ComparisonOperator = Literal[">", "<", ">=", "<="]


@dataclass(slots=True, frozen=True)
class RangePredicate:
    """Conjunctive range condition ``field <operator> value``.

    Attributes:
        field: Field name on the row
        operator: One of ``>``, ``<``, ``>=``, ``<=``
        value: Boundary value as decoded from a cursor (JSON scalar)
    """

    field: str
    operator: ComparisonOperator
    value: Any

    @property
    def param_name(self) -> str:
        """Bind parameter name used by adapters that build textual queries."""
        return f"cursor_{self.field}"

    @property
    def expression(self) -> str:
        return f"{self.field} {self.operator} :{self.param_name}"

    def matches(self, candidate: Any) -> bool:
        """Evaluate the predicate against a single value.

        ``None`` ranks below every other value on either side, so a walk
        over a nullable field crosses from the null rows into the rest.
        """
        left, right = null_first_key(candidate), null_first_key(self.value)
        match self.operator:
            case ">":
                return left > right
            case "<":
                return left < right
            case ">=":
                return left >= right
            case "<=":
                return left <= right
        raise ValueError(f"Unsupported operator: {self.operator!r}")


def null_first_key(value: Any) -> tuple[bool, Any]:
    """Sort key placing ``None`` before any other value."""
    return (value is not None, value if value is not None else 0)


@runtime_checkable
class Queryable[T](Protocol):
    """Query builder consumed by ``Paginator`` and ``OffsetFallbackAdapter``."""

    supports_count: bool

    def where(self, predicate: RangePredicate) -> Self: ...

    def order_by(self, field: str, direction: SortDirection) -> Self: ...

    def add_order_by(self, field: str, direction: SortDirection) -> Self: ...

    def limit(self, n: int) -> Self: ...

    def offset(self, n: int) -> Self: ...

    def skip(self, n: int) -> Self: ...

    def take(self, n: int) -> Self: ...

    def clone(self) -> Self: ...

    def value_of(self, row: T, field: str) -> Any: ...

    async def execute(self) -> list[T]: ...

    async def count(self) -> int: ...

    async def execute_and_count(self) -> tuple[list[T], int]: ...


__all__ = [
    "ComparisonOperator",
    "Queryable",
    "RangePredicate",
    "null_first_key",
]
