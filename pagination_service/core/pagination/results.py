"""Result containers produced by the pagination engine.

``Page`` is the one canonical shape for keyset pagination. Wire formats that
need something else are built from it in ``schemas.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class Page[T]:
    """One page of ordered rows.

    Attributes:
        items: Rows for this page (at most the requested limit)
        has_next_page: Whether more rows follow this page
        has_previous_page: Whether the page was reached through a valid cursor
        next_cursor: Cursor of the last item, set only when a next page exists
        previous_cursor: Cursor of the first item, set only when a previous page exists
        total_count: Total rows in the scoped set, when known

    Example:
        page = await paginator.paginate(source, ctx)
        for item in page.items:
            ...
        if page.has_next_page:
            page = await paginator.paginate(source_again, ctx.next(page.next_cursor))
    """

    items: list[T] = field(default_factory=list)
    has_next_page: bool = False
    has_previous_page: bool = False
    next_cursor: str | None = None
    previous_cursor: str | None = None
    total_count: int | None = None

    def __len__(self) -> int:
        return len(self.items)


@dataclass(slots=True, frozen=True)
class PageWithTotals[T]:
    """Offset pagination result with page arithmetic.

    Attributes:
        items: Rows for the requested page
        total: Total rows across all pages
        page: Current page number (1-indexed, after clamping)
        limit: Page size (after clamping)
        total_pages: ``ceil(total / limit)``
    """

    items: list[T]
    total: int
    page: int
    limit: int
    total_pages: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def has_next(self) -> bool:
        """Whether there are pages after the current one."""
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Whether there are pages before the current one."""
        return self.page > 1


__all__ = ["Page", "PageWithTotals"]
