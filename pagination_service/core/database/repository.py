"""Repository helpers for paginating SQLAlchemy models.

Session is always explicit - no hidden state. Build the scoped statement
(tenant filters, business filters) yourself; the repository only paginates.

Example:
    from pagination_service.core.database import BaseRepository

    class TaskRepository(BaseRepository[Task]):
        async def list_for_project(self, session, project_id, ctx):
            stmt = select(Task).where(Task.project_id == project_id)
            return await self.paginate_cursor(session, stmt, ctx)

    task_repo = TaskRepository(Task)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pagination_service.core.database.queryable import SelectQueryable
from pagination_service.core.pagination.offset import OffsetFallbackAdapter
from pagination_service.core.pagination.paginator import Paginator
from pagination_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from pagination_service.core.pagination.context import QueryContext
    from pagination_service.core.pagination.results import Page, PageWithTotals


class BaseRepository[T]:
    """Minimal generic repository exposing cursor and offset pagination.

    Provides:
        - paginate_cursor(session, statement, ctx) -> Page[T]
        - paginate_cursor_with_count(session, statement, ctx) -> Page[T]
        - offset_paginate(session, statement, page, limit) -> PageWithTotals[T]

    Example:
        repo = BaseRepository(Task)
        ctx = repo.paginator.context(sort_field="created_at", cursor=token)
        page = await repo.paginate_cursor(session, select(Task), ctx)
    """

    __slots__ = ("model", "paginator", "offset_adapter", "_lazy")

    def __init__(
        self,
        model: type[T],
        *,
        paginator: Paginator | None = None,
        offset_adapter: OffsetFallbackAdapter | None = None,
    ) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Task, Project)
            paginator: Keyset paginator; a default one is created when omitted
            offset_adapter: Offset adapter; a default one is created when omitted
        """
        self.model = model
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"{__name__}.{model.__name__}")
        self.paginator = paginator or Paginator(logger=self._lazy)
        self.offset_adapter = offset_adapter or OffsetFallbackAdapter(
            settings=self.paginator.settings, logger=self._lazy
        )

    def queryable(self, session: AsyncSession, statement: Select[Any]) -> SelectQueryable[T]:
        """Wrap a statement for the pagination engine."""
        return SelectQueryable(session, statement, self.model)

    async def paginate_cursor(
        self,
        session: AsyncSession,
        statement: Select[Any],
        ctx: QueryContext | None = None,
        **options: Any,
    ) -> Page[T]:
        """Execute a cursor-paginated query.

        Args:
            session: Database session
            statement: SQLAlchemy select statement (without pagination)
            ctx: Pagination options; built from ``options`` and settings when omitted
            **options: QueryContext fields used when ``ctx`` is omitted

        Returns:
            Page[T] with items, flags, and cursors
        """
        ctx = ctx or self.paginator.context(**options)
        page = await self.paginator.paginate(self.queryable(session, statement), ctx)
        self._lazy.debug(
            lambda: f"db.paginate_cursor: {self.model.__name__}(limit={ctx.limit}) -> "
            f"{len(page.items)} items, has_next={page.has_next_page}"
        )
        return page

    async def paginate_cursor_with_count(
        self,
        session: AsyncSession,
        statement: Select[Any],
        ctx: QueryContext | None = None,
        **options: Any,
    ) -> Page[T]:
        """Like ``paginate_cursor`` but always reports the scoped total."""
        ctx = ctx or self.paginator.context(**options)
        return await self.paginator.paginate_with_count(self.queryable(session, statement), ctx)

    async def offset_paginate(
        self,
        session: AsyncSession,
        statement: Select[Any],
        *,
        page: int = 1,
        limit: int | None = None,
    ) -> PageWithTotals[T]:
        """Execute page-number pagination with total count.

        The statement must carry its own ORDER BY for pages to be stable.
        """
        result = await self.offset_adapter.offset_paginate(
            self.queryable(session, statement), page=page, limit=limit
        )
        self._lazy.debug(
            lambda: f"db.offset_paginate: {self.model.__name__}(page={result.page}, limit={result.limit}) -> "
            f"{len(result.items)}/{result.total} items, page {result.page}/{result.total_pages}"
        )
        return result


__all__ = ["BaseRepository"]
