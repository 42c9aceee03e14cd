"""Pagination settings.

Controls the defaults applied when a caller does not specify page size,
sort field, or sort direction, plus the hard page-size ceiling.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=50, PAGINATION_TIE_BREAK_FIELD=uuid
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size when the caller does not specify one.
        max_limit: Largest page size ever returned (never above 100).
        default_sort_field: Primary sort field when none is requested.
        default_sort_direction: Primary sort direction when none is requested.
        tie_break_field: Unique field appended to every ordering.
        verify_previous_page: Confirm previous pages with a probe query.

    Example:
        settings = PaginationSettings()
        limit = min(requested_limit, settings.max_limit)
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Maximum allowed page size (hard limit)",
    )
    default_sort_field: str = Field(
        default="created_at",
        min_length=1,
        description="Primary sort field used when the caller does not pick one",
    )
    default_sort_direction: Literal["ASC", "DESC"] = Field(
        default="DESC",
        description="Primary sort direction used when the caller does not pick one",
    )
    tie_break_field: str = Field(
        default="id",
        min_length=1,
        description="Unique secondary sort field guaranteeing a total order",
    )
    verify_previous_page: bool = Field(
        default=False,
        description="Issue a probe query to confirm rows exist before a cursor",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _default_within_max(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            raise ValueError(
                f"default_limit ({self.default_limit}) exceeds max_limit ({self.max_limit})"
            )
        return self
