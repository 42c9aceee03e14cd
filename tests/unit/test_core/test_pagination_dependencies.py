"""Tests for the FastAPI pagination dependencies."""
from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pagination_service.core.dependencies import CursorPagination, PagePagination, PageParams
from pagination_service.core.pagination import (
    CursorCodec,
    CursorPage,
    OffsetFallbackAdapter,
    PaginatedResponse,
    Paginator,
    SequenceQueryable,
)

ROWS = [{"id": i, "created_at": f"2024-01-{i:02d}T00:00:00Z"} for i in range(1, 31)]


def create_test_app() -> FastAPI:
    app = FastAPI()

    @app.get("/context")
    async def read_context(pagination: CursorPagination) -> dict:
        return pagination.model_dump(mode="json")

    @app.get("/pages")
    async def read_pages(params: PagePagination) -> dict:
        return {"page": params.page, "limit": params.limit, "skip": params.skip}

    @app.get("/items", response_model=CursorPage[dict])
    async def list_items(pagination: CursorPagination):
        page = await Paginator().paginate(SequenceQueryable(ROWS), pagination)
        return CursorPage.from_page(page)

    @app.get("/items/pages", response_model=PaginatedResponse[dict])
    async def list_item_pages(params: PagePagination):
        result = await OffsetFallbackAdapter().offset_paginate(
            SequenceQueryable(ROWS), page=params.page, limit=params.limit
        )
        return PaginatedResponse.from_totals(result)

    return app


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """HTTPX client bound to a throwaway app."""
    transport = ASGITransport(app=create_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestCursorPaginationDependency:
    """Tests for get_cursor_pagination."""

    async def test_defaults_from_settings(self, client):
        response = await client.get("/context")

        assert response.status_code == 200
        body = response.json()
        assert body["limit"] == 20
        assert body["sort_field"] == "created_at"
        assert body["sort_direction"] == "DESC"
        assert body["tie_break_field"] == "id"
        assert body["cursor"] is None

    async def test_query_params(self, client):
        response = await client.get(
            "/context", params={"cursor": "abc", "limit": 5, "sort_field": "name", "sort_direction": "asc"}
        )

        body = response.json()
        assert body["cursor"] == "abc"
        assert body["limit"] == 5
        assert body["sort_field"] == "name"
        assert body["sort_direction"] == "ASC"

    @pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"sort_direction": "up"}])
    async def test_invalid_params_rejected(self, client, params):
        response = await client.get("/context", params=params)

        assert response.status_code == 422

    async def test_settings_max_limit_applied(self, client, monkeypatch):
        monkeypatch.setenv("PAGINATION_MAX_LIMIT", "10")
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "10")

        response = await client.get("/context", params={"limit": 50})

        assert response.json()["limit"] == 10

    async def test_settings_default_limit_used_when_omitted(self, client, monkeypatch):
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "7")

        response = await client.get("/context")

        assert response.json()["limit"] == 7

    async def test_paginated_route(self, client):
        first = (await client.get("/items", params={"limit": 10, "sort_direction": "ASC"})).json()

        assert [item["id"] for item in first["items"]] == list(range(1, 11))
        assert first["hasNextPage"] is True
        assert first["totalCount"] == 30
        assert CursorCodec.decode(first["nextCursor"]).value == "2024-01-10T00:00:00Z"

        second = (
            await client.get("/items", params={"limit": 10, "sort_direction": "ASC", "cursor": first["nextCursor"]})
        ).json()
        assert [item["id"] for item in second["items"]] == list(range(11, 21))
        assert second["hasPreviousPage"] is True


class TestPagePaginationDependency:
    """Tests for get_page_pagination."""

    async def test_defaults(self, client):
        response = await client.get("/pages")

        assert response.json() == {"page": 1, "limit": 20, "skip": 0}

    async def test_skip_computed(self, client):
        response = await client.get("/pages", params={"page": 3, "limit": 10})

        assert response.json() == {"page": 3, "limit": 10, "skip": 20}

    async def test_settings_default_limit_used_when_omitted(self, client, monkeypatch):
        monkeypatch.setenv("PAGINATION_DEFAULT_LIMIT", "15")

        response = await client.get("/pages", params={"page": 2})

        assert response.json() == {"page": 2, "limit": 15, "skip": 15}

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}])
    async def test_invalid_params_rejected(self, client, params):
        response = await client.get("/pages", params=params)

        assert response.status_code == 422

    async def test_paginated_route(self, client):
        body = (await client.get("/items/pages", params={"page": 2, "limit": 7})).json()

        assert [item["id"] for item in body["data"]] == list(range(8, 15))
        assert body["pagination"] == {
            "page": 2,
            "limit": 7,
            "total": 30,
            "totalPages": 5,
            "hasNext": True,
            "hasPrevious": True,
        }


def test_page_params_skip():
    assert PageParams(page=4, limit=25).skip == 75
