"""Read-only access to tabular data sources.

Two sources share one async interface: `RestTableSource` queries a
backend-as-a-service table over its PostgREST-style HTTP API, and
`SqlTableSource` runs the same query against the local SQLModel tables.
Every failure on the read path surfaces as `RemoteFetchFailure`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from sqlalchemy.engine import Engine
from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from .. import models

_LOGGER = logging.getLogger("skilltrack.remote")


class RemoteFetchFailure(Exception):
    """A table read was rejected, timed out or returned an unusable body."""


@dataclass(frozen=True)
class TableQuery:
    """Equality filters plus an optional single-column ordering."""
    table: str
    filters: tuple[tuple[str, Any], ...] = ()
    order_by: Optional[str] = None
    ascending: bool = True


class TableSource(ABC):
    @abstractmethod
    async def select(self, query: TableQuery) -> list[dict]:
        """Return all columns of matching rows, or raise RemoteFetchFailure."""
        raise NotImplementedError


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class RestTableSource(TableSource):
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client

    def build_params(self, query: TableQuery) -> dict[str, str]:
        params = {"select": "*"}
        for column, value in query.filters:
            op = "is" if value is None else "eq"
            params[column] = f"{op}.{_format_value(value)}"
        if query.order_by:
            params["order"] = f"{query.order_by}.{'asc' if query.ascending else 'desc'}"
        return params

    async def select(self, query: TableQuery) -> list[dict]:
        url = f"{self._base_url}/rest/v1/{query.table}"
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        params = self.build_params(query)
        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as exc:
            raise RemoteFetchFailure(
                f"{query.table}: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteFetchFailure(f"{query.table}: {type(exc).__name__}: {exc}") from exc
        except ValueError as exc:
            raise RemoteFetchFailure(f"{query.table}: response is not JSON") from exc
        if not isinstance(body, list):
            raise RemoteFetchFailure(f"{query.table}: expected a list of rows")
        _LOGGER.debug("fetched %d rows from %s", len(body), query.table)
        return body


class SqlTableSource(TableSource):
    """Serve table queries from the local database."""

    TABLES = {"services": models.ServiceRow}

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _select_sync(self, query: TableQuery) -> list[dict]:
        model = self.TABLES.get(query.table)
        if model is None:
            raise RemoteFetchFailure(f"unknown table: {query.table}")
        stmt = select(model)
        for column, value in query.filters:
            stmt = stmt.where(getattr(model, column) == value)
        if query.order_by:
            col = getattr(model, query.order_by)
            stmt = stmt.order_by(col.asc() if query.ascending else col.desc())
        with Session(self._engine) as session:
            return [row.model_dump() for row in session.exec(stmt).all()]

    async def select(self, query: TableQuery) -> list[dict]:
        try:
            return await run_in_threadpool(self._select_sync, query)
        except RemoteFetchFailure:
            raise
        except Exception as exc:
            raise RemoteFetchFailure(f"{query.table}: {exc}") from exc


def build_table_source(settings, engine: Engine) -> TableSource:
    """Pick the REST source when a remote URL is configured, else the local one."""
    if settings.REMOTE_TABLE_URL:
        return RestTableSource(
            settings.REMOTE_TABLE_URL,
            settings.REMOTE_TABLE_KEY,
            timeout=settings.FETCH_TIMEOUT_SECONDS,
        )
    return SqlTableSource(engine)
