import asyncio
import json

import httpx
import pytest
from sqlmodel import SQLModel, Session, create_engine

from skilltrack import models
from skilltrack.components.service_list import services_query
from skilltrack.utils.table_source import (
    RemoteFetchFailure,
    RestTableSource,
    SqlTableSource,
    TableQuery,
    build_table_source,
)


def _rest_source(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RestTableSource("https://example.supabase.co/", "anon-key", client=client)


def test_rest_source_sends_postgrest_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["headers"] = request.headers
        return httpx.Response(200, json=[{"id": "1", "slug": "ai", "is_active": True, "sort_order": 1}])

    rows = asyncio.run(_rest_source(handler).select(services_query()))
    assert rows[0]["slug"] == "ai"
    assert seen["url"].path == "/rest/v1/services"
    assert seen["url"].params["select"] == "*"
    assert seen["url"].params["is_active"] == "eq.true"
    assert seen["url"].params["order"] == "sort_order.asc"
    assert seen["headers"]["apikey"] == "anon-key"
    assert seen["headers"]["authorization"] == "Bearer anon-key"


def test_rest_source_descending_and_null_filters():
    source = RestTableSource("https://x", "k")
    params = source.build_params(TableQuery("services", (("image_url", None),), "title", ascending=False))
    assert params == {"select": "*", "image_url": "is.null", "order": "title.desc"}


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "down"}),
        httpx.Response(401, json={"message": "bad key"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, content=json.dumps({"rows": []}).encode()),
    ],
)
def test_rest_source_failures_raise_remote_fetch_failure(response):
    source = _rest_source(lambda request: response)
    with pytest.raises(RemoteFetchFailure):
        asyncio.run(source.select(services_query()))


def test_rest_source_transport_error_raises_remote_fetch_failure():
    def handler(request):
        raise httpx.ConnectError("no route", request=request)

    with pytest.raises(RemoteFetchFailure):
        asyncio.run(_rest_source(handler).select(services_query()))


def test_sql_source_filters_and_orders(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'src.db'}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        session.add(models.ServiceRow(slug="second", title="Second", sort_order=2))
        session.add(models.ServiceRow(slug="first", title="First", sort_order=1))
        session.add(models.ServiceRow(slug="hidden", title="Hidden", sort_order=0, is_active=False))
        session.commit()

    rows = asyncio.run(SqlTableSource(engine).select(services_query()))
    assert [r["slug"] for r in rows] == ["first", "second"]


def test_sql_source_unknown_table_or_column(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'src.db'}")
    source = SqlTableSource(engine)
    with pytest.raises(RemoteFetchFailure):
        asyncio.run(source.select(TableQuery("courses")))
    with pytest.raises(RemoteFetchFailure):
        asyncio.run(source.select(TableQuery("services", (("no_such_column", 1),))))


def test_build_table_source_picks_rest_when_configured():
    class Cfg:
        REMOTE_TABLE_URL = "https://example.supabase.co"
        REMOTE_TABLE_KEY = "k"
        FETCH_TIMEOUT_SECONDS = 3.0

    assert isinstance(build_table_source(Cfg, engine=None), RestTableSource)
    Cfg.REMOTE_TABLE_URL = ""
    assert isinstance(build_table_source(Cfg, engine=None), SqlTableSource)
