import asyncio
import logging

import pytest

from skilltrack.components.records import ServiceRecord
from skilltrack.components.service_list import LoadState, ServiceListView, active_in_order
from skilltrack.utils.table_source import RemoteFetchFailure


def _load(view):
    async def run():
        return await view.load()
    return asyncio.run(run())


def test_scenario_active_rows_sorted_by_sort_order(static_source):
    rows = [
        {"id": "a", "sort_order": 2, "active": True},
        {"id": "b", "sort_order": 1, "active": True},
        {"id": "c", "sort_order": 1, "active": False},
    ]
    view = _load(ServiceListView(static_source(rows)))
    assert view.state is LoadState.POPULATED
    assert [c.identifier for c in view.cards] == ["b", "a"]
    assert view.skeleton_count == 0


def test_inactive_rows_never_rendered_for_any_ordering(static_source):
    rows = [
        {"id": "x", "slug": "x", "is_active": False, "sort_order": 0},
        {"id": "y", "slug": "y", "is_active": True, "sort_order": 3},
        {"id": "z", "slug": "z", "is_active": "false", "sort_order": 1},
    ]
    for ordering in (rows, list(reversed(rows)), rows[1:] + rows[:1]):
        view = _load(ServiceListView(static_source(ordering)))
        assert [c.identifier for c in view.cards] == ["y"]


def test_ties_keep_source_order_and_are_deterministic():
    rows = [
        {"id": "p", "is_active": True, "sort_order": 1},
        {"id": "q", "is_active": True, "sort_order": 1},
        {"id": "r", "is_active": True, "sort_order": 0},
    ]
    first = [r.id for r in active_in_order(rows)]
    assert first == ["r", "p", "q"]
    assert [r.id for r in active_in_order(rows)] == first


def test_query_filters_active_and_orders_ascending(static_source):
    source = static_source([])
    _load(ServiceListView(source, table="services"))
    assert len(source.calls) == 1
    query = source.calls[0]
    assert query.table == "services"
    assert query.filters == (("is_active", True),)
    assert (query.order_by, query.ascending) == ("sort_order", True)


def test_empty_result_renders_no_cards_and_no_skeletons(static_source):
    view = _load(ServiceListView(static_source([]), skeleton_count=6))
    assert view.state is LoadState.POPULATED
    assert view.cards == []
    assert view.skeleton_count == 0


def test_loading_state_shows_configured_skeletons(static_source):
    view = ServiceListView(static_source([]), skeleton_count=6)
    assert view.state is LoadState.LOADING
    assert view.skeleton_count == 6
    assert view.cards == []


def test_failed_fetch_degrades_to_empty_list(failing_source, caplog):
    source = failing_source()
    with caplog.at_level(logging.WARNING, logger="skilltrack.views"):
        view = _load(ServiceListView(source))
    assert view.state is LoadState.EMPTY_ON_ERROR
    assert view.failed
    assert view.cards == []
    assert view.skeleton_count == 0
    assert isinstance(view.error, RemoteFetchFailure)
    assert "Error fetching services" in caplog.text


def test_unexpected_source_error_is_also_swallowed(failing_source):
    view = _load(ServiceListView(failing_source(RuntimeError("boom"))))
    assert view.state is LoadState.EMPTY_ON_ERROR
    assert view.cards == []


def test_malformed_rows_degrade_to_empty_list(static_source):
    view = _load(ServiceListView(static_source([{"title": "no id", "is_active": True}])))
    assert view.state is LoadState.EMPTY_ON_ERROR


@pytest.mark.parametrize("sort_order", [1.7, None, "n/a", True])
def test_unusable_sort_order_on_active_row_degrades_to_empty_list(static_source, sort_order):
    rows = [
        {"id": "ok", "is_active": True, "sort_order": 1},
        {"id": "bad", "is_active": True, "sort_order": sort_order},
    ]
    view = _load(ServiceListView(static_source(rows)))
    assert view.state is LoadState.EMPTY_ON_ERROR
    assert view.cards == []


def test_integral_sort_orders_are_accepted():
    assert ServiceRecord.from_row({"id": "a", "sort_order": 2.0}).sort_order == 2
    assert ServiceRecord.from_row({"id": "a", "sort_order": " 3 "}).sort_order == 3
    with pytest.raises(ValueError):
        ServiceRecord.from_row({"id": "a", "sort_order": 1.7})


def test_junk_in_inactive_rows_does_not_hide_active_ones(static_source):
    rows = [
        {"id": "good", "is_active": True, "sort_order": 1},
        {"id": "junk", "is_active": False, "sort_order": "n/a", "icon": ["Brain"]},
        {"title": "inactive without id", "active": False},
    ]
    assert [r.id for r in active_in_order(rows)] == ["good"]
    view = _load(ServiceListView(static_source(rows)))
    assert view.state is LoadState.POPULATED
    assert [c.identifier for c in view.cards] == ["good"]


def test_timeout_becomes_fetch_failure():
    class SlowSource:
        async def select(self, query):
            await asyncio.sleep(5)
            return []

    view = _load(ServiceListView(SlowSource(), timeout=0.01))
    assert view.state is LoadState.EMPTY_ON_ERROR
    assert "timed out" in str(view.error)


def test_query_runs_once_per_mount(static_source):
    source = static_source([{"id": "a", "is_active": True, "sort_order": 1}])
    view = ServiceListView(source)

    async def run():
        first = view.mount()
        assert view.mount() is first
        await view.load()
        await view.load()

    asyncio.run(run())
    assert len(source.calls) == 1


def test_unmount_mid_flight_leaves_view_untouched():
    class GatedSource:
        def __init__(self):
            self.started = asyncio.Event()
            self.release = asyncio.Event()

        async def select(self, query):
            self.started.set()
            await self.release.wait()
            return [{"id": "late", "is_active": True, "sort_order": 1}]

    async def run():
        source = GatedSource()
        view = ServiceListView(source)
        task = view.mount()
        await source.started.wait()
        view.unmount()
        source.release.set()
        await view.load()
        return view, task

    view, task = asyncio.run(run())
    assert task.cancelled()
    assert not view.mounted
    assert view.state is LoadState.LOADING
    assert view.records == ()


def test_result_arriving_after_unmount_is_dropped():
    holder = {}

    class UnmountingSource:
        async def select(self, query):
            # the view goes away while the response is being delivered
            holder["view"].unmount()
            return [{"id": "late", "is_active": True, "sort_order": 1}]

    view = ServiceListView(UnmountingSource())
    holder["view"] = view
    _load(view)
    assert view.state is LoadState.LOADING
    assert view.records == ()


def test_card_activation_from_list_view(static_source):
    calls = []
    rows = [{"id": "svc-42", "slug": "cloud", "is_active": True, "sort_order": 1, "icon": "Nope"}]
    view = _load(ServiceListView(static_source(rows), on_start=calls.append))
    (card,) = view.cards
    assert card.icon.name == "Code"
    card.activate()
    assert calls == ["svc-42"]
