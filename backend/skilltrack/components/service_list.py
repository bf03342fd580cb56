"""Services grid backed by one read of the remote `services` table.

The view starts in `LOADING` and shows skeleton placeholders. It issues
exactly one query per instance; a failed or timed-out read is logged and
the view degrades to an empty list, which looks the same as having no
active services. A result that arrives after `unmount()` is dropped.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Iterable, Mapping, Optional

from ..utils.table_source import RemoteFetchFailure, TableQuery, TableSource
from .cards import OnStart, ServiceCard
from .records import ServiceRecord, row_is_active

logger = logging.getLogger("skilltrack.views")

DEFAULT_SKELETON_COUNT = 6


class LoadState(enum.Enum):
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY_ON_ERROR = "empty_on_error"


def services_query(table: str = "services") -> TableQuery:
    return TableQuery(table=table, filters=(("is_active", True),), order_by="sort_order")


def active_in_order(rows: Iterable[Mapping]) -> tuple[ServiceRecord, ...]:
    """Keep active rows only, ordered by ascending `sort_order`.

    The sort is stable, so rows sharing a sort order keep the order the
    source returned them in.
    """
    records = [ServiceRecord.from_row(row) for row in rows if row_is_active(row)]
    return tuple(sorted(records, key=lambda r: r.sort_order))


class ServiceListView:
    def __init__(
        self,
        source: TableSource,
        *,
        table: str = "services",
        skeleton_count: int = DEFAULT_SKELETON_COUNT,
        timeout: Optional[float] = None,
        on_start: Optional[OnStart] = None,
    ):
        self._source = source
        self.query = services_query(table)
        self._skeleton_count = skeleton_count
        self._timeout = timeout
        self.on_start = on_start
        self.state = LoadState.LOADING
        self.records: tuple[ServiceRecord, ...] = ()
        self.error: Optional[RemoteFetchFailure] = None
        self._alive = True
        self._task: Optional[asyncio.Task] = None

    @property
    def mounted(self) -> bool:
        return self._alive

    @property
    def failed(self) -> bool:
        return self.state is LoadState.EMPTY_ON_ERROR

    @property
    def skeleton_count(self) -> int:
        return self._skeleton_count if self.state is LoadState.LOADING else 0

    @property
    def cards(self) -> list[ServiceCard]:
        if self.state is not LoadState.POPULATED:
            return []
        return [ServiceCard(record, self.on_start) for record in self.records]

    def find(self, slug: str) -> Optional[ServiceRecord]:
        for record in self.records:
            if record.slug == slug:
                return record
        return None

    def mount(self) -> asyncio.Task:
        """Start the read on the running loop; later calls return the same task."""
        if self._task is None:
            self._task = asyncio.ensure_future(self._fetch())
        return self._task

    def unmount(self) -> None:
        """Mark the view dead and cancel an outstanding read."""
        self._alive = False
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def load(self) -> "ServiceListView":
        """Mount if needed and wait for the read to settle."""
        task = self.mount()
        try:
            await task
        except asyncio.CancelledError:
            # cancelled by unmount(); anything else propagates
            if self._alive:
                raise
        return self

    async def _fetch(self) -> None:
        records: tuple[ServiceRecord, ...] = ()
        failure: Optional[RemoteFetchFailure] = None
        try:
            rows = await asyncio.wait_for(self._source.select(self.query), timeout=self._timeout)
            records = active_in_order(rows)
        except asyncio.TimeoutError:
            failure = RemoteFetchFailure(f"{self.query.table}: timed out after {self._timeout}s")
        except RemoteFetchFailure as exc:
            failure = exc
        except Exception as exc:
            failure = RemoteFetchFailure(f"{self.query.table}: unusable rows: {exc}")
            failure.__cause__ = exc

        if not self._alive:
            logger.debug("dropping %s result for unmounted view", self.query.table)
            return
        if failure is not None:
            logger.warning("Error fetching services: %s", failure)
            self.error = failure
            self.records = ()
            self.state = LoadState.EMPTY_ON_ERROR
            return
        self.records = records
        self.state = LoadState.POPULATED
