"""Keyed cache of appointment pages.

Each page number is a cache key holding at most one :class:`PageResult`.
Fresh entries are served without touching the backend; stale or missing
entries are fetched. Concurrent reads of a key that is already being fetched
share that single request.

Every request is stamped with a generation number taken from one
monotonically increasing counter. Only the response carrying the latest
generation for its key is applied, so a slow response can never overwrite the
result of a request issued after it. Backend failures are caught here and
recorded on the entry; data already held for the key stays in place.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Set, Tuple, Union

from client_appointments.schemas.appointment import PageResult
from client_appointments.services.exceptions import ServiceError

logger = logging.getLogger(__name__)

ALL = "all"

PageFetcher = Callable[[int], Awaitable[PageResult]]


class QueryStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PageQuery:
    """Read-only view of one cache key at a point in time."""

    page: int
    status: QueryStatus
    data: Optional[PageResult] = None
    error: Optional[ServiceError] = None
    is_fetching: bool = False
    is_stale: bool = False
    is_previous_data: bool = False

    @property
    def is_loading(self) -> bool:
        return self.is_fetching and self.data is None


@dataclass
class _CacheEntry:
    result: Optional[PageResult] = None
    stale: bool = False
    error: Optional[ServiceError] = None


class AppointmentsQueryCache:
    def __init__(self, fetcher: PageFetcher) -> None:
        self._fetcher = fetcher
        self._entries: Dict[int, _CacheEntry] = {}
        self._in_flight: Dict[int, Tuple[int, asyncio.Task]] = {}
        self._latest: Dict[int, int] = {}
        self._generations = itertools.count(1)
        self._stale_on_arrival: Set[int] = set()
        self._last_displayed: Optional[PageResult] = None
        self.current_page = 1

    async def get_page(self, page: int) -> PageQuery:
        self.current_page = page
        entry = self._entries.get(page)
        if entry is None or entry.result is None or entry.stale:
            await self._fetch(page, force=False)
        else:
            # A fresh hit supersedes the failure of an earlier forced refetch.
            entry.error = None
            logger.debug("Serving appointments page %s from cache", page)
        return self._remember(self.peek(page))

    async def refetch(self, page: int | None = None) -> PageQuery:
        """Fetch ``page`` (default: the current page) regardless of freshness."""

        page = self.current_page if page is None else page
        await self._fetch(page, force=True)
        return self._remember(self.peek(page))

    def invalidate(self, page: Union[int, str] = ALL) -> None:
        if page == ALL:
            keys = set(self._entries) | set(self._in_flight)
        else:
            keys = {page}
        for key in keys:
            entry = self._entries.get(key)
            if entry is not None:
                entry.stale = True
            if key in self._in_flight:
                self._stale_on_arrival.add(key)
        logger.info("Invalidated appointments cache (%s)", page)

    def peek(self, page: int | None = None) -> PageQuery:
        page = self.current_page if page is None else page
        entry = self._entries.get(page)
        is_fetching = page in self._in_flight
        data = entry.result if entry else None
        error = entry.error if entry else None

        is_previous_data = False
        if (
            data is None
            and page == self.current_page
            and self._last_displayed is not None
            and self._last_displayed.page != page
        ):
            data = self._last_displayed
            is_previous_data = True

        if is_fetching:
            status = QueryStatus.PENDING
        elif error is not None:
            status = QueryStatus.FAILED
        elif entry is not None and entry.result is not None:
            status = QueryStatus.SUCCEEDED
        else:
            status = QueryStatus.IDLE

        return PageQuery(
            page=page,
            status=status,
            data=data,
            error=error,
            is_fetching=is_fetching,
            is_stale=bool(entry and entry.stale),
            is_previous_data=is_previous_data,
        )

    def _remember(self, query: PageQuery) -> PageQuery:
        if query.page == self.current_page and query.data is not None and not query.is_previous_data:
            self._last_displayed = query.data
        return query

    async def _fetch(self, page: int, *, force: bool) -> None:
        in_flight = self._in_flight.get(page)
        if in_flight is not None and not force:
            logger.debug("Joining in-flight request for appointments page %s", page)
            task = in_flight[1]
        else:
            task = self._start(page)
        await asyncio.shield(task)

    def _start(self, page: int) -> asyncio.Task:
        generation = next(self._generations)
        self._latest[page] = generation
        self._stale_on_arrival.discard(page)
        task = asyncio.ensure_future(self._run(page, generation))
        self._in_flight[page] = (generation, task)
        return task

    async def _run(self, page: int, generation: int) -> None:
        try:
            result = await self._fetcher(page)
        except ServiceError as exc:
            if self._latest.get(page) != generation:
                logger.debug("Ignoring failure of superseded request %s for page %s", generation, page)
                return
            entry = self._entries.setdefault(page, _CacheEntry())
            entry.error = exc
            logger.warning("Failed to fetch appointments page %s: %s", page, exc)
        else:
            if self._latest.get(page) != generation:
                logger.debug("Discarding superseded response %s for page %s", generation, page)
                return
            stale = page in self._stale_on_arrival
            self._stale_on_arrival.discard(page)
            self._entries[page] = _CacheEntry(result=result, stale=stale)
        finally:
            current = self._in_flight.get(page)
            if current is not None and current[0] == generation:
                del self._in_flight[page]
