"""
Activity log browser: the filter/pagination state behind the admin "Activity Logs" screen.

State changes go through small reducer functions so the dependent-filter rule lives in
one place: picking a module always clears the sub-module and returns to the first page.
Every change re-fetches facets and entries immediately and concurrently. Only the most
recently issued fetch may update what is displayed; older in-flight fetches are cancelled
(unless `cancel_superseded=False`) and their results dropped. Any `ActivityLogError`,
including an expired session, degrades to empty results plus a notification.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Protocol

from restro_admin.client.notifier import LoggingNotifier, Notifier
from restro_admin.core.config import settings
from restro_admin.schemas.activity_log import ActivityFacetsOut, ActivityLogOut, ActivityLogPageOut
from restro_admin.services.activity_log import ActivityLogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserState:
    selected_module: str = ""
    selected_sub_module: str = ""
    page_index: int = 0
    page_size: int = 10


def set_module(state: BrowserState, module: str | None) -> BrowserState:
    return replace(state, selected_module=module or "", selected_sub_module="", page_index=0)


def set_sub_module(state: BrowserState, sub_module: str | None) -> BrowserState:
    return replace(state, selected_sub_module=sub_module or "", page_index=0)


def set_page_index(state: BrowserState, page_index: int) -> BrowserState:
    return replace(state, page_index=page_index)


def set_page_size(state: BrowserState, page_size: int) -> BrowserState:
    return replace(state, page_size=page_size, page_index=0)


class ActivityLogSource(Protocol):
    async def list_facets(self) -> ActivityFacetsOut: ...

    async def list_entries(
        self, *, module: str, sub_module: str, page_index: int, page_size: int
    ) -> ActivityLogPageOut: ...


def _empty_facets() -> ActivityFacetsOut:
    return ActivityFacetsOut(modules=[], sub_modules=[])


class ActivityLogBrowser:
    def __init__(
        self,
        source: ActivityLogSource,
        *,
        notifier: Notifier | None = None,
        page_size: int | None = None,
        cancel_superseded: bool = True,
    ) -> None:
        self._source = source
        self._notifier = notifier or LoggingNotifier()
        self._cancel_superseded = cancel_superseded
        self.state = BrowserState(page_size=page_size or settings.activity_log_default_page_size)
        self.facets = _empty_facets()
        self.entries: list[ActivityLogOut] = []
        self.total_count = 0
        self.loading = False
        self._seq = 0
        self._inflight: asyncio.Future | None = None

    async def set_module(self, module: str | None) -> bool:
        self.state = set_module(self.state, module)
        return await self.reload()

    async def set_sub_module(self, sub_module: str | None) -> bool:
        self.state = set_sub_module(self.state, sub_module)
        return await self.reload()

    async def set_page_index(self, page_index: int) -> bool:
        self.state = set_page_index(self.state, page_index)
        return await self.reload()

    async def set_page_size(self, page_size: int) -> bool:
        self.state = set_page_size(self.state, page_size)
        return await self.reload()

    async def reload(self) -> bool:
        """
        Fetch facets and the current page for `self.state`.

        Returns False when a newer reload superseded this one; in that case nothing
        displayed is touched.
        """
        self._seq += 1
        seq = self._seq
        if self._cancel_superseded and self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()

        task = asyncio.ensure_future(self._load(self.state))
        self._inflight = task
        self.loading = True
        try:
            facets, page = await task
        except asyncio.CancelledError:
            if seq != self._seq:
                return False
            raise
        finally:
            if seq == self._seq:
                self.loading = False

        if seq != self._seq:
            logger.debug("Dropping stale activity log response seq=%s (latest=%s)", seq, self._seq)
            return False
        self.facets = facets
        self.entries = list(page.entries)
        self.total_count = page.total_count
        return True

    async def _load(self, state: BrowserState) -> tuple[ActivityFacetsOut, ActivityLogPageOut]:
        facets, page = await asyncio.gather(self._load_facets(), self._load_entries(state))
        return facets, page

    async def _load_facets(self) -> ActivityFacetsOut:
        try:
            return await self._source.list_facets()
        except ActivityLogError as e:
            logger.warning("Error fetching activity log filters: %s", e)
            self._notifier.notify("error", "Error fetching filters")
            return _empty_facets()

    async def _load_entries(self, state: BrowserState) -> ActivityLogPageOut:
        try:
            return await self._source.list_entries(
                module=state.selected_module,
                sub_module=state.selected_sub_module,
                page_index=state.page_index,
                page_size=state.page_size,
            )
        except ActivityLogError as e:
            logger.warning("Error fetching activity logs (state=%s): %s", state, e)
            self._notifier.notify("error", "Error fetching logs")
            return ActivityLogPageOut(
                entries=[],
                total_count=0,
                page=state.page_index + 1,
                limit=state.page_size,
                total_pages=0,
            )
