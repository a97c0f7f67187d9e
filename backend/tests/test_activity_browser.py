import asyncio

from restro_admin.client.browser import (
    ActivityLogBrowser,
    BrowserState,
    set_module,
    set_page_index,
    set_page_size,
    set_sub_module,
)
from restro_admin.client.api import NotAuthenticated
from restro_admin.client.notifier import RecordingNotifier
from restro_admin.schemas.activity_log import ActivityFacetsOut, ActivityLogPageOut
from restro_admin.services.activity_log import StorageUnavailable


class FakeSource:
    def __init__(self, total=3, fail_entries=False, fail_facets=False):
        self.calls = []
        self.total = total
        self.fail_entries = fail_entries
        self.fail_facets = fail_facets
        self.gates = {}
        self.facets_gate = None
        self.session_expired = False

    async def list_facets(self):
        if self.facets_gate is not None:
            await self.facets_gate.wait()
        if self.session_expired:
            raise NotAuthenticated("Invalid token.")
        if self.fail_facets:
            raise StorageUnavailable("facets down")
        return ActivityFacetsOut(modules=["Orders", "Payments"], sub_modules=["Withdrawals"])

    async def list_entries(self, *, module, sub_module, page_index, page_size):
        self.calls.append(dict(module=module, sub_module=sub_module, page_index=page_index, page_size=page_size))
        gate = self.gates.get(module)
        if gate is not None:
            await gate.wait()
        if self.session_expired:
            raise NotAuthenticated("Invalid token.")
        if self.fail_entries:
            raise StorageUnavailable("entries down")
        total = self.total if not module else len(module)
        return ActivityLogPageOut(entries=[], total_count=total, page=page_index + 1, limit=page_size, total_pages=1)


def test_reducers():
    state = BrowserState(selected_module="Payments", selected_sub_module="Withdrawals", page_index=4, page_size=25)

    assert set_module(state, "Orders") == BrowserState("Orders", "", 0, 25)
    assert set_module(state, None) == BrowserState("", "", 0, 25)
    assert set_sub_module(state, "Settlements") == BrowserState("Payments", "Settlements", 0, 25)
    assert set_page_index(state, 7) == BrowserState("Payments", "Withdrawals", 7, 25)
    assert set_page_size(state, 50) == BrowserState("Payments", "Withdrawals", 0, 50)


def test_initial_state():
    browser = ActivityLogBrowser(FakeSource())
    assert browser.state == BrowserState("", "", 0, 10)
    assert browser.loading is False


def test_changing_module_clears_sub_module_before_fetching():
    source = FakeSource()
    browser = ActivityLogBrowser(source, notifier=RecordingNotifier())

    async def scenario():
        await browser.set_module("Payments")
        await browser.set_sub_module("Withdrawals")
        await browser.set_page_index(3)
        await browser.set_module("Orders")

    asyncio.run(scenario())

    assert source.calls[-3] == dict(module="Payments", sub_module="Withdrawals", page_index=0, page_size=10)
    assert source.calls[-2] == dict(module="Payments", sub_module="Withdrawals", page_index=3, page_size=10)
    assert source.calls[-1] == dict(module="Orders", sub_module="", page_index=0, page_size=10)
    assert browser.total_count == len("Orders")
    assert browser.facets.modules == ["Orders", "Payments"]


def test_page_size_change_returns_to_first_page():
    source = FakeSource()
    browser = ActivityLogBrowser(source)

    async def scenario():
        await browser.set_page_index(2)
        await browser.set_page_size(25)

    asyncio.run(scenario())

    assert source.calls[-1] == dict(module="", sub_module="", page_index=0, page_size=25)


def test_storage_failure_falls_back_to_empty_results():
    notifier = RecordingNotifier()
    browser = ActivityLogBrowser(FakeSource(fail_entries=True, fail_facets=True), notifier=notifier)
    browser.total_count = 99

    refreshed = asyncio.run(browser.reload())

    assert refreshed is True
    assert browser.entries == []
    assert browser.total_count == 0
    assert browser.facets.modules == []
    assert browser.facets.sub_modules == []
    assert browser.loading is False
    assert notifier.messages == [("error", "Error fetching filters"), ("error", "Error fetching logs")]


def test_loading_flag_tracks_the_request():
    source = FakeSource()
    browser = ActivityLogBrowser(source)

    async def scenario():
        gate = asyncio.Event()
        source.gates["Orders"] = gate
        task = asyncio.create_task(browser.set_module("Orders"))
        await asyncio.sleep(0.01)
        assert browser.loading is True
        gate.set()
        assert await task is True
        assert browser.loading is False

    asyncio.run(scenario())


def test_superseded_response_is_discarded():
    source = FakeSource()
    browser = ActivityLogBrowser(source)

    async def scenario():
        slow = asyncio.Event()
        source.gates["Orders"] = slow
        first = asyncio.create_task(browser.set_module("Orders"))
        await asyncio.sleep(0.01)
        assert browser.loading is True

        second = await browser.set_module("Payments")
        slow.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is False
    assert second is True
    assert browser.state.selected_module == "Payments"
    assert browser.total_count == len("Payments")
    assert browser.loading is False


def test_response_finished_after_a_newer_request_is_dropped():
    source = FakeSource()
    browser = ActivityLogBrowser(source, cancel_superseded=False)

    async def scenario():
        slow = asyncio.Event()
        source.gates["Orders"] = slow
        first = asyncio.create_task(browser.set_module("Orders"))
        await asyncio.sleep(0.01)

        second = await browser.set_module("Payments")
        assert browser.total_count == len("Payments")

        # The older fetch now completes with its own result, which must not be shown.
        slow.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is False
    assert second is True
    assert [c["module"] for c in source.calls] == ["Orders", "Payments"]
    assert browser.state.selected_module == "Payments"
    assert browser.total_count == len("Payments")
    assert browser.loading is False


def test_expired_session_falls_back_to_empty_results():
    source = FakeSource()
    notifier = RecordingNotifier()
    browser = ActivityLogBrowser(source, notifier=notifier)

    async def scenario():
        assert await browser.set_module("Orders") is True
        assert browser.total_count == len("Orders")
        source.session_expired = True
        return await browser.set_module("Payments")

    refreshed = asyncio.run(scenario())

    assert refreshed is True
    assert browser.state.selected_module == "Payments"
    assert browser.entries == []
    assert browser.total_count == 0
    assert browser.facets.modules == []
    assert browser.loading is False
    assert ("error", "Error fetching logs") in notifier.messages
    assert ("error", "Error fetching filters") in notifier.messages


def test_entries_are_requested_while_facets_are_still_loading():
    source = FakeSource()
    browser = ActivityLogBrowser(source)

    async def scenario():
        source.facets_gate = asyncio.Event()
        task = asyncio.create_task(browser.set_module("Orders"))
        await asyncio.sleep(0.01)
        assert [c["module"] for c in source.calls] == ["Orders"]
        assert browser.loading is True
        source.facets_gate.set()
        return await task

    assert asyncio.run(scenario()) is True
    assert browser.total_count == len("Orders")
    assert browser.facets.modules == ["Orders", "Payments"]
