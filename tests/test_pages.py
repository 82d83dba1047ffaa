"""Tests for the dashboard table widgets and memoized views"""

import asyncio

import pytest

from dnsboard.config import TableConfig
from dnsboard.mutations import EntryMutations
from dnsboard.pages import denylist_widget, hosts_widget, query_log_widget
from dnsboard.polling import CollectionState, LIST_ENTRIES, QUERY_LOGS, STATS
from dnsboard.table import ACTIONS_COLUMN_ID, SELECTION_COLUMN_ID
from dnsboard.views.dashboard import DashboardViews


@pytest.fixture
def views(store):
    return DashboardViews(store)


@pytest.fixture
def mutations(api_client, store):
    return EntryMutations(api_client, store)


class TestDashboardViews:
    """Tests for memoized derivations"""

    def test_pending(self, views):
        assert views.domains() is None
        assert views.block_entries() is None
        assert views.stats() is None
        assert views.query_logs() is None
        assert views.activity() is None
        assert views.distribution() is None

    def test_derived_once_per_snapshot(self, store, views):
        asyncio.run(store.refresh_all())

        assert views.domains() is views.domains()
        assert views.stats() is views.stats()
        assert views.distribution() is views.distribution()

    def test_new_snapshot_rederives(self, store, views):
        asyncio.run(store.refresh(STATS))
        first = views.stats()

        asyncio.run(store.refresh(STATS))

        assert views.stats() is not first
        assert views.stats() == first

    def test_stats_from_api(self, store, views):
        asyncio.run(store.refresh(STATS))

        assert views.stats().uptime_percentage == "80.00%"

    def test_query_log_predicate(self, store, views):
        asyncio.run(store.refresh(QUERY_LOGS))

        blocked = views.query_logs(lambda query: query.source == 0)

        assert [q.domain for q in blocked] == ["ads.example.com"]


class TestEntryWidgets:
    """Tests for the hosts and denylist tables"""

    def test_waits_for_data(self, views, mutations):
        widget = hosts_widget(views, mutations)

        assert not widget.ready
        assert not widget.refresh()
        assert widget.table.row_count == 0

    def test_hosts_table(self, store, views, mutations):
        asyncio.run(store.refresh(LIST_ENTRIES))

        widget = hosts_widget(views, mutations)

        assert widget.ready
        assert widget.table.page_size == 15
        assert widget.table.page_sizes == [15, 20, 50, 100]
        assert [row.original.domain for row in widget.table.row_model()] == ["router.lan", "nas.lan"]
        assert widget.table.columns[0].key == SELECTION_COLUMN_ID
        assert widget.table.columns[-1].key == ACTIONS_COLUMN_ID

    def test_denylist_table(self, store, views, mutations):
        asyncio.run(store.refresh(LIST_ENTRIES))

        widget = denylist_widget(views, mutations, TableConfig(entry_default_page_size=20))

        assert widget.table.page_size == 20
        assert [row.id for row in widget.table.row_model()] == ["2", "3"]

    def test_edit_action(self, store, views, mutations):
        edited = []
        asyncio.run(store.refresh(LIST_ENTRIES))
        widget = hosts_widget(views, mutations, on_edit=edited.append)

        row = widget.table.core_rows[0]
        widget.actions.invoke_row_action(row, "Edit")

        assert edited == [row.original]

    def test_delete_row_action(self, resolver, store, views, mutations):
        """Test the row menu deletes that entry and marks the list stale"""
        async def scenario():
            await store.refresh(LIST_ENTRIES)
            widget = denylist_widget(views, mutations)
            widget.actions.invoke_row_action(widget.table.core_rows[0], "Delete")
            await asyncio.gather(*list(mutations._background))

        asyncio.run(scenario())

        assert resolver.mutation_requests() == [("DELETE", "/entry", [2])]
        assert store.collection(LIST_ENTRIES).state == CollectionState.STALE

    def test_bulk_delete(self, resolver, store, views, mutations):
        """Test deleting selected rows sends their ids in one request"""
        async def scenario():
            await store.refresh(LIST_ENTRIES)
            widget = hosts_widget(views, mutations)
            widget.table.toggle_all_rows_selected()
            assert widget.actions.delete_selected()
            await asyncio.gather(*list(mutations._background))

        asyncio.run(scenario())

        assert resolver.mutation_requests() == [("DELETE", "/entry", [1, 4])]

    def test_refresh_after_mutation(self, store, views, mutations):
        """Test new data resets page and selection"""
        asyncio.run(store.refresh(LIST_ENTRIES))
        widget = hosts_widget(views, mutations)
        widget.table.toggle_row_selected("1")

        asyncio.run(store.refresh(LIST_ENTRIES))
        widget.refresh()

        assert widget.table.selected_rows() == []


class TestQueryLogWidget:
    """Tests for the query log table"""

    def test_read_only(self, store, views):
        asyncio.run(store.refresh(QUERY_LOGS))

        widget = query_log_widget(views)

        assert widget.table.page_size == 20
        assert widget.table.columns[0].key == "timestamp"
        assert widget.table.row_actions == []
        assert SELECTION_COLUMN_ID not in [c.key for c in widget.table.columns]
        assert not widget.table.enable_row_selection
        assert widget.actions.menu_items() == []

    def test_filter_by_type(self, store, views):
        asyncio.run(store.refresh(QUERY_LOGS))
        widget = query_log_widget(views)
        row = widget.table.core_rows[1]

        assert widget.actions.click_cell(row, "qtype")

        assert widget.table.row_count == 1
        assert widget.table.get_column("qtype").render(28) == "AAAA"

    def test_search_skips_status(self, store, views):
        asyncio.run(store.refresh(QUERY_LOGS))
        widget = query_log_widget(views)

        widget.table.set_global_filter("ads")

        assert [row.original.id for row in widget.table.row_model()] == [2]
