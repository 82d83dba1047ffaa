"""Tests for row clicks, row actions and the table settings menu"""

import pytest

from dnsboard.table import (
    ACTIONS_COLUMN_ID,
    SELECTION_COLUMN_ID,
    Column,
    DataTable,
    RowAction,
    TableActions,
)
from dnsboard.table.actions import (
    MENU_ADD_ENTRY,
    MENU_CLEAR_FILTERS,
    MENU_DELETE_SELECTED,
    MENU_DESELECT_ALL,
)

COLUMNS = [
    Column(key="name", enable_column_filter=False),
    Column(key="kind"),
]


@pytest.fixture
def edited():
    return []


@pytest.fixture
def deleted():
    return []


@pytest.fixture
def added():
    return []


@pytest.fixture
def table(sample_rows, edited):
    return DataTable(
        COLUMNS,
        sample_rows,
        page_sizes=[10],
        enable_row_selection=True,
        row_actions=[RowAction(label="Edit", callback=lambda row: edited.append(row.id))],
        row_id="id",
    )


@pytest.fixture
def actions(table, deleted, added):
    return TableActions(
        table,
        delete_selected_rows=lambda rows: deleted.append([row.id for row in rows]),
        add_entry=lambda: added.append(True),
    )


def row(table, row_id):
    return next(r for r in table.core_rows if r.id == row_id)


class TestClicks:
    """Tests for click handling"""

    def test_row_click_toggles_selection(self, table, actions):
        actions.click_row(row(table, "4"))
        assert table.is_selected("4")

        actions.click_row(row(table, "4"))
        assert not table.is_selected("4")

    def test_plain_cell_reaches_row(self, table, actions):
        """Test a click on a non-filterable cell selects the row"""
        consumed = actions.click_cell(row(table, "4"), "name")

        assert not consumed
        assert table.is_selected("4")

    def test_filterable_cell_filters(self, table, actions):
        """Test a click on a filterable cell filters by its value without selecting"""
        consumed = actions.click_cell(row(table, "4"), "kind")

        assert consumed
        assert table.column_filter("kind") == "even"
        assert not table.is_selected("4")

    def test_checkbox_cell(self, table, actions):
        assert actions.click_cell(row(table, "4"), SELECTION_COLUMN_ID)
        assert table.is_selected("4")

    def test_actions_cell_does_not_select(self, table, actions):
        assert actions.click_cell(row(table, "4"), ACTIONS_COLUMN_ID)
        assert not table.is_selected("4")

    def test_header_click_sorts(self, table, actions):
        actions.click_header("name")

        assert table.sort_direction("name") == "asc"

    def test_checkbox_header_toggles_all(self, table, actions):
        actions.click_header(SELECTION_COLUMN_ID)

        assert table.is_all_rows_selected()

    def test_filtering_disabled_click_selects(self, sample_rows):
        table = DataTable(COLUMNS, sample_rows, enable_row_selection=True, enable_column_filtering=False, row_id="id")
        actions = TableActions(table)

        assert not actions.click_cell(row(table, "1"), "kind")
        assert table.is_selected("1")


class TestRowActions:
    """Tests for the per-row menu"""

    def test_invoke(self, table, actions, edited):
        actions.invoke_row_action(row(table, "6"), "Edit")

        assert edited == ["6"]
        assert not table.is_selected("6")

    def test_unknown_action(self, table, actions):
        with pytest.raises(ValueError):
            actions.invoke_row_action(row(table, "6"), "Rename")


class TestBulkActions:
    """Tests for bulk deletion and the settings menu"""

    def test_delete_selected(self, table, actions, deleted):
        """Test the callback gets the selected rows at the time of the call"""
        table.toggle_row_selected("2")
        table.toggle_row_selected("5")
        table.toggle_row_selected("9")

        assert actions.delete_selected()

        assert deleted == [["2", "5", "9"]]

    def test_delete_without_selection(self, actions, deleted):
        assert not actions.delete_selected()
        assert deleted == []

    def test_needs_selection_enabled(self, sample_rows):
        table = DataTable(COLUMNS, sample_rows)

        with pytest.raises(ValueError):
            TableActions(table, delete_selected_rows=lambda rows: None)

    def test_menu_items(self, table, actions):
        assert actions.menu_items() == [MENU_ADD_ENTRY]

        table.set_column_filter("kind", "odd")
        table.toggle_row_selected("1")

        assert actions.menu_items() == [
            MENU_CLEAR_FILTERS,
            MENU_ADD_ENTRY,
            MENU_DELETE_SELECTED,
            MENU_DESELECT_ALL,
        ]

    def test_select_menu_items(self, table, actions, added):
        table.set_column_filter("kind", "odd")
        table.toggle_row_selected("1")

        actions.select_menu_item(MENU_CLEAR_FILTERS)
        assert not table.has_column_filters

        actions.select_menu_item(MENU_DESELECT_ALL)
        assert table.selected_rows() == []

        actions.select_menu_item(MENU_ADD_ENTRY)
        assert added == [True]

    def test_unavailable_menu_item(self, actions):
        with pytest.raises(ValueError):
            actions.select_menu_item(MENU_DELETE_SELECTED)
