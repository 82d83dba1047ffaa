"""Selection and row actions on top of the table engine"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from dnsboard.table.columns import ACTIONS_COLUMN_ID, SELECTION_COLUMN_ID
from dnsboard.table.engine import DataTable, Row

logger = logging.getLogger(__name__)

MENU_CLEAR_FILTERS = "Clear all filters"
MENU_ADD_ENTRY = "Add Entry"
MENU_DESELECT_ALL = "Deselect all rows"
MENU_DELETE_SELECTED = "Delete selected rows"


@dataclass(frozen=True)
class RowAction:
    """A per-row menu item"""
    label: str
    callback: Callable[[Row], Any]


class TableActions:
    """
    Turns clicks and menu choices into table operations.

    Row clicks toggle selection. Clicks on a filterable cell filter the
    column by that cell instead, and the row action menu never touches
    selection. Bulk deletion hands the selected rows to the callback as they
    are at the time of the call.
    """

    def __init__(
        self,
        table: DataTable,
        delete_selected_rows: Optional[Callable[[List[Row]], Any]] = None,
        add_entry: Optional[Callable[[], Any]] = None,
    ):
        if delete_selected_rows is not None and not table.enable_row_selection:
            raise ValueError("Bulk deletion needs a table with row selection enabled")
        self.table = table
        self.delete_selected_rows = delete_selected_rows
        self.add_entry_callback = add_entry

    @property
    def row_actions(self) -> List[RowAction]:
        return self.table.row_actions

    def click_row(self, row: Row) -> None:
        self.table.toggle_row_selected(row.id)

    def click_cell(self, row: Row, column_key: str) -> bool:
        """
        Handle a click on a cell. Returns True when the click was consumed
        by the cell and did not reach the row.
        """
        if column_key == ACTIONS_COLUMN_ID:
            return True
        if column_key == SELECTION_COLUMN_ID:
            self.table.toggle_row_selected(row.id)
            return True

        column = self.table.get_column(column_key)
        if self.table.enable_column_filtering and column.is_filterable:
            self.table.set_column_filter(column_key, row.get_value(column))
            return True

        self.click_row(row)
        return False

    def click_header(self, column_key: str) -> None:
        if column_key == SELECTION_COLUMN_ID:
            self.table.toggle_all_rows_selected()
        else:
            self.table.toggle_sorting(column_key)

    def invoke_row_action(self, row: Row, label: str) -> Any:
        for action in self.row_actions:
            if action.label == label:
                return action.callback(row)
        raise ValueError(f"Unknown row action: {label}")

    def has_selection(self) -> bool:
        return self.table.is_some_rows_selected() or self.table.is_all_rows_selected()

    def deselect_all(self) -> None:
        self.table.reset_row_selection()

    def delete_selected(self) -> bool:
        if self.delete_selected_rows is None or not self.has_selection():
            return False
        rows = self.table.selected_rows()
        logger.info(f"Deleting {len(rows)} selected rows")
        self.delete_selected_rows(rows)
        return True

    def clear_filters(self) -> None:
        self.table.reset_column_filters()

    def add_entry(self) -> None:
        if self.add_entry_callback is not None:
            self.add_entry_callback()

    def menu_items(self) -> List[str]:
        """Entries of the table settings menu that apply right now"""
        items = []
        if self.table.has_column_filters:
            items.append(MENU_CLEAR_FILTERS)
        if self.add_entry_callback is not None:
            items.append(MENU_ADD_ENTRY)
        if self.delete_selected_rows is not None and self.has_selection():
            items.append(MENU_DELETE_SELECTED)
            items.append(MENU_DESELECT_ALL)
        return items

    def select_menu_item(self, item: str) -> None:
        handlers = {
            MENU_CLEAR_FILTERS: self.clear_filters,
            MENU_ADD_ENTRY: self.add_entry,
            MENU_DESELECT_ALL: self.deselect_all,
            MENU_DELETE_SELECTED: self.delete_selected,
        }
        if item not in self.menu_items():
            raise ValueError(f"Menu item not available: {item}")
        handlers[item]()
