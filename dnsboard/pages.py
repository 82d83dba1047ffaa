"""Table widgets for the hosts, denylist and query log views"""

from typing import Any, Callable, Optional, Sequence

from dnsboard.config import TableConfig
from dnsboard.mutations import EntryMutations
from dnsboard.table import DataTable, PaginationControls, Row, RowAction, TableActions
from dnsboard.views.columns import BLOCK_ENTRY_COLUMNS, DOMAIN_COLUMNS, QUERY_COLUMNS
from dnsboard.views.dashboard import DashboardViews


class TableWidget:
    """A table bound to a view model source"""

    def __init__(
        self,
        table: DataTable,
        source: Callable[[], Optional[Sequence[Any]]],
        delete_selected_rows: Optional[Callable] = None,
        add_entry: Optional[Callable[[], Any]] = None,
    ):
        self.table = table
        self.source = source
        self.actions = TableActions(table, delete_selected_rows=delete_selected_rows, add_entry=add_entry)
        self.pagination = PaginationControls(table)
        self.ready = False

    def refresh(self) -> bool:
        """Pull the latest view model; False while there is nothing to show"""
        data = self.source()
        if data is None:
            return False
        self.table.set_data(data)
        self.ready = True
        return True


def _entry_actions(
    mutations: EntryMutations,
    on_edit: Optional[Callable[[Any], Any]],
) -> list:
    def delete_row(row: Row):
        mutations.fire_and_forget(mutations.delete_entries([row.original.id]))

    def edit_row(row: Row):
        if on_edit is not None:
            on_edit(row.original)

    return [
        RowAction(label="Edit", callback=edit_row),
        RowAction(label="Delete", callback=delete_row),
    ]


def _delete_selected(mutations: EntryMutations) -> Callable:
    def delete_rows(rows: Sequence[Row]):
        mutations.fire_and_forget(mutations.delete_entries([row.original.id for row in rows]))
    return delete_rows


def _entry_widget(
    columns,
    source: Callable[[], Optional[Sequence[Any]]],
    mutations: EntryMutations,
    config: TableConfig,
    on_edit: Optional[Callable[[Any], Any]],
    on_add: Optional[Callable[[], Any]],
) -> TableWidget:
    table = DataTable(
        columns,
        [],
        page_sizes=config.entry_page_sizes,
        default_page_size=config.entry_default_page_size,
        enable_row_selection=True,
        row_actions=_entry_actions(mutations, on_edit),
        row_id="id",
        debounce_ms=config.debounce_ms,
    )
    widget = TableWidget(
        table,
        source,
        delete_selected_rows=_delete_selected(mutations),
        add_entry=on_add,
    )
    widget.refresh()
    return widget


def hosts_widget(
    views: DashboardViews,
    mutations: EntryMutations,
    config: Optional[TableConfig] = None,
    on_edit: Optional[Callable[[Any], Any]] = None,
    on_add: Optional[Callable[[], Any]] = None,
) -> TableWidget:
    """Hosts overrides table with edit/delete and bulk delete"""
    return _entry_widget(DOMAIN_COLUMNS, views.domains, mutations, config or TableConfig(), on_edit, on_add)


def denylist_widget(
    views: DashboardViews,
    mutations: EntryMutations,
    config: Optional[TableConfig] = None,
    on_edit: Optional[Callable[[Any], Any]] = None,
    on_add: Optional[Callable[[], Any]] = None,
) -> TableWidget:
    """Block directives table with edit/delete and bulk delete"""
    return _entry_widget(BLOCK_ENTRY_COLUMNS, views.block_entries, mutations, config or TableConfig(), on_edit, on_add)


def query_log_widget(views: DashboardViews, config: Optional[TableConfig] = None) -> TableWidget:
    """Read-only query log table"""
    config = config or TableConfig()
    table = DataTable(
        QUERY_COLUMNS,
        [],
        page_sizes=config.log_page_sizes,
        default_page_size=config.log_default_page_size,
        row_id="id",
        debounce_ms=config.debounce_ms,
    )
    widget = TableWidget(table, views.query_logs)
    widget.refresh()
    return widget
