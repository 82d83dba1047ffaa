"""Generic table engine

Owns pagination, sorting, filtering, selection and column visibility state
for one table over externally supplied columns and rows. The row model is
built in a fixed order: column filters, global fuzzy filter, sort, page
slice.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Set, TypeVar, Union

from dnsboard.table.columns import Column, actions_column, selection_column
from dnsboard.table.debounce import DebouncedValue
from dnsboard.table.ranking import rank_item

logger = logging.getLogger(__name__)

T = TypeVar("T")

SORT_ASC = "asc"
SORT_DESC = "desc"

DEFAULT_PAGE_SIZES = (5, 10, 50, 100)
GLOBAL_FILTER_DEBOUNCE_MS = 500


@dataclass
class Row(Generic[T]):
    """A data row as seen by the table"""
    id: str
    index: int
    original: T

    def get_value(self, column: Column) -> Any:
        return column.extract(self.original)


@dataclass(frozen=True)
class SortSpec:
    column: str
    desc: bool = False

    @property
    def direction(self) -> str:
        return SORT_DESC if self.desc else SORT_ASC


@dataclass
class TableState:
    """Mutable per-table state"""
    page_index: int
    page_size: int
    sorting: Optional[SortSpec] = None
    column_filters: Dict[str, Any] = field(default_factory=dict)
    selected_row_ids: Set[str] = field(default_factory=set)
    column_visibility: Dict[str, bool] = field(default_factory=dict)


def _sort_key(value: Any):
    if isinstance(value, (int, float)):
        return (0, value, "")
    return (1, 0, str(value).casefold())


class DataTable(Generic[T]):
    """
    Table engine over a row collection and column descriptors.

    enable_row_selection turns on bulk selection: the checkbox column and
    the selection state exist only for tables that offer bulk deletion.
    TableActions refuses a bulk-delete callback on a table without it, so
    set the flag exactly when a bulk action is wired.
    """

    def __init__(
        self,
        columns: Sequence[Column],
        data: Sequence[T],
        page_sizes: Sequence[int] = DEFAULT_PAGE_SIZES,
        default_page_size: Optional[int] = None,
        enable_row_selection: bool = False,
        row_actions: Optional[Sequence[Any]] = None,
        row_id: Optional[Union[str, Callable[[T, int], Any]]] = None,
        enable_sorting: bool = True,
        enable_column_filtering: bool = True,
        debounce_ms: int = GLOBAL_FILTER_DEBOUNCE_MS,
    ):
        if not page_sizes:
            raise ValueError("At least one page size is required")

        self.data_columns: List[Column] = list(columns)
        self.enable_row_selection = enable_row_selection
        self.row_actions = list(row_actions or [])
        self.enable_sorting = enable_sorting
        self.enable_column_filtering = enable_column_filtering
        self._row_id = row_id

        self.columns: List[Column] = []
        if enable_row_selection:
            self.columns.append(selection_column())
        self.columns.extend(self.data_columns)
        if self.row_actions:
            self.columns.append(actions_column())
        self._columns_by_key = {column.key: column for column in self.columns}

        self.page_sizes: List[int] = list(page_sizes)
        self.default_page_size = default_page_size
        self.state = self._initial_state()

        self._global_filter = DebouncedValue(
            debounce_ms / 1000, "", on_change=self._on_global_filter_change
        )

        self._data: Sequence[T] = data
        self._rows = self._build_rows(data)

    def _initial_state(self) -> TableState:
        page_size = self.default_page_size or self.page_sizes[0]
        return TableState(page_index=0, page_size=page_size)

    def _build_rows(self, data: Sequence[T]) -> List[Row[T]]:
        rows = []
        for index, original in enumerate(data):
            if self._row_id is None:
                row_id = index
            elif callable(self._row_id):
                row_id = self._row_id(original, index)
            elif isinstance(original, dict):
                row_id = original[self._row_id]
            else:
                row_id = getattr(original, self._row_id)
            rows.append(Row(id=str(row_id), index=index, original=original))
        return rows

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    @property
    def data(self) -> Sequence[T]:
        return self._data

    def set_data(self, data: Sequence[T]) -> None:
        """Replace the rows; a new collection resets page and selection"""
        if data is self._data:
            return
        self._data = data
        self._rows = self._build_rows(data)
        self.state.page_index = 0
        self.state.selected_row_ids.clear()

    def set_page_sizes(self, page_sizes: Sequence[int], default_page_size: Optional[int] = None) -> None:
        """Swap the page size catalogue; all table state starts over"""
        if not page_sizes:
            raise ValueError("At least one page size is required")
        self.page_sizes = list(page_sizes)
        self.default_page_size = default_page_size
        self.reset()

    def reset(self) -> None:
        self.state = self._initial_state()
        self._global_filter.force_set("")

    def get_column(self, key: str) -> Column:
        try:
            return self._columns_by_key[key]
        except KeyError:
            raise ValueError(f"Unknown column: {key}")

    # ------------------------------------------------------------------
    # Row model
    # ------------------------------------------------------------------

    @property
    def core_rows(self) -> List[Row[T]]:
        return self._rows

    def filtered_rows(self) -> List[Row[T]]:
        rows = self._rows

        for key, filter_value in self.state.column_filters.items():
            column = self._columns_by_key.get(key)
            if column is None or not column.is_filterable:
                continue
            rows = [row for row in rows if column.matches_filter(row.get_value(column), filter_value)]

        query = self.global_filter
        if query:
            searchable = [c for c in self.data_columns if c.is_globally_filterable]
            rows = [row for row in rows if self._passes_global_filter(row, searchable, query)]

        return rows

    def _passes_global_filter(self, row: Row[T], columns: List[Column], query: str) -> bool:
        for column in columns:
            value = row.get_value(column)
            if not isinstance(value, (str, int, float)):
                continue
            if rank_item(value, query).passed:
                return True
        return False

    def sorted_rows(self) -> List[Row[T]]:
        rows = self.filtered_rows()
        sorting = self.state.sorting
        if sorting is None:
            return rows

        column = self._columns_by_key.get(sorting.column)
        if column is None or not column.is_sortable:
            return rows

        present = [row for row in rows if row.get_value(column) is not None]
        missing = [row for row in rows if row.get_value(column) is None]
        present.sort(key=lambda row: _sort_key(row.get_value(column)), reverse=sorting.desc)
        # Empty cells stay at the bottom in both directions
        return present + missing

    def row_model(self) -> List[Row[T]]:
        """Rows of the current page"""
        rows = self.sorted_rows()
        start = self.state.page_index * self.state.page_size
        return rows[start:start + self.state.page_size]

    @property
    def row_count(self) -> int:
        """Number of rows left after filtering"""
        return len(self.filtered_rows())

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        size = self.state.page_size
        return (self.row_count + size - 1) // size

    @property
    def page_index(self) -> int:
        return self.state.page_index

    @property
    def page_size(self) -> int:
        return self.state.page_size

    def set_page_index(self, page_index: int) -> None:
        """Go to a zero-based page, clamped to the existing pages"""
        max_index = self.page_count - 1
        self.state.page_index = max(0, min(page_index, max_index))

    def set_page_size(self, page_size: int) -> None:
        """Change page size, keeping the current top row on screen"""
        if page_size not in self.page_sizes:
            raise ValueError(f"Page size {page_size} is not one of {self.page_sizes}")
        top_row = self.state.page_index * self.state.page_size
        self.state.page_size = page_size
        self.set_page_index(top_row // page_size)
        logger.debug(f"Page size set to {page_size}")

    @property
    def can_previous_page(self) -> bool:
        return self.state.page_index > 0

    @property
    def can_next_page(self) -> bool:
        return self.state.page_index < self.page_count - 1

    def previous_page(self) -> None:
        if self.can_previous_page:
            self.set_page_index(self.state.page_index - 1)

    def next_page(self) -> None:
        if self.can_next_page:
            self.set_page_index(self.state.page_index + 1)

    def first_page(self) -> None:
        self.set_page_index(0)

    def last_page(self) -> None:
        self.set_page_index(self.page_count - 1)

    @property
    def location_text(self) -> str:
        total = self.row_count
        start = self.state.page_index * self.state.page_size
        end = min(total, start + self.state.page_size)
        return f"Showing entries {start + 1} - {end} (of {total})"

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------

    def sort_direction(self, key: str) -> Optional[str]:
        sorting = self.state.sorting
        if sorting is None or sorting.column != key:
            return None
        return sorting.direction

    def toggle_sorting(self, key: str) -> None:
        """Cycle a column through unsorted -> asc -> desc -> unsorted"""
        column = self.get_column(key)
        if not self.enable_sorting or not column.is_sortable:
            return

        direction = self.sort_direction(key)
        if direction is None:
            self.state.sorting = SortSpec(column=key)
        elif direction == SORT_ASC:
            self.state.sorting = SortSpec(column=key, desc=True)
        else:
            self.state.sorting = None
        self.state.page_index = 0

    def clear_sorting(self) -> None:
        self.state.sorting = None

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def set_column_filter(self, key: str, value: Any) -> None:
        """Filter a column; None or an empty string removes the filter"""
        column = self.get_column(key)
        if not column.is_filterable:
            raise ValueError(f"Column {key} cannot be filtered")
        if value is None or value == "":
            self.state.column_filters.pop(key, None)
        else:
            self.state.column_filters[key] = value
        self.state.page_index = 0

    def column_filter(self, key: str) -> Any:
        return self.state.column_filters.get(key)

    def is_filtered(self, key: str) -> bool:
        return key in self.state.column_filters

    @property
    def has_column_filters(self) -> bool:
        return bool(self.state.column_filters)

    def reset_column_filters(self) -> None:
        self.state.column_filters.clear()
        self.state.page_index = 0

    @property
    def global_filter(self) -> str:
        """The search text currently applied to the rows"""
        return self._global_filter.value

    def set_global_filter_debounced(self, text: str) -> None:
        """Search as the user types; applied after a quiet period"""
        self._global_filter.schedule_update(text)

    def set_global_filter(self, text: str) -> None:
        self._global_filter.force_set(text)

    def _on_global_filter_change(self, text: str) -> None:
        self.state.page_index = 0

    # ------------------------------------------------------------------
    # Column visibility
    # ------------------------------------------------------------------

    def hideable_columns(self) -> List[Column]:
        return [column for column in self.columns if column.is_hideable]

    def is_visible(self, key: str) -> bool:
        return self.state.column_visibility.get(key, True)

    def toggle_visibility(self, key: str, visible: Optional[bool] = None) -> None:
        column = self.get_column(key)
        if not column.is_hideable:
            raise ValueError(f"Column {key} cannot be hidden")
        if visible is None:
            visible = not self.is_visible(key)
        self.state.column_visibility[key] = visible

    def visible_columns(self) -> List[Column]:
        return [column for column in self.columns if self.is_visible(column.key)]

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def is_selected(self, row_id: str) -> bool:
        return row_id in self.state.selected_row_ids

    def toggle_row_selected(self, row_id: str, value: Optional[bool] = None) -> None:
        if not self.enable_row_selection:
            return
        if value is None:
            value = not self.is_selected(row_id)
        if value:
            self.state.selected_row_ids.add(row_id)
        else:
            self.state.selected_row_ids.discard(row_id)

    def is_all_rows_selected(self) -> bool:
        rows = self.filtered_rows()
        return bool(rows) and all(self.is_selected(row.id) for row in rows)

    def is_some_rows_selected(self) -> bool:
        return bool(self.state.selected_row_ids) and not self.is_all_rows_selected()

    def toggle_all_rows_selected(self, value: Optional[bool] = None) -> None:
        """Select or deselect every row that passes the current filters"""
        if not self.enable_row_selection:
            return
        if value is None:
            value = not self.is_all_rows_selected()
        for row in self.filtered_rows():
            self.toggle_row_selected(row.id, value)

    def reset_row_selection(self) -> None:
        self.state.selected_row_ids.clear()

    def selected_rows(self) -> List[Row[T]]:
        return [row for row in self._rows if self.is_selected(row.id)]
