"""Table engine: paginated, sortable, filterable tables with row selection"""

from dnsboard.table.columns import (
    Column,
    ACTIONS_COLUMN_ID,
    SELECTION_COLUMN_ID,
    FILTER_AUTO,
    FILTER_EQUALS,
    FILTER_EQUALS_STRING,
    FILTER_INCLUDES_STRING,
)
from dnsboard.table.debounce import DebouncedValue
from dnsboard.table.engine import DataTable, Row, SortSpec, TableState, SORT_ASC, SORT_DESC
from dnsboard.table.pagination import PaginationControls, parse_page_input
from dnsboard.table.actions import RowAction, TableActions
from dnsboard.table.ranking import Rank, rank_item

__all__ = [
    "Column",
    "ACTIONS_COLUMN_ID",
    "SELECTION_COLUMN_ID",
    "FILTER_AUTO",
    "FILTER_EQUALS",
    "FILTER_EQUALS_STRING",
    "FILTER_INCLUDES_STRING",
    "DebouncedValue",
    "DataTable",
    "Row",
    "SortSpec",
    "TableState",
    "SORT_ASC",
    "SORT_DESC",
    "PaginationControls",
    "parse_page_input",
    "RowAction",
    "TableActions",
    "Rank",
    "rank_item",
]
