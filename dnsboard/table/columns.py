"""Column descriptors consumed by the table engine"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

SELECTION_COLUMN_ID = "__checkbox__"
ACTIONS_COLUMN_ID = "__actions__"

# Column filter functions
FILTER_AUTO = "auto"
FILTER_EQUALS = "equals"
FILTER_EQUALS_STRING = "equalsString"
FILTER_INCLUDES_STRING = "includesString"

FILTER_FUNCTIONS = (FILTER_AUTO, FILTER_EQUALS, FILTER_EQUALS_STRING, FILTER_INCLUDES_STRING)


def _equals(value: Any, filter_value: Any) -> bool:
    return value == filter_value


def _equals_string(value: Any, filter_value: Any) -> bool:
    if value is None:
        return False
    return str(value).lower() == str(filter_value).lower()


def _includes_string(value: Any, filter_value: Any) -> bool:
    if value is None:
        return False
    return str(filter_value).lower() in str(value).lower()


@dataclass(frozen=True)
class Column:
    """
    Describes one column: how to read a cell from a row and how the cell may
    be filtered, sorted and hidden. The engine never looks at row shapes
    directly, only through ``extract``.

    ``accessor`` defaults to reading ``key`` as an attribute, or as a mapping
    key for dict rows. ``formatter`` turns a raw cell value into display text.
    """
    key: str
    header: str = ""
    accessor: Optional[Callable[[Any], Any]] = None
    formatter: Optional[Callable[[Any], str]] = None
    filter_fn: str = FILTER_AUTO
    enable_column_filter: bool = True
    enable_global_filter: bool = True
    enable_hiding: bool = True
    enable_sorting: bool = True
    synthetic: bool = False

    def __post_init__(self):
        if self.filter_fn not in FILTER_FUNCTIONS:
            raise ValueError(f"Unknown filter function: {self.filter_fn}")

    def extract(self, original: Any) -> Any:
        if self.synthetic:
            return None
        if self.accessor is not None:
            return self.accessor(original)
        if isinstance(original, dict):
            return original.get(self.key)
        return getattr(original, self.key, None)

    def render(self, value: Any) -> str:
        if self.formatter is not None:
            return self.formatter(value)
        return "" if value is None else str(value)

    @property
    def is_filterable(self) -> bool:
        return not self.synthetic and self.enable_column_filter

    @property
    def is_globally_filterable(self) -> bool:
        return not self.synthetic and self.enable_global_filter

    @property
    def is_sortable(self) -> bool:
        return not self.synthetic and self.enable_sorting

    @property
    def is_hideable(self) -> bool:
        return not self.synthetic and self.enable_hiding

    def matches_filter(self, value: Any, filter_value: Any) -> bool:
        filter_fn = self.filter_fn
        if filter_fn == FILTER_AUTO:
            filter_fn = FILTER_INCLUDES_STRING if isinstance(value, str) else FILTER_EQUALS

        if filter_fn == FILTER_EQUALS:
            return _equals(value, filter_value)
        if filter_fn == FILTER_EQUALS_STRING:
            return _equals_string(value, filter_value)
        return _includes_string(value, filter_value)


def selection_column() -> Column:
    return Column(key=SELECTION_COLUMN_ID, synthetic=True)


def actions_column() -> Column:
    return Column(key=ACTIONS_COLUMN_ID, synthetic=True)
