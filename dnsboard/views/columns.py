"""Column descriptors for the query log, hosts and denylist tables"""

from dnsboard.table.columns import Column, FILTER_EQUALS, FILTER_EQUALS_STRING
from dnsboard.views.constants import query_type_label, response_source_label
from dnsboard.views.formatting import format_date


def _format_seconds(value) -> str:
    return format_date(value * 1000)


QUERY_COLUMNS = [
    Column(
        key="timestamp",
        header="Time",
        formatter=_format_seconds,
        enable_column_filter=False,
        enable_global_filter=False,
    ),
    Column(
        key="qtype",
        header="Type",
        formatter=query_type_label,
        filter_fn=FILTER_EQUALS,
    ),
    Column(
        key="domain",
        header="Domain",
        enable_hiding=False,
    ),
    Column(
        key="source",
        header="Status",
        formatter=response_source_label,
        filter_fn=FILTER_EQUALS,
        enable_global_filter=False,
    ),
    Column(
        key="client",
        header="Client",
        filter_fn=FILTER_EQUALS_STRING,
    ),
]

DOMAIN_COLUMNS = [
    Column(
        key="timestamp",
        header="Added At",
        formatter=format_date,
        enable_column_filter=False,
        enable_global_filter=False,
    ),
    Column(
        key="domain",
        header="Domain",
        enable_column_filter=False,
        enable_hiding=False,
    ),
    Column(
        key="data",
        header="Address",
        enable_hiding=False,
    ),
    Column(
        key="label",
        header="Label",
    ),
]

BLOCK_ENTRY_COLUMNS = [
    Column(
        key="timestamp",
        header="Added At",
        formatter=format_date,
        enable_column_filter=False,
        enable_global_filter=False,
    ),
    Column(
        key="data",
        header="Block directive",
        enable_column_filter=False,
        enable_hiding=False,
    ),
    Column(
        key="label",
        header="Label",
    ),
]
