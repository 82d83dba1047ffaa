"""Display constants shared by the dashboard views"""

from dnsboard.client.models import ResponseSource

HOUR_IN_MILLIS = 60 * 60 * 1000
DAY_IN_MILLIS = 24 * HOUR_IN_MILLIS

UNKNOWN_SOURCE = "unknown"

# DNS query type code -> label
DNS_QUERY_TYPES = {
    "1": "A",
    "2": "NS",
    "5": "CNAME",
    "28": "AAAA",
    "41": "OPT",
    "255": "ANY",
}

# Outcome code -> label
RESPONSE_SOURCES = {
    ResponseSource.DENYLIST.value: "Blocked",
    ResponseSource.ALLOWLIST.value: "Allowlist",
    ResponseSource.CACHE.value: "Cache",
    ResponseSource.NO_RECURSE.value: "No recursion",
    ResponseSource.UPSTREAM.value: "Upstream",
    UNKNOWN_SOURCE: "Unknown",
}


def query_type_label(qtype) -> str:
    """Label for a query type code, e.g. 28 -> AAAA"""
    return DNS_QUERY_TYPES.get(str(qtype), f"Unknown({qtype})")


def response_source_label(source) -> str:
    """Label for an outcome code; absent codes are 'unknown'"""
    key = UNKNOWN_SOURCE if source is None else str(source)
    return RESPONSE_SOURCES.get(key, f"Unknown({source})")
