"""Resolver API wire models"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum


class EntryKind(str, Enum):
    """Allow/deny list entry discriminator"""
    DENY = "Deny"  # Literal domain block
    DENY_REGEX = "DenyRegex"  # Pattern block
    ALLOW_A = "AllowA"  # Hosts override, IPv4
    ALLOW_AAAA = "AllowAAAA"  # Hosts override, IPv6

    @property
    def code(self) -> int:
        """Integer code used by the mutation endpoint"""
        return _KIND_CODES[self]

    @property
    def is_allow(self) -> bool:
        return self in (EntryKind.ALLOW_A, EntryKind.ALLOW_AAAA)

    @classmethod
    def from_code(cls, code: int) -> "EntryKind":
        for kind, kind_code in _KIND_CODES.items():
            if kind_code == code:
                return kind
        raise ValueError(f"Unknown entry kind code: {code}")


_KIND_CODES = {
    EntryKind.DENY: 0,
    EntryKind.DENY_REGEX: 1,
    EntryKind.ALLOW_A: 2,
    EntryKind.ALLOW_AAAA: 3,
}


class ResponseSource(str, Enum):
    """Outcome code: how the server resolved a query"""
    DENYLIST = "0"  # Blocked
    ALLOWLIST = "1"
    CACHE = "2"
    NO_RECURSE = "3"
    UPSTREAM = "4"


@dataclass(frozen=True)
class ListEntryRaw:
    """A single allow/deny rule as returned by GET /entry"""
    id: int
    timestamp: int  # epoch seconds
    kind: EntryKind
    label: Optional[str] = None
    domain: Optional[str] = None
    data: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ListEntryRaw":
        return cls(
            id=int(raw["id"]),
            timestamp=int(raw["timestamp"]),
            kind=EntryKind(raw["kind"]),
            label=raw.get("label"),
            domain=raw.get("domain"),
            data=raw.get("data"),
        )


@dataclass(frozen=True)
class QueryLogRecord:
    """A resolved query from GET /logs"""
    id: int
    timestamp: int  # epoch seconds
    domain: str
    qtype: int
    response_code: int
    client: Optional[str] = None
    response_delay_ms: Optional[int] = None
    source: Optional[int] = None  # Outcome code, see ResponseSource

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "QueryLogRecord":
        return cls(
            id=int(raw["id"]),
            timestamp=int(raw["timestamp"]),
            domain=raw["domain"],
            qtype=int(raw["qtype"]),
            response_code=int(raw["response_code"]),
            client=raw.get("client"),
            response_delay_ms=raw.get("response_delay_ms"),
            source=raw.get("source"),
        )


@dataclass(frozen=True)
class StatsRaw:
    """Server counters from GET /stats"""
    failed_requests_count: int = 0
    per_source_stats: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "StatsRaw":
        per_source = raw.get("per_source_stats") or {}
        if not isinstance(per_source, dict):
            raise ValueError(f"per_source_stats must be an object, got {type(per_source).__name__}")
        return cls(
            failed_requests_count=int(raw.get("failed_requests_count", 0)),
            per_source_stats={str(k): int(v) for k, v in per_source.items()},
        )
