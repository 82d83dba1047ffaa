"""Split raw allow/deny list entries into hosts and denylist view models"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from dnsboard.client.models import EntryKind, ListEntryRaw


@dataclass(frozen=True)
class DomainEntry:
    """Hosts override: domain resolved to a fixed address"""
    id: int
    timestamp: int  # epoch milliseconds
    domain: str
    data: str  # address
    label: Optional[str] = None


@dataclass(frozen=True)
class BlockEntry:
    """Block directive: literal domain or pattern"""
    id: int
    timestamp: int  # epoch milliseconds
    data: str
    label: Optional[str] = None


def _block_data(entry: ListEntryRaw) -> str:
    if entry.kind == EntryKind.DENY:
        return entry.domain or ""
    if entry.kind == EntryKind.DENY_REGEX:
        return entry.data or ""
    raise ValueError(f"Not a deny entry: {entry.kind}")


def normalize_entries(
    entries: Optional[Sequence[ListEntryRaw]],
) -> Tuple[Optional[List[DomainEntry]], Optional[List[BlockEntry]]]:
    """
    Partition entries by kind in a single pass.

    Allow kinds become DomainEntry, deny kinds become BlockEntry. Timestamps
    are converted from seconds to milliseconds here. Returns (None, None)
    while no snapshot is available.
    """
    if entries is None:
        return None, None

    domains: List[DomainEntry] = []
    blocks: List[BlockEntry] = []

    for entry in entries:
        timestamp = entry.timestamp * 1000
        if entry.kind.is_allow:
            domains.append(DomainEntry(
                id=entry.id,
                timestamp=timestamp,
                domain=entry.domain or "",
                data=entry.data or "",
                label=entry.label,
            ))
        else:
            blocks.append(BlockEntry(
                id=entry.id,
                timestamp=timestamp,
                data=_block_data(entry),
                label=entry.label,
            ))

    return domains, blocks
