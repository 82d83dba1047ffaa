"""
Pydantic schemas for list entry mutations.

Input is validated here before anything is sent to the resolver, and each
schema knows how to turn itself into the POST /entry payload, including the
integer kind code the API expects.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
import ipaddress
import re

from dnsboard.client.models import EntryKind


# Dot-separated labels with a valid TLD, or a single "*." wildcard before a bare TLD
DOMAIN_REGEXP = re.compile(
    r"^(?:\*\.)?(?:(?<=\*\.)|(?<!\*\.)(?:[a-zA-Z0-9][A-Za-z0-9-]{0,61}[a-zA-Z0-9]\.)+)[A-Za-z]{2,63}$"
)


def is_domain(value: str) -> bool:
    """Check if value is a literal domain rather than a pattern"""
    return DOMAIN_REGEXP.fullmatch(value) is not None


def _empty_to_none(v):
    if v is None:
        return None
    v = v.strip()
    return v or None


# ============================================================================
# Hosts (allow) Schemas
# ============================================================================

class DomainEntryUpdate(BaseModel):
    """Schema for creating or editing a hosts override"""
    domain: str = Field(..., max_length=253)
    ip: str = Field(..., max_length=64)
    label: Optional[str] = Field(None, max_length=255)
    id: Optional[int] = None

    @field_validator('domain')
    @classmethod
    def validate_domain(cls, v):
        """Domain must match the domain shape"""
        v = v.strip()
        if not is_domain(v):
            raise ValueError("Invalid domain")
        return v

    @field_validator('ip')
    @classmethod
    def validate_ip(cls, v):
        """Validate IPv4/IPv6 address"""
        v = v.strip()
        try:
            ipaddress.ip_address(v)
        except ValueError:
            raise ValueError("Invalid IP address format")
        return v

    @field_validator('label')
    @classmethod
    def validate_label(cls, v):
        return _empty_to_none(v)

    @property
    def kind(self) -> EntryKind:
        if ipaddress.ip_address(self.ip).version == 4:
            return EntryKind.ALLOW_A
        return EntryKind.ALLOW_AAAA

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            "id": self.id,
            "label": self.label,
            "data": self.ip,
            "domain": self.domain,
            "kind": self.kind.code,
        }
        return {k: v for k, v in payload.items() if v is not None}


# ============================================================================
# Denylist Schemas
# ============================================================================

class BlockEntryUpdate(BaseModel):
    """Schema for creating or editing a block directive"""
    block_directive: str = Field(..., min_length=1, max_length=1000)
    label: Optional[str] = Field(None, max_length=255)
    id: Optional[int] = None

    @field_validator('block_directive')
    @classmethod
    def validate_block_directive(cls, v):
        """A directive is either a literal domain or a compilable pattern"""
        if not v:
            raise ValueError("Not a valid domain/RegExp")
        if not is_domain(v):
            try:
                re.compile(v)
            except re.error:
                raise ValueError("Not a valid domain/RegExp")
        return v

    @field_validator('label')
    @classmethod
    def validate_label(cls, v):
        return _empty_to_none(v)

    @property
    def kind(self) -> EntryKind:
        if is_domain(self.block_directive):
            return EntryKind.DENY
        return EntryKind.DENY_REGEX

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "label": self.label, "kind": self.kind.code}
        if self.kind == EntryKind.DENY:
            payload["domain"] = self.block_directive
        else:
            payload["data"] = self.block_directive
        return {k: v for k, v in payload.items() if v is not None}


class DeleteEntriesRequest(BaseModel):
    """Schema for deleting entries by id"""
    ids: List[int] = Field(..., min_length=1)
