"""Pytest fixtures for the dnsboard test suite"""

import json
import os
import random
import tempfile
from datetime import timezone

import httpx
import pytest

from dnsboard.client import EntryKind, ListEntryRaw, QueryLogRecord, ResolverAPIClient, StatsRaw
from dnsboard.polling import DashboardStore

# 2023-11-14 22:13:20 UTC
NOW_MS = 1_700_000_000_000
NOW_S = NOW_MS // 1000
HOUR_S = 60 * 60

UTC = timezone.utc


class FakeResolver:
    """In-memory resolver API served through httpx.MockTransport"""

    def __init__(self):
        self.entries = []
        self.logs = []
        self.stats = {"failed_requests_count": 0, "per_source_stats": {}}
        self.requests = []
        self.fail_with = None  # status code for every request
        self.next_id = 100

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body))

        if self.fail_with is not None:
            return httpx.Response(self.fail_with)

        path = request.url.path
        if path == "/stats" and request.method == "GET":
            return httpx.Response(200, json=self.stats)
        if path == "/logs" and request.method == "GET":
            return httpx.Response(200, json=self.logs)
        if path == "/entry":
            if request.method == "GET":
                return httpx.Response(200, json=self.entries)
            if request.method == "POST":
                return self._upsert(body)
            if request.method == "DELETE":
                self.entries = [e for e in self.entries if e["id"] not in body]
                return httpx.Response(200)
        return httpx.Response(404)

    def _upsert(self, body):
        entry = dict(body)
        entry["kind"] = EntryKind.from_code(entry["kind"]).value
        entry.setdefault("timestamp", NOW_S)
        if "id" in entry:
            self.entries = [e for e in self.entries if e["id"] != entry["id"]]
        else:
            entry["id"] = self.next_id
            self.next_id += 1
        self.entries.append(entry)
        return httpx.Response(200)

    def mutation_requests(self):
        return [r for r in self.requests if r[0] != "GET"]


@pytest.fixture
def resolver():
    """Fake resolver API with a few entries, logs and counters"""
    fake = FakeResolver()
    fake.entries = [
        {"id": 1, "timestamp": NOW_S - 100, "kind": "AllowA", "domain": "router.lan", "data": "192.168.1.1", "label": "Router"},
        {"id": 2, "timestamp": NOW_S - 90, "kind": "Deny", "domain": "ads.example.com"},
        {"id": 3, "timestamp": NOW_S - 80, "kind": "DenyRegex", "data": "^track.*", "label": "Trackers"},
        {"id": 4, "timestamp": NOW_S - 70, "kind": "AllowAAAA", "domain": "nas.lan", "data": "fd00::10"},
    ]
    fake.logs = [
        {"id": 1, "timestamp": NOW_S - 60, "domain": "example.com", "qtype": 1, "response_code": 0, "client": "10.0.0.2", "source": 4},
        {"id": 2, "timestamp": NOW_S - 50, "domain": "ads.example.com", "qtype": 28, "response_code": 3, "client": "10.0.0.3", "source": 0},
    ]
    fake.stats = {"failed_requests_count": 2, "per_source_stats": {"0": 3, "2": 7}}
    return fake


@pytest.fixture
def api_client(resolver):
    """Resolver API client wired to the fake resolver"""
    return ResolverAPIClient(
        base_url="http://resolver.test/",
        transport=httpx.MockTransport(resolver.handler),
    )


@pytest.fixture
def store(api_client):
    return DashboardStore(api_client)


@pytest.fixture
def rng():
    """Seeded random source for color assignment"""
    return random.Random(1234)


def make_log(id, timestamp, client="10.0.0.2", qtype=1, source=4, domain="example.com"):
    return QueryLogRecord(
        id=id,
        timestamp=timestamp,
        domain=domain,
        qtype=qtype,
        response_code=0,
        client=client,
        source=source,
    )


@pytest.fixture
def sample_entries():
    """Raw entries of every kind, out of kind order"""
    return [
        ListEntryRaw(id=1, timestamp=1000, kind=EntryKind.ALLOW_A, domain="router.lan", data="192.168.1.1", label="Router"),
        ListEntryRaw(id=2, timestamp=1001, kind=EntryKind.DENY, domain="ads.example.com"),
        ListEntryRaw(id=3, timestamp=1002, kind=EntryKind.DENY_REGEX, data="^track.*", label="Trackers"),
        ListEntryRaw(id=4, timestamp=1003, kind=EntryKind.ALLOW_AAAA, domain="nas.lan", data="fd00::10"),
    ]


@pytest.fixture
def sample_stats():
    return StatsRaw(failed_requests_count=2, per_source_stats={"0": 3, "2": 7})


@pytest.fixture
def sample_rows():
    """23 plain dict rows for table tests"""
    return [
        {"id": i, "name": f"host-{i:02d}", "kind": "even" if i % 2 == 0 else "odd", "size": i * 10}
        for i in range(23)
    ]


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing"""
    config_content = """
api:
  base_url: "https://resolver.lan:8443"
  verify_ssl: true
  timeout: 5

polling:
  logs_seconds: 30

table:
  debounce_ms: 250

logging:
  level: "DEBUG"
"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write(config_content)
        f.flush()
        yield f.name
    os.unlink(f.name)
