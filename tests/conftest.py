from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from runops.core.errors import BackendError  # noqa: E402
from runops.core.resources import Condition, ResourceRecord  # noqa: E402

NOW = datetime(2026, 3, 14, 12, 0, 0, tzinfo=timezone.utc)


class FakeAdapter:
    """In-memory stand-in for the Kubernetes resources adapter."""

    def __init__(self, records, namespaces=("default",), fail_with=None):
        self.records = list(records)
        self.namespaces = set(namespaces)
        self.fail_with = fail_with
        self.list_calls: list[tuple[str | None, int | None]] = []
        self.get_calls: list[tuple[str, str]] = []

    def namespace_exists(self, namespace: str) -> bool:
        return namespace in self.namespaces

    def list_resources(self, kind, *, namespace, limit=None):
        self.list_calls.append((namespace, limit))
        if self.fail_with is not None:
            raise self.fail_with
        items = [r for r in self.records if not namespace or r.namespace == namespace]
        if limit:
            # The API server pages in key order, not by creation time.
            return sorted(items, key=lambda r: (r.namespace, r.name))[:limit]
        return items

    def get_resource(self, kind, namespace, name):
        self.get_calls.append((namespace, name))
        for r in self.records:
            if r.namespace == namespace and r.name == name:
                return r
        raise BackendError(f"{kind.kind} '{name}' not found in namespace '{namespace}'")


def make_record(
    name: str,
    namespace: str = "foo",
    *,
    age: timedelta | None = None,
    status: str | None = "True",
    url: str | None = None,
) -> ResourceRecord:
    conditions = (Condition(type="Ready", status=status),) if status else ()
    raw = {
        "apiVersion": "triggers.tekton.dev/v1beta1",
        "kind": "EventListener",
        "metadata": {"name": name, "namespace": namespace},
    }
    return ResourceRecord(
        name=name,
        namespace=namespace,
        created_at=NOW - age if age is not None else None,
        conditions=conditions,
        address=url,
        raw=raw,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def mixed_records() -> list[ResourceRecord]:
    """Listeners at 2m, 2m, 30s, 200h, no timestamp and 10s, in backend order."""
    return [
        make_record("tb0", "bar", age=timedelta(minutes=2), url="http://tb0-listener.default.svc.cluster.local"),
        make_record("tb1", "foo", age=timedelta(minutes=2), url="http://tb1-listener.default.svc.cluster.local"),
        make_record("tb2", "foo", age=timedelta(seconds=30), url="http://tb2-listener.default.svc.cluster.local"),
        make_record("tb3", "foo", age=timedelta(hours=200), status="False"),
        make_record("tb4", "foo", age=None, status=None),
        make_record("tb5", "foo", age=timedelta(seconds=10), status="Unknown"),
    ]
