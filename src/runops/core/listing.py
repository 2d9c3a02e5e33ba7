"""Resource listing: namespace validation, backend query and ordering.

This module turns a ListQuery into an ordered sequence of ResourceRecord
snapshots. The backend is reached through a small adapter protocol so the
same logic works against the Kubernetes API, a fake in tests, or any other
list/get style control plane.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Protocol

from runops._logging import get_logger
from runops.core.errors import NamespaceNotFound
from runops.core.kinds import ResourceKind
from runops.core.resources import (
    ListedRow,
    ResourceRecord,
    evaluate_status,
    format_age,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ListQuery:
    """
    Parameters of a single list call.

    Attributes:
        namespace: Namespace to list in. Ignored when all_namespaces is set.
        all_namespaces: List across every namespace.
        limit: Maximum number of records to request from the backend.
               The backend honors it best-effort.
    """

    namespace: str = ""
    all_namespaces: bool = False
    limit: int | None = None


class ResourcesAdapter(Protocol):
    """Interface for resource lookup operations used by the core domain."""

    def namespace_exists(self, namespace: str) -> bool:
        """Return True if the namespace exists on the control plane."""
        ...

    def list_resources(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None,
        limit: int | None = None,
    ) -> list[ResourceRecord]:
        """List records of ``kind``; ``namespace=None`` means all namespaces."""
        ...

    def get_resource(self, kind: ResourceKind, namespace: str, name: str) -> ResourceRecord:
        """Return a single record by name."""
        ...


def sort_newest_first(records: Iterable[ResourceRecord]) -> list[ResourceRecord]:
    """
    Order records newest-first by creation time.

    Records without a creation time are placed after all timestamped ones
    and keep their original relative order.
    """
    records = list(records)
    dated = [r for r in records if r.created_at is not None]
    undated = [r for r in records if r.created_at is None]
    # sorted() is stable with reverse=True, so equal timestamps keep backend order
    dated = sorted(dated, key=lambda r: r.created_at, reverse=True)
    return dated + undated


def list_resources(
    adapter: ResourcesAdapter,
    kind: ResourceKind,
    query: ListQuery,
) -> list[ResourceRecord]:
    """
    List resources of a kind according to ``query``.

    Args:
        adapter: Backend adapter used to check namespaces and list records.
        kind: Resource kind to list.
        query: Namespace scope and optional limit.

    Returns:
        Records ordered newest-first, undated records last.

    Raises:
        NamespaceNotFound: If a specific namespace was requested and the
            backend does not know it.
        BackendError: Propagated unchanged from the adapter.
    """
    if query.all_namespaces:
        namespace = None
    else:
        namespace = query.namespace
        if namespace and not adapter.namespace_exists(namespace):
            raise NamespaceNotFound(namespace)

    logger.debug(
        "listing %s namespace=%s limit=%s",
        kind.plural,
        namespace if namespace is not None else "<all>",
        query.limit,
    )
    records = adapter.list_resources(kind, namespace=namespace, limit=query.limit)
    return sort_newest_first(records)


def listed_rows(records: Iterable[ResourceRecord], now: datetime) -> list[ListedRow]:
    """Pair each record with its computed age and status, keeping order."""
    return [
        ListedRow(
            name=r.name,
            namespace=r.namespace,
            url=r.address or "",
            age=format_age(r.created_at, now),
            status=evaluate_status(r.conditions),
        )
        for r in records
    ]
