"""Core resource domain models plus status and age evaluation.

This module defines the immutable snapshots the rest of runops works with
(ResourceRecord, Condition, ListedRow) and the two pure evaluations applied
to them before display: readiness status and relative age. It is free of
Kubernetes client types and CLI concerns, so the same logic backs the CLI,
tests, and any other frontend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

AGE_PLACEHOLDER = "---"


class ConditionStatus(str, Enum):
    """
    Tri-state value carried by a status condition.

    Values:
        TRUE: The condition holds.
        FALSE: The condition does not hold.
        UNKNOWN: The controller has not decided yet.
    """

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Condition:
    """
    A single status assertion attached to a resource.

    Attributes:
        type: Condition type, for example ``Succeeded`` or ``Ready``.
        status: One of ``True``, ``False`` or ``Unknown`` as reported.
        reason: Short machine-oriented reason.
        message: Human-oriented explanation.
    """

    type: str
    status: str
    reason: str = ""
    message: str = ""


@dataclass(frozen=True)
class ResourceRecord:
    """
    Read-only snapshot of one backend resource.

    Attributes:
        name: Resource name, unique within its namespace.
        namespace: Namespace the resource lives in.
        created_at: Creation timestamp, or None when the backend has none.
        conditions: Status conditions in the order the backend returned them.
        address: Optional URL the resource is reachable at.
        labels: Resource labels.
        raw: The backend object the record was built from.
    """

    name: str
    namespace: str
    created_at: datetime | None = None
    conditions: tuple[Condition, ...] = ()
    address: str | None = None
    labels: Mapping[str, str] = field(default_factory=dict, compare=False)
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class ListedRow:
    """One display row derived from a ResourceRecord at render time."""

    name: str
    namespace: str
    url: str
    age: str
    status: str


def evaluate_status(conditions: tuple[Condition, ...] | list[Condition]) -> str:
    """
    Return the readiness of a resource from its conditions.

    The first condition is authoritative; the others are never consulted.

    Returns:
        The first condition's status verbatim, or an empty string when the
        resource has no conditions.
    """
    if not conditions:
        return ""
    return conditions[0].status


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_age(created_at: datetime | None, now: datetime) -> str:
    """
    Format the age of a resource relative to ``now``.

    Picks the coarsest unit whose value is at least one (``8d``, ``3h``,
    ``2m``, ``30s``). Only ``now`` is used as the reference clock so that
    output is reproducible against a frozen time.

    Args:
        created_at: Creation timestamp, or None when unknown.
        now: Reference time.

    Returns:
        A compact age string, or ``---`` when the creation time is unknown.
    """
    if created_at is None:
        return AGE_PLACEHOLDER

    total_seconds = int((_as_utc(now) - _as_utc(created_at)).total_seconds())
    if total_seconds < 0:
        return "0s"

    total_minutes, _ = divmod(total_seconds, 60)
    total_hours, _ = divmod(total_minutes, 60)
    total_days, _ = divmod(total_hours, 24)

    if total_days >= 1:
        return f"{total_days}d"
    if total_hours >= 1:
        return f"{total_hours}h"
    if total_minutes >= 1:
        return f"{total_minutes}m"
    return f"{total_seconds}s"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 timestamp as returned by the API server."""
    if not value:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    try:
        return _as_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    except ValueError:
        return None


def record_from_object(obj: Mapping[str, Any]) -> ResourceRecord:
    """
    Build a ResourceRecord from a custom object as returned by the API.

    Missing sections are tolerated: an object without ``status`` simply has
    no conditions and no address.
    """
    metadata = obj.get("metadata") or {}
    status = obj.get("status") or {}

    conditions = tuple(
        Condition(
            type=str(c.get("type") or ""),
            status=str(c.get("status") or ""),
            reason=str(c.get("reason") or ""),
            message=str(c.get("message") or ""),
        )
        for c in status.get("conditions") or []
    )

    address = status.get("address") or {}
    url = address.get("url") if isinstance(address, Mapping) else None

    return ResourceRecord(
        name=str(metadata.get("name") or ""),
        namespace=str(metadata.get("namespace") or ""),
        created_at=parse_timestamp(metadata.get("creationTimestamp")),
        conditions=conditions,
        address=url or None,
        labels=dict(metadata.get("labels") or {}),
        raw=obj,
    )


def lookup_path(obj: Mapping[str, Any], path: str) -> Any:
    """Return the value at a dotted path inside a nested mapping, or None."""
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current
