"""Kubernetes backend for runops: namespace checks and custom-object list/get."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from kubernetes.client import ApiException

from runops._logging import get_logger
from runops.core.auth import KubernetesClients
from runops.core.config import DEFAULT_REQUEST_TIMEOUT_SECONDS
from runops.core.errors import BackendError
from runops.core.kinds import ResourceKind
from runops.core.resources import ResourceRecord, record_from_object

logger = get_logger(__name__)
T = TypeVar("T")


def _api_reason(exc: ApiException) -> str:
    reason = (exc.reason or "").strip() or exc.__class__.__name__
    return f"{exc.status} {reason}" if exc.status else reason


def _call(operation: str, func: Callable[[], T]) -> T:
    """Run a Kubernetes API call and convert client failures to BackendError."""
    try:
        return func()
    except ApiException as exc:
        raise BackendError(f"Failed to {operation}: {_api_reason(exc)}") from exc


class KubernetesResourcesAdapter:
    """Adapter around the Kubernetes core and custom-objects APIs."""

    def __init__(
        self,
        clients: KubernetesClients,
        *,
        request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self.clients = clients
        self.request_timeout_seconds = request_timeout_seconds

    def namespace_exists(self, namespace: str) -> bool:
        """Return True if the namespace can be read from the cluster."""
        try:
            self.clients.core_api.read_namespace(
                name=namespace,
                _request_timeout=self.request_timeout_seconds,
            )
        except ApiException as exc:
            if exc.status == 404:
                return False
            raise BackendError(
                f"Failed to read namespace '{namespace}': {_api_reason(exc)}"
            ) from exc
        return True

    def list_objects(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Return the raw list object; an empty ``namespace`` lists cluster-wide."""
        kwargs: dict[str, Any] = {"_request_timeout": self.request_timeout_seconds}
        if limit:
            kwargs["limit"] = limit

        api = self.clients.custom_api
        logger.debug("list %s namespace=%s limit=%s", kind.plural, namespace, limit)
        if namespace:
            return _call(
                f"list {kind.display_plural} in namespace '{namespace}'",
                lambda: api.list_namespaced_custom_object(
                    kind.group, kind.version, namespace, kind.plural, **kwargs
                ),
            )
        return _call(
            f"list {kind.display_plural} across all namespaces",
            lambda: api.list_cluster_custom_object(
                kind.group, kind.version, kind.plural, **kwargs
            ),
        )

    def list_resources(
        self,
        kind: ResourceKind,
        *,
        namespace: str | None,
        limit: int | None = None,
    ) -> list[ResourceRecord]:
        """List records of a kind in backend order."""
        payload = self.list_objects(kind, namespace=namespace, limit=limit)
        return [record_from_object(item) for item in payload.get("items") or []]

    def get_object(self, kind: ResourceKind, namespace: str, name: str) -> dict[str, Any]:
        """Return the raw object for a named resource."""
        api = self.clients.custom_api
        logger.debug("get %s %s/%s", kind.plural, namespace, name)
        return _call(
            f"get {kind.kind} '{name}' in namespace '{namespace}'",
            lambda: api.get_namespaced_custom_object(
                kind.group,
                kind.version,
                namespace,
                kind.plural,
                name,
                _request_timeout=self.request_timeout_seconds,
            ),
        )

    def get_resource(self, kind: ResourceKind, namespace: str, name: str) -> ResourceRecord:
        """Return a single record by name."""
        return record_from_object(self.get_object(kind, namespace, name))
