"""Application context management for the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from runops.cli.common.exits import exit_from_exc
from runops.cli.tui import select_resource
from runops.core.adapters.kubernetesresources import KubernetesResourcesAdapter
from runops.core.auth import AuthError, current_namespace, get_clients
from runops.core.config import Settings
from runops.core.listing import ResourcesAdapter
from runops.core.selection import CandidatePrompt


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class AppContext:
    """Application context holding the backend adapter and per-run settings."""

    namespace: str
    settings: Settings
    adapter: ResourcesAdapter
    prompt: CandidatePrompt = select_resource
    clock: Callable[[], datetime] = field(default=_utcnow)

    def resolve_namespace(self, namespace: str | None) -> str:
        """Return ``namespace`` or the context default when it is empty."""
        return namespace or self.namespace


def build_app_context(kubeconfig: str | None, context: str | None) -> AppContext:
    """Build and return the application context with Kubernetes clients and adapter.

    Args:
        kubeconfig: Optional kubeconfig path.
        context: Optional kubeconfig context name.

    Returns:
        AppContext: Application context with configured adapter.
    """
    settings = Settings.from_env()
    try:
        clients = get_clients(kubeconfig, context)
    except AuthError as exc:
        exit_from_exc(exc, code=1)
    adapter = KubernetesResourcesAdapter(
        clients,
        request_timeout_seconds=settings.request_timeout_seconds,
    )
    return AppContext(
        namespace=current_namespace(kubeconfig, context),
        settings=settings,
        adapter=adapter,
    )
