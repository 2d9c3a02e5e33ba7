"""Authentication helpers for the Kubernetes control plane.

This module centralizes creation of the Kubernetes API clients used by
runops and resolves the namespace the active kubeconfig context points at,
so commands can default ``-n`` the same way kubectl does.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from kubernetes import client, config
from kubernetes.config.config_exception import ConfigException

from runops._logging import get_logger
from runops.core.errors import RunopsError

logger = get_logger(__name__)

DEFAULT_NAMESPACE = "default"
SERVICE_ACCOUNT_NAMESPACE_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"


class AuthError(RunopsError):
    """Raised when Kubernetes client configuration fails."""


@dataclass(frozen=True)
class KubernetesClients:
    """API clients sharing one configured ApiClient."""

    api_client: client.ApiClient
    core_api: client.CoreV1Api
    custom_api: client.CustomObjectsApi


def _expand_kubeconfig_path(path: str | None) -> str | None:
    if not path:
        return None
    return os.path.expanduser(path)


def _format_auth_error(message: str, kubeconfig: str | None, context: str | None) -> str:
    """Return a user-friendly auth error message."""
    source = kubeconfig or "default kubeconfig search path"
    target = f" (context '{context}')" if context else ""
    return (
        f"Kubernetes authentication failed using '{source}'{target}: {message}\n"
        "Verify the kubeconfig is readable and the context exists."
    )


def get_clients(
    kubeconfig: str | None = None,
    context: str | None = None,
) -> KubernetesClients:
    """
    Load kubeconfig and return configured Kubernetes API clients.

    ``kubeconfig`` falls back to the standard search path (``KUBECONFIG``
    then ``~/.kube/config``); ``context`` falls back to the current context.
    When no kubeconfig is given and none can be loaded, the in-cluster
    service account configuration is tried before giving up.
    """
    expanded = _expand_kubeconfig_path(kubeconfig)
    try:
        config.load_kube_config(config_file=expanded, context=context)
    except (ConfigException, OSError) as exc:
        if expanded or not _load_incluster():
            reason = str(exc).strip() or exc.__class__.__name__
            raise AuthError(_format_auth_error(reason, expanded, context)) from exc

    api_client = client.ApiClient()
    return KubernetesClients(
        api_client=api_client,
        core_api=client.CoreV1Api(api_client),
        custom_api=client.CustomObjectsApi(api_client),
    )


def _load_incluster() -> bool:
    try:
        config.load_incluster_config()
    except ConfigException as exc:
        logger.debug("in-cluster configuration unavailable: %s", exc)
        return False
    logger.debug("using in-cluster service account configuration")
    return True


def current_namespace(kubeconfig: str | None = None, context: str | None = None) -> str:
    """
    Return the namespace of the selected kubeconfig context.

    Without a usable kubeconfig the service account namespace is used when
    running in a pod, and ``default`` otherwise.
    """
    expanded = _expand_kubeconfig_path(kubeconfig)
    try:
        contexts, active = config.list_kube_config_contexts(config_file=expanded)
    except (ConfigException, OSError):
        return _service_account_namespace() or DEFAULT_NAMESPACE

    selected = active
    if context:
        selected = next((c for c in contexts or [] if c.get("name") == context), None)
    if not selected:
        return DEFAULT_NAMESPACE
    return (selected.get("context") or {}).get("namespace") or DEFAULT_NAMESPACE


def _service_account_namespace() -> str | None:
    try:
        return Path(SERVICE_ACCOUNT_NAMESPACE_PATH).read_text(encoding="utf-8").strip() or None
    except OSError:
        return None
