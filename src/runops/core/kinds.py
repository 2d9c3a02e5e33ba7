"""Resource kinds runops knows how to list and describe."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceKind:
    """
    Identifies a custom resource type on the control plane.

    Attributes:
        kind: Singular display name, e.g. ``PipelineRun``.
        plural: Plural resource name used in API paths.
        group: API group.
        version: API version within the group.
        aliases: Short command names (the first alias is the canonical
                 command name).
        detail_fields: Extra (label, dotted path) pairs shown by describe.
    """

    kind: str
    plural: str
    group: str
    version: str
    aliases: tuple[str, ...] = ()
    detail_fields: tuple[tuple[str, str], ...] = ()

    @property
    def display_plural(self) -> str:
        """Plural used in operator-facing messages, e.g. ``PipelineRuns``."""
        return f"{self.kind}s"

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


PIPELINE_RUN = ResourceKind(
    kind="PipelineRun",
    plural="pipelineruns",
    group="tekton.dev",
    version="v1",
    aliases=("pipelinerun", "pr", "pipelineruns"),
    detail_fields=(
        ("Pipeline Ref", "spec.pipelineRef.name"),
        ("Service Account", "spec.taskRunTemplate.serviceAccountName"),
        ("Started", "status.startTime"),
        ("Completed", "status.completionTime"),
    ),
)

TASK_RUN = ResourceKind(
    kind="TaskRun",
    plural="taskruns",
    group="tekton.dev",
    version="v1",
    aliases=("taskrun", "tr", "taskruns"),
    detail_fields=(
        ("Task Ref", "spec.taskRef.name"),
        ("Service Account", "spec.serviceAccountName"),
        ("Pod", "status.podName"),
        ("Started", "status.startTime"),
        ("Completed", "status.completionTime"),
    ),
)

EVENT_LISTENER = ResourceKind(
    kind="EventListener",
    plural="eventlisteners",
    group="triggers.tekton.dev",
    version="v1beta1",
    aliases=("eventlistener", "el", "eventlisteners"),
    detail_fields=(
        ("Service Account", "spec.serviceAccountName"),
        ("Service Type", "spec.resources.kubernetesResource.serviceType"),
    ),
)

KINDS: tuple[ResourceKind, ...] = (PIPELINE_RUN, TASK_RUN, EVENT_LISTENER)


def find_kind(name: str) -> ResourceKind:
    """Return the kind registered under ``name`` (kind, plural or alias)."""
    wanted = name.strip().lower()
    for kind in KINDS:
        if wanted in {kind.kind.lower(), kind.plural, *kind.aliases}:
            return kind
    raise ValueError(f"Unknown resource kind: '{name}'")
