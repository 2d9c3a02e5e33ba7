"""Error types raised by the runops core.

The core never exits or prints; it raises one of these and lets the CLI
boundary decide how the failure is surfaced to the operator.
"""


class RunopsError(RuntimeError):
    """Base class for all runops failures."""


class NamespaceNotFound(RunopsError):
    """Raised when a requested namespace does not exist in the cluster."""

    def __init__(self, namespace: str):
        super().__init__(f"Namespace '{namespace}' not found")
        self.namespace = namespace


class NoResourcesFound(RunopsError):
    """Raised when describe resolution has no candidate to pick from."""


class SelectionAborted(RunopsError):
    """Raised when the interactive prompt returns without a choice."""


class BackendError(RunopsError):
    """Raised when a list/get call against the control plane fails."""


class InvalidLimit(RunopsError, ValueError):
    """Raised when a candidate limit is not a positive number."""


class UnsupportedOutputFormat(RunopsError, ValueError):
    """Raised when an unknown structured output format is requested."""
