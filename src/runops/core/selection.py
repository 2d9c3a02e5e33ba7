"""Target resolution for single-resource actions such as describe.

When the operator does not name a resource, runops falls back to a fixed
priority chain to pick one:

1. an explicit name always wins,
2. ``--last`` takes the most recent resource (or nothing, successfully),
3. otherwise the most recent ``limit`` resources are offered, with a prompt
   only when there is more than one.

Each step of the chain is modeled as a ResolutionMode with its own handler,
so that the mode chosen for a request can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

from runops._logging import get_logger
from runops.core.config import DEFAULT_DESCRIBE_LIMIT
from runops.core.errors import InvalidLimit, NoResourcesFound, SelectionAborted
from runops.core.kinds import ResourceKind
from runops.core.listing import ListQuery, ResourcesAdapter, list_resources
from runops.core.resources import ResourceRecord

logger = get_logger(__name__)


class ResolutionMode(str, Enum):
    """
    How a target name is obtained.

    Values:
        EXPLICIT: The caller passed the name.
        LAST_ONLY: The most recent resource is taken without asking.
        INTERACTIVE: The operator picks from a radio list.
        FUZZY: The operator picks from a type-to-filter list.
    """

    EXPLICIT = "explicit"
    LAST_ONLY = "last"
    INTERACTIVE = "interactive"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class SelectionRequest:
    """
    What the caller asked for.

    Attributes:
        names: Positional names given on the command line.
        last: Take the most recent resource.
        limit: Number of recent resources to offer when prompting.
        fuzzy: Prompt with a type-to-filter list instead of a radio list.
    """

    names: tuple[str, ...] = ()
    last: bool = False
    limit: int = DEFAULT_DESCRIBE_LIMIT
    fuzzy: bool = False


@dataclass(frozen=True)
class SelectionState:
    """
    Outcome of one resolution.

    Attributes:
        mode: The mode that produced the outcome.
        candidate_names: Names that were considered, in listing order.
        chosen_name: The resolved target, or None for a no-op.
        message: Informational message for the operator on a no-op.
    """

    mode: ResolutionMode
    candidate_names: tuple[str, ...] = ()
    chosen_name: str | None = None
    message: str | None = None

    @property
    def resolved(self) -> bool:
        return self.chosen_name is not None


class CandidatePrompt(Protocol):
    """Single-choice prompt over an ordered list of candidates."""

    def __call__(
        self,
        kind: ResourceKind,
        candidates: Sequence[ResourceRecord],
        *,
        fuzzy: bool,
    ) -> str | None:
        """Return the chosen name, or None when the operator aborts."""
        ...


def select_mode(request: SelectionRequest) -> ResolutionMode:
    """Return the resolution mode for a request, by strict priority."""
    if request.names:
        return ResolutionMode.EXPLICIT
    if request.last:
        return ResolutionMode.LAST_ONLY
    if request.fuzzy:
        return ResolutionMode.FUZZY
    return ResolutionMode.INTERACTIVE


class SelectionResolver:
    """Resolve the single resource a describe-style action should target."""

    def __init__(
        self,
        adapter: ResourcesAdapter,
        kind: ResourceKind,
        namespace: str,
        prompt: CandidatePrompt,
    ):
        self.adapter = adapter
        self.kind = kind
        self.namespace = namespace
        self.prompt = prompt

    def resolve(self, request: SelectionRequest) -> SelectionState:
        """
        Resolve a target for ``request``.

        Returns:
            A SelectionState; ``chosen_name`` is None only for ``--last``
            when there is nothing to describe.

        Raises:
            InvalidLimit: If a prompt would be needed and limit is below 1.
            NoResourcesFound: If there is nothing to choose from.
            SelectionAborted: If the prompt returned no choice.
            NamespaceNotFound, BackendError: Propagated from listing.
        """
        mode = select_mode(request)
        handlers = {
            ResolutionMode.EXPLICIT: self._explicit,
            ResolutionMode.LAST_ONLY: self._last_only,
            ResolutionMode.INTERACTIVE: self._choose,
            ResolutionMode.FUZZY: self._choose,
        }
        state = handlers[mode](request, mode)
        logger.debug(
            "resolved %s mode=%s chosen=%s candidates=%d",
            self.kind.kind,
            state.mode.value,
            state.chosen_name,
            len(state.candidate_names),
        )
        return state

    def _recent(self, limit: int) -> list[ResourceRecord]:
        # The backend applies its own limit in key order, so list everything
        # and truncate after the newest-first sort.
        records = list_resources(
            self.adapter,
            self.kind,
            ListQuery(namespace=self.namespace),
        )
        return records[:limit]

    def _explicit(self, request: SelectionRequest, mode: ResolutionMode) -> SelectionState:
        return SelectionState(mode=mode, chosen_name=request.names[0])

    def _last_only(self, request: SelectionRequest, mode: ResolutionMode) -> SelectionState:
        records = self._recent(1)
        if not records:
            return SelectionState(
                mode=mode,
                message=(
                    f"No {self.kind.display_plural} present in namespace "
                    f"{self.namespace}"
                ),
            )
        return SelectionState(
            mode=mode,
            candidate_names=(records[0].name,),
            chosen_name=records[0].name,
        )

    def _choose(self, request: SelectionRequest, mode: ResolutionMode) -> SelectionState:
        if request.limit < 1:
            raise InvalidLimit(
                f"limit was {request.limit} but must be a positive number"
            )

        records = self._recent(request.limit)
        names = tuple(r.name for r in records)

        if not records:
            raise NoResourcesFound(f"No {self.kind.display_plural} found")

        if len(records) == 1:
            return SelectionState(mode=mode, candidate_names=names, chosen_name=names[0])

        chosen = self.prompt(
            self.kind,
            records,
            fuzzy=mode is ResolutionMode.FUZZY,
        )
        if not chosen:
            raise SelectionAborted(f"No {self.kind.kind} selected")

        return SelectionState(mode=mode, candidate_names=names, chosen_name=chosen)
