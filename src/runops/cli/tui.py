"""Terminal UI utilities for picking a resource to act on."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import questionary

from runops.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from runops.core.kinds import ResourceKind
from runops.core.resources import ResourceRecord, format_age

_MAX_NAME_WIDTH = 96


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _choice_title(record: ResourceRecord, *, name_width: int, now: datetime) -> str:
    """Format one candidate as `<name>  (age: <age>)` with aligned age column."""
    short_name = _truncate(record.name, _MAX_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  (age: {format_age(record.created_at, now)})"


def select_resource(
    kind: ResourceKind,
    candidates: Sequence[ResourceRecord],
    *,
    fuzzy: bool,
    now: datetime | None = None,
) -> str | None:
    """Display a single-choice prompt over candidate resources.

    In fuzzy mode the list is filtered as the operator types.

    Args:
        kind: Kind of the candidates, used in the prompt text.
        candidates: Records to choose from, in display order.
        fuzzy: Enable type-to-filter search.
        now: Reference time for the age column.

    Returns:
        The chosen resource name, or None if the prompt was cancelled.
    """
    now = now or datetime.now(timezone.utc)
    shown_names = [_truncate(r.name, _MAX_NAME_WIDTH) for r in candidates]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_choice_title(r, name_width=name_width, now=now),
            value=r.name,
        )
        for r in candidates
    ]

    instruction = "Type to filter, ↑/↓ then Enter" if fuzzy else "Use ↑/↓ then Enter"
    return questionary.select(
        f"Select {kind.kind.lower()}:",
        choices=choices,
        style=QUESTIONARY_STYLE_SELECT,
        qmark="✦",
        instruction=instruction,
        pointer="❯",
        use_search_filter=fuzzy,
        use_jk_keys=not fuzzy,
    ).ask()
