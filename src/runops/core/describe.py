"""Sequencing for describe: resolve a target, then hand it to a renderer."""

from __future__ import annotations

from typing import Callable

from runops.core.selection import SelectionRequest, SelectionResolver, SelectionState


def describe_resource(
    resolver: SelectionResolver,
    request: SelectionRequest,
    *,
    output: str | None,
    print_object: Callable[[str, str], None],
    render_description: Callable[[str], None],
    notify: Callable[[str], None],
) -> SelectionState:
    """
    Resolve the describe target and render it.

    No formatting happens here. A requested structured ``output`` format
    goes to ``print_object(name, output)``; otherwise the human description
    renderer is called with the resolved name. When resolution is a no-op
    (``--last`` with nothing to describe) only ``notify`` is called.

    Returns:
        The SelectionState produced by the resolver.
    """
    state = resolver.resolve(request)

    if state.chosen_name is None:
        if state.message:
            notify(state.message)
        return state

    if output:
        print_object(state.chosen_name, output)
    else:
        render_description(state.chosen_name)

    return state
