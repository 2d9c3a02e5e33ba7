"""Logging setup for runops.

Modules log through ``get_logger``; only the CLI calls ``setup_logging``.
Records go to stderr so they never mix with tables or ``-o`` output.
"""

from __future__ import annotations

import logging
import os

_HANDLER_NAME = "runops-stderr"


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``runops`` namespace."""
    if name == "runops" or name.startswith("runops."):
        return logging.getLogger(name)
    return logging.getLogger(f"runops.{name}")


def setup_logging(*, level: int | None = None) -> None:
    """Attach (or reconfigure) the stderr handler of the ``runops`` logger.

    ``level`` defaults to ``RUNOPS_LOG_LEVEL`` (DEBUG, INFO, ...), or WARNING
    when unset or unrecognized.
    """
    if level is None:
        level = logging.getLevelName(os.environ.get("RUNOPS_LOG_LEVEL", "").strip().upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("runops")
    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
    handler.setLevel(level)
    root.setLevel(level)
