"""Environment-driven settings for runops.

Settings are read once per invocation and passed explicitly to the parts
that need them; the core never inspects the environment on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_DESCRIBE_LIMIT = 5
DEFAULT_REQUEST_TIMEOUT_SECONDS = 20

USE_FZF_ENV = "RUNOPS_USE_FZF"
DESCRIBE_LIMIT_ENV = "RUNOPS_DESCRIBE_LIMIT"
REQUEST_TIMEOUT_ENV = "RUNOPS_REQUEST_TIMEOUT"


def _positive_int(raw: str | None, default: int) -> int:
    """Parse a positive integer, falling back to ``default`` on bad input."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for a single runops invocation.

    Attributes:
        use_fzf: Default to fuzzy selection when describe has to prompt.
                 Enabled by the mere presence of ``RUNOPS_USE_FZF``.
        describe_limit: Default number of candidates offered by describe.
        request_timeout_seconds: Timeout applied to each backend request.
    """

    use_fzf: bool = False
    describe_limit: int = DEFAULT_DESCRIBE_LIMIT
    request_timeout_seconds: int = DEFAULT_REQUEST_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        return cls(
            use_fzf=USE_FZF_ENV in env,
            describe_limit=_positive_int(
                env.get(DESCRIBE_LIMIT_ENV), DEFAULT_DESCRIBE_LIMIT
            ),
            request_timeout_seconds=_positive_int(
                env.get(REQUEST_TIMEOUT_ENV), DEFAULT_REQUEST_TIMEOUT_SECONDS
            ),
        )
