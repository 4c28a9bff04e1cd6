from __future__ import annotations

import os
from typing import Optional

from .types import MkValue

DEBUG_ENV = "MONKEY_DEBUG"
RECURSION_LIMIT_ENV = "MONKEY_RECURSION_LIMIT"

_TRUTHY_FLAGS = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY_FLAGS


def debug_enabled() -> bool:
    """Debug logging for the CLI and REPL."""
    return _env_flag(DEBUG_ENV)


def recursion_limit() -> Optional[int]:
    """Interpreter recursion limit requested through the environment, if any."""
    raw = os.environ.get(RECURSION_LIMIT_ENV)
    if raw is None:
        return None

    try:
        value = int(raw.strip())
    except ValueError:
        return None

    return value if value > 0 else None


def render(value: MkValue) -> str:
    """User-facing text for a result value."""
    return repr(value)
