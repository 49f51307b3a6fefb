"""Timezone-aware clock utilities.

All timestamps in swan-engine MUST be UTC-aware.  This module is the
single source of "now"; the engine takes it as an injectable callable
so tests can freeze time without patching.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)
