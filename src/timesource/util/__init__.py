from __future__ import annotations

from .duration import (
    MILLIS_PER_SECOND,
    NANOS_PER_SECOND,
    split_seconds,
    to_milliseconds,
    validate_duration,
)

__all__ = (
    "MILLIS_PER_SECOND",
    "NANOS_PER_SECOND",
    "split_seconds",
    "to_milliseconds",
    "validate_duration",
)
