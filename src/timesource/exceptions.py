from __future__ import annotations

import os
from typing import Callable, Optional, Tuple

# Base Exceptions


class TimeSourceError(Exception):
    """Base exception used by this module."""

    pass


class TimeSourceWarning(Warning):
    """Base warning used by this module."""

    pass


_TYPE_REDUCE_RESULT = Tuple[Callable[..., object], Tuple[object, ...]]


class UnsupportedPlatformError(TimeSourceError):
    """Raised when no backend exists for the running platform."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"No time backend available for platform {platform!r}")

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.platform,)


class BackendError(TimeSourceError):
    """Base exception for failed native calls made by a backend.

    :param call: Name of the native function that failed.
    :param errno: The ``errno`` (or ``GetLastError()`` value on Windows)
        reported for the failure, or ``None`` if the OS did not report one.
    """

    def __init__(self, call: str, errno: Optional[int] = None) -> None:
        self.call = call
        self.errno = errno
        if errno:
            message = f"{call}() failed: [Errno {errno}] {os.strerror(errno)}"
        else:
            message = f"{call}() failed"
        super().__init__(message)

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.call, self.errno)


# Leaf Exceptions


class CalibrationError(BackendError):
    """Raised when a one-time clock calibration query fails at startup."""

    pass


class ClockReadError(BackendError):
    """Raised when reading the wall clock or the monotonic clock fails."""

    pass


class SleepError(BackendError):
    """Raised when a sleep call fails for a reason other than interruption."""

    pass


class InvalidDurationError(ValueError, TimeSourceError):
    """Raised when a sleep duration is negative, NaN or infinite."""

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(
            f"Sleep duration must be a finite number >= 0, not {seconds!r}"
        )

    def __reduce__(self) -> _TYPE_REDUCE_RESULT:
        # For pickling purposes.
        return self.__class__, (self.seconds,)


class ClockResolutionWarning(TimeSourceWarning):
    """Warned when the monotonic clock ticks slower than once per microsecond."""

    pass
