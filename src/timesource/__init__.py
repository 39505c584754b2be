"""
Wall clock, monotonic clock and sleep with sub-second precision on Windows, Linux and macOS
"""

# Set default logging handler to avoid "No handler found" warnings.
import logging
import warnings
from logging import NullHandler
from typing import TextIO, Type

from . import exceptions
from ._version import __version__
from .backends import Backend
from .source import TimeSource

__license__ = "MIT"
__version__ = __version__

__all__ = (
    "Backend",
    "TimeSource",
    "add_stderr_logger",
    "clock",
    "default_time_source",
    "disable_warnings",
    "now",
    "resolution",
    "sleep",
    "start_clock",
)

logging.getLogger(__name__).addHandler(NullHandler())


def add_stderr_logger(level: int = logging.DEBUG) -> "logging.StreamHandler[TextIO]":
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    # This method needs to be in this __init__.py to get the __name__ correct
    # even if timesource is vendored within another package.
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


# ... Clean up.
del NullHandler


# All warning filters *must* be appended unless you're really certain that they
# shouldn't be: otherwise, it's very hard for users to use most Python
# mechanisms to silence them.
# ClockResolutionWarning's don't vary between calls, so we keep it default.
warnings.simplefilter("default", exceptions.ClockResolutionWarning, append=True)


def disable_warnings(category: Type[Warning] = exceptions.TimeSourceWarning) -> None:
    """
    Helper for quickly disabling all timesource warnings.
    """
    warnings.simplefilter("ignore", category)


# Picks the platform backend and captures the clock() baseline. Fails the
# import on unsupported platforms rather than on first use.
_DEFAULT_SOURCE = TimeSource()

#: Raw monotonic reading taken when timesource was imported; the origin of
#: :func:`clock`.
start_clock = _DEFAULT_SOURCE.start_clock


def default_time_source() -> TimeSource:
    """
    The module-global :class:`TimeSource` backing :func:`now`, :func:`clock`
    and :func:`sleep`.
    """
    return _DEFAULT_SOURCE


def now() -> float:
    """
    Current time as a UNIX timestamp with ~100us precision. Like
    :func:`time.time`, it follows adjustments of the system clock.
    """
    return _DEFAULT_SOURCE.now()


def clock() -> float:
    """
    Monotonic seconds since timesource was imported, with ~1us precision.
    Successive values never decrease.
    """
    return _DEFAULT_SOURCE.clock()


def sleep(seconds: float) -> None:
    """
    Suspend the calling thread for at least ``seconds``, resuming after any
    signal interruption until the full duration has passed.
    """
    _DEFAULT_SOURCE.sleep(seconds)


def resolution() -> float:
    """
    Tick size of the monotonic clock behind :func:`clock`, in seconds.
    """
    return _DEFAULT_SOURCE.resolution()
