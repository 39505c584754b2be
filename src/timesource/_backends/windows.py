from __future__ import annotations

import ctypes
import logging
import sys
import typing

from ..exceptions import CalibrationError, ClockReadError, UnsupportedPlatformError
from ..util.duration import to_milliseconds
from ._base import BaseBackend

log = logging.getLogger(__name__)

# 100ns intervals between 1601-01-01 (the FILETIME epoch) and 1970-01-01.
DELTA_EPOCH_IN_100NS = 116444736000000000
HUNDRED_NS = 1e-7

# Sleep(INFINITE) never returns.
INFINITE = 0xFFFFFFFF

_TYPE_GET_LAST_ERROR = typing.Callable[[], int]


def load_kernel32() -> typing.Any:
    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]

    kernel32.GetSystemTimeAsFileTime.argtypes = [ctypes.POINTER(ctypes.c_uint64)]
    kernel32.GetSystemTimeAsFileTime.restype = None
    for func in (kernel32.QueryPerformanceCounter, kernel32.QueryPerformanceFrequency):
        func.argtypes = [ctypes.POINTER(ctypes.c_int64)]
        func.restype = ctypes.c_int
    kernel32.Sleep.argtypes = [ctypes.c_uint32]
    kernel32.Sleep.restype = None
    return kernel32


class WindowsBackend(BaseBackend):
    """
    ``GetSystemTimeAsFileTime()`` for the wall clock,
    ``QueryPerformanceCounter()`` for the monotonic clock and ``Sleep()`` for
    sleeping.

    ``Sleep()`` is not cut short by signals, so there is no resume loop here.

    :param kernel32:
        Object exposing the four functions above. Loaded from the system when
        not given.
    :param get_last_error:
        Returns ``GetLastError()`` for the last failed call,
        :func:`ctypes.get_last_error` by default.
    """

    name = "windows"

    def __init__(
        self,
        kernel32: typing.Any = None,
        *,
        get_last_error: _TYPE_GET_LAST_ERROR | None = None,
    ) -> None:
        if kernel32 is None:
            # ctypes has no WinDLL outside Windows, Cygwin included.
            try:
                kernel32 = load_kernel32()
            except (OSError, AttributeError) as e:
                raise UnsupportedPlatformError(sys.platform) from e

        self._get_system_time = kernel32.GetSystemTimeAsFileTime
        self._query_counter = kernel32.QueryPerformanceCounter
        self._sleep = kernel32.Sleep
        self._get_last_error = get_last_error or ctypes.get_last_error  # type: ignore[attr-defined]

        frequency = ctypes.c_int64(0)
        if kernel32.QueryPerformanceFrequency(frequency) == 0 or frequency.value <= 0:
            raise CalibrationError("QueryPerformanceFrequency", self._get_last_error())
        log.debug("Performance counter frequency is %dHz", frequency.value)

        # Precision loss is in the order of 1e-10.
        self._inv_frequency = 1.0 / frequency.value

    def now(self) -> float:
        filetime = ctypes.c_uint64(0)
        self._get_system_time(filetime)
        return (filetime.value - DELTA_EPOCH_IN_100NS) * HUNDRED_NS

    def monotonic(self) -> float:
        count = ctypes.c_int64(0)
        if self._query_counter(count) == 0:
            raise ClockReadError("QueryPerformanceCounter", self._get_last_error())
        return count.value * self._inv_frequency

    def resolution(self) -> float:
        return self._inv_frequency

    def sleep(self, seconds: float) -> None:
        millis = to_milliseconds(seconds)
        # Only durations past ~49.7 days need more than one call.
        while millis >= INFINITE:
            self._sleep(INFINITE - 1)
            millis -= INFINITE - 1
        self._sleep(millis)
