from __future__ import annotations

import ctypes
import logging
import sys
import typing

from ..exceptions import CalibrationError, ClockReadError, UnsupportedPlatformError
from ._posix import _TYPE_GET_ERRNO, PosixBackend, declare_nanosleep, load_libc

log = logging.getLogger(__name__)

MICROS_PER_SECOND = 1_000_000


class timeval(ctypes.Structure):
    _fields_ = [
        ("tv_sec", ctypes.c_long),
        ("tv_usec", ctypes.c_int32),
    ]


class mach_timebase_info_data_t(ctypes.Structure):
    _fields_ = [
        ("numer", ctypes.c_uint32),
        ("denom", ctypes.c_uint32),
    ]


def declare_mach_functions(lib: ctypes.CDLL) -> ctypes.CDLL:
    lib.gettimeofday.argtypes = [ctypes.POINTER(timeval), ctypes.c_void_p]
    lib.gettimeofday.restype = ctypes.c_int
    lib.mach_timebase_info.argtypes = [ctypes.POINTER(mach_timebase_info_data_t)]
    lib.mach_timebase_info.restype = ctypes.c_int
    lib.mach_absolute_time.argtypes = []
    lib.mach_absolute_time.restype = ctypes.c_uint64
    return lib


class DarwinBackend(PosixBackend):
    """
    ``gettimeofday()`` for the wall clock, ``mach_absolute_time()`` scaled by
    ``mach_timebase_info()`` for the monotonic clock and ``nanosleep()`` for
    sleeping.

    On Intel Macs the timebase is 1/1 and the scaling is a no-op; Apple
    Silicon reports 125/3.
    """

    name = "darwin"

    def __init__(
        self, libc: typing.Any = None, *, get_errno: _TYPE_GET_ERRNO | None = None
    ) -> None:
        if libc is None:
            # Anywhere but macOS the mach_* symbols are missing.
            try:
                libc = declare_mach_functions(declare_nanosleep(load_libc()))
            except (OSError, AttributeError) as e:
                raise UnsupportedPlatformError(sys.platform) from e

        super().__init__(libc, get_errno)
        self._gettimeofday = libc.gettimeofday
        self._mach_absolute_time = libc.mach_absolute_time

        timebase = mach_timebase_info_data_t(0, 0)
        # Returns a kern_return_t, not an errno.
        if libc.mach_timebase_info(timebase) != 0 or timebase.denom == 0:
            raise CalibrationError("mach_timebase_info")
        log.debug("Mach timebase is %d/%d", timebase.numer, timebase.denom)

        self._scale = timebase.numer / timebase.denom / 1e9

    def now(self) -> float:
        tv = timeval(0, 0)
        if self._gettimeofday(tv, None) != 0:
            raise ClockReadError("gettimeofday", self._get_errno())
        return tv.tv_sec + tv.tv_usec / MICROS_PER_SECOND

    def monotonic(self) -> float:
        return self._mach_absolute_time() * self._scale

    def resolution(self) -> float:
        return self._scale
