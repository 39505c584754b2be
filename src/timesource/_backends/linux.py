from __future__ import annotations

import ctypes
import ctypes.util
import logging
import sys
import typing

from ..exceptions import CalibrationError, ClockReadError, UnsupportedPlatformError
from ._posix import (
    _TYPE_GET_ERRNO,
    PosixBackend,
    declare_nanosleep,
    load_libc,
    timespec,
)

log = logging.getLogger(__name__)

# <linux/time.h>
CLOCK_REALTIME = 0
CLOCK_MONOTONIC = 1


def declare_clock_functions(lib: ctypes.CDLL) -> ctypes.CDLL:
    for func in (lib.clock_gettime, lib.clock_getres):
        func.argtypes = [ctypes.c_int, ctypes.POINTER(timespec)]
        func.restype = ctypes.c_int
    return lib


def load_clock_library(libc: ctypes.CDLL, use_librt: bool = True) -> ctypes.CDLL:
    """
    glibc older than 2.17 only ships ``clock_gettime()`` in librt, so look
    there first and settle for the C library when librt is missing.
    """
    if use_librt:
        path = ctypes.util.find_library("rt")
        if path is not None:
            try:
                return declare_clock_functions(ctypes.CDLL(path, use_errno=True))
            except (OSError, AttributeError) as e:
                log.debug("Could not use %s (%s), falling back to libc", path, e)
    return declare_clock_functions(libc)


class LinuxBackend(PosixBackend):
    """
    ``clock_gettime(CLOCK_REALTIME)`` for the wall clock,
    ``clock_gettime(CLOCK_MONOTONIC)`` for the monotonic clock and
    ``nanosleep()`` for sleeping.

    :param libc:
        Object exposing ``clock_gettime``, ``clock_getres`` and ``nanosleep``.
        Loaded from the system when not given.
    :param use_librt:
        Whether to look up the clock functions in librt before the C library.
        Ignored when ``libc`` is given.
    :param get_errno:
        Returns the errno of the last failed call, :func:`ctypes.get_errno`
        by default.
    """

    name = "linux"

    def __init__(
        self,
        libc: typing.Any = None,
        *,
        use_librt: bool = True,
        get_errno: _TYPE_GET_ERRNO | None = None,
    ) -> None:
        if libc is None:
            try:
                libc = declare_nanosleep(load_libc())
                clock_lib = load_clock_library(libc, use_librt=use_librt)
            except (OSError, AttributeError) as e:
                raise UnsupportedPlatformError(sys.platform) from e
        else:
            clock_lib = libc

        super().__init__(libc, get_errno)
        self._clock_gettime = clock_lib.clock_gettime

        res = timespec(0, 0)
        if clock_lib.clock_getres(CLOCK_MONOTONIC, res) != 0:
            raise CalibrationError("clock_getres", self._get_errno())
        self._resolution = res.to_seconds()
        log.debug("CLOCK_MONOTONIC resolution is %.9fs", self._resolution)

    def _gettime(self, clock_id: int) -> float:
        ts = timespec(0, 0)
        if self._clock_gettime(clock_id, ts) != 0:
            raise ClockReadError("clock_gettime", self._get_errno())
        return ts.to_seconds()

    def now(self) -> float:
        return self._gettime(CLOCK_REALTIME)

    def monotonic(self) -> float:
        return self._gettime(CLOCK_MONOTONIC)

    def resolution(self) -> float:
        return self._resolution
