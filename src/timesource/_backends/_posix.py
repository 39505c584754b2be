from __future__ import annotations

import ctypes
import ctypes.util
import errno
import logging
import typing

from ..exceptions import SleepError
from ..util.duration import NANOS_PER_SECOND, split_seconds
from ._base import BaseBackend

log = logging.getLogger(__name__)

_TYPE_GET_ERRNO = typing.Callable[[], int]

# Largest value the tv_sec field below can hold.
MAX_TV_SEC = 2 ** (8 * ctypes.sizeof(ctypes.c_long) - 1) - 1


class timespec(ctypes.Structure):
    _fields_ = [
        ("tv_sec", ctypes.c_long),
        ("tv_nsec", ctypes.c_long),
    ]

    def to_seconds(self) -> float:
        return self.tv_sec + self.tv_nsec / NANOS_PER_SECOND


def load_libc() -> ctypes.CDLL:
    """
    Open the C library with errno tracking enabled. When it can't be found
    by name (static or musl based systems) the symbols already loaded into
    the interpreter process are used instead.
    """
    return ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)


def declare_nanosleep(lib: ctypes.CDLL) -> ctypes.CDLL:
    lib.nanosleep.argtypes = [ctypes.POINTER(timespec), ctypes.POINTER(timespec)]
    lib.nanosleep.restype = ctypes.c_int
    return lib


class PosixBackend(BaseBackend):
    """
    Shared ``nanosleep()`` based sleeping for the Linux and macOS backends.

    Subclasses provide the clocks. ``libc`` is any object exposing a
    ``nanosleep(request, remaining)`` callable with the C calling convention
    (return ``0`` on success, ``-1`` and set errno on failure); ``get_errno``
    returns the errno left behind by the last failed call.
    """

    def __init__(
        self, libc: typing.Any, get_errno: _TYPE_GET_ERRNO | None = None
    ) -> None:
        self._nanosleep = libc.nanosleep
        self._get_errno = get_errno or ctypes.get_errno

    def sleep(self, seconds: float) -> None:
        sec, nsec = split_seconds(seconds)
        # tv_sec would wrap past its C type, so very long sleeps are made of
        # several nanosleep() requests.
        while sec > MAX_TV_SEC:
            self._nanosleep_fully(MAX_TV_SEC, 0)
            sec -= MAX_TV_SEC
        self._nanosleep_fully(sec, nsec)

    def _nanosleep_fully(self, sec: int, nsec: int) -> None:
        request = timespec(sec, nsec)
        remaining = timespec(0, 0)

        # A signal cuts nanosleep() short with EINTR and leaves the unslept
        # time in ``remaining``: resume from there for as long as it happens.
        while self._nanosleep(request, remaining) != 0:
            err = self._get_errno()
            if err != errno.EINTR:
                raise SleepError("nanosleep", err)

            log.debug(
                "nanosleep() interrupted by a signal, resuming with %.9fs left",
                remaining.to_seconds(),
            )
            request.tv_sec = remaining.tv_sec
            request.tv_nsec = remaining.tv_nsec
