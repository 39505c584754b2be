from __future__ import annotations

import logging
import typing
import warnings

from ._backends import BaseBackend, load_backend, normalize_backend
from .exceptions import ClockResolutionWarning
from .util.duration import validate_duration

if typing.TYPE_CHECKING:
    from .backends import Backend

__all__ = ("TimeSource",)

log = logging.getLogger(__name__)

#: Monotonic clocks ticking slower than this trigger a ClockResolutionWarning.
MAX_RESOLUTION = 1e-6


class TimeSource:
    """
    Wall clock, monotonic clock and sleep, bound to one platform backend.

    The backend, its calibration data and the monotonic baseline are all
    settled in the constructor; once a ``TimeSource`` exists every method is
    usable and nothing about it changes, so it can be shared between threads
    without locking.

    :param backend:
        ``None`` to pick the backend for the running platform, a backend name
        (``"windows"``, ``"linux"`` or ``"darwin"``), a
        :class:`~timesource.Backend` specifier, or a backend instance.

    :raises UnsupportedPlatformError:
        If ``backend`` is ``None`` and the platform has no backend.
    :raises CalibrationError:
        If the backend's one-time calibration query fails.
    :raises ClockReadError:
        If the baseline reading fails.

    Example::

        >>> source = TimeSource()
        >>> start = source.clock()
        >>> source.sleep(0.25)
        >>> source.clock() - start >= 0.25
        True
    """

    def __init__(self, backend: Backend | str | BaseBackend | None = None) -> None:
        if isinstance(backend, BaseBackend):
            self._backend = backend
        else:
            self._backend = load_backend(normalize_backend(backend))
        log.debug("Using %r", self._backend)

        self._resolution = self._backend.resolution()
        if self._resolution > MAX_RESOLUTION:
            warnings.warn(
                f"The {self._backend.name} monotonic clock only ticks every "
                f"{self._resolution:.9f}s, clock() readings will be coarser "
                "than one microsecond.",
                ClockResolutionWarning,
                stacklevel=2,
            )

        #: Raw monotonic reading, in seconds, taken when this time source was
        #: created. :meth:`clock` reports time relative to it.
        self.start_clock: float = self._backend.monotonic()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self.backend_name!r})"

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def now(self) -> float:
        """
        Current wall-clock time as a UNIX timestamp with sub-second precision
        (~100us).

        Same time base as :func:`time.time` and independent of the timezone,
        but it jumps whenever the system clock is adjusted. Use it to compare
        instants across processes and machines, not to measure durations.
        """
        return self._backend.now()

    def clock(self) -> float:
        """
        Seconds elapsed since :attr:`start_clock` (~1us precision).

        Never decreases and isn't affected by adjustments of the system
        clock, but has no meaning outside of this process.
        """
        return self._backend.monotonic() - self.start_clock

    def sleep(self, seconds: float) -> None:
        """
        Block the calling thread for at least ``seconds`` (~10-100ms precision).

        Signals arriving meanwhile don't shorten the sleep. To suspend a
        coroutine instead of the whole thread use :func:`asyncio.sleep`.

        :raises InvalidDurationError: If ``seconds`` is negative, NaN or
            infinite.
        :raises SleepError: If the OS fails the sleep call.
        """
        self._backend.sleep(validate_duration(seconds))

    def resolution(self) -> float:
        """Duration of one monotonic clock tick, in seconds."""
        return self._resolution
