from __future__ import annotations

import typing


class BaseBackend:
    """
    One platform's way of reading the clocks and putting the calling thread
    to sleep. :class:`~timesource.TimeSource` talks to nothing else, so
    shipping support for another platform means extending this class and
    registering it in :mod:`timesource._backends._loader`.

    Any calibration data (counter frequency, timebase ratio) must be queried
    in ``__init__``, so a backend that was constructed successfully can serve
    every call afterwards.
    """

    #: Name the backend is registered under.
    name: typing.ClassVar[str]

    def now(self) -> float:
        """Seconds since the UNIX epoch, from the system's real-time clock."""
        raise NotImplementedError

    def monotonic(self) -> float:
        """Raw monotonic reading, converted to seconds.

        The origin is whatever the OS counter uses; it only means something
        relative to another reading from the same backend.
        """
        raise NotImplementedError

    def resolution(self) -> float:
        """Duration of one monotonic clock tick, in seconds."""
        raise NotImplementedError

    def sleep(self, seconds: float) -> None:
        """Block the calling thread for at least ``seconds``.

        ``seconds`` has already been validated as a finite float >= 0.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(name={self.name!r})>"
