from __future__ import annotations

import typing


class Backend:
    """
    Specifies the desired backend and any arguments passed to its constructor.

    Projects that use timesource can subclass this interface to expose it to
    users. ``Backend("linux", use_librt=False)``, for instance, reads the
    clocks through the C library without looking for librt first.
    """

    def __init__(self, name: str, **kwargs: typing.Any) -> None:
        self.name = name
        self.kwargs = kwargs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Backend):
            return NotImplemented
        return self.name == other.name and self.kwargs == other.kwargs

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, kwargs={self.kwargs!r})"
