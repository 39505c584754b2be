from __future__ import annotations

import functools
import os
import platform
import signal
import typing
import warnings

import pytest

from timesource.exceptions import TimeSourceWarning

_TYPE_TEST = typing.Callable[..., typing.Any]

# We use time bounds in two different ways in our tests
#
# 1. To make sure a call returns promptly (sleep(0), back-to-back clock()
#    reads) we use a short bound.
# 2. To make sure a sleep does not overshoot wildly we use a generous upper
#    bound, even more so on CI where runners can be really slow.
SHORT_BOUND = 0.005
LONG_BOUND = 0.01
BASELINE_BOUND = 0.001
if os.environ.get("CI") or os.environ.get("GITHUB_ACTIONS") == "true":
    SHORT_BOUND = 0.05
    LONG_BOUND = 0.1
    BASELINE_BOUND = 0.05

# Tolerance between now() and an independent reading of the system clock.
WALL_CLOCK_TOLERANCE = 2.0

HAS_SETITIMER = hasattr(signal, "setitimer")


def clear_warnings(cls: type[Warning] = TimeSourceWarning) -> None:
    new_filters = []
    for f in warnings.filters:
        if issubclass(f[2], cls):
            continue
        new_filters.append(f)
    warnings.filters[:] = new_filters


def notWindows(test: _TYPE_TEST) -> _TYPE_TEST:
    """Skips this test on Windows"""

    @functools.wraps(test)
    def wrapper(*args: typing.Any, **kwargs: typing.Any) -> typing.Any:
        msg = f"{test.__name__} does not run on Windows"
        if platform.system() == "Windows":
            pytest.skip(msg)
        return test(*args, **kwargs)

    return wrapper


def requires_setitimer(test: _TYPE_TEST) -> _TYPE_TEST:
    """Skips this test where signals can't be scheduled with setitimer()"""

    @functools.wraps(test)
    def wrapper(*args: typing.Any, **kwargs: typing.Any) -> typing.Any:
        if not HAS_SETITIMER:
            pytest.skip(f"{test.__name__} needs setitimer() support")
        return test(*args, **kwargs)

    return wrapper
