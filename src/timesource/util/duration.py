from __future__ import annotations

import math
import numbers
from fractions import Fraction

from ..exceptions import InvalidDurationError

NANOS_PER_SECOND = 1_000_000_000
MILLIS_PER_SECOND = 1_000


def validate_duration(seconds: float) -> float:
    """Check that a sleep duration is usable and return it as a float.

    :raises TypeError: If ``seconds`` is not a real number. Booleans are
        rejected even though they are integers.
    :raises InvalidDurationError: If ``seconds`` is negative, NaN or infinite.
    """
    # Booleans are ints in Python, but sleep(True) is almost certainly a bug.
    if isinstance(seconds, bool) or not isinstance(seconds, numbers.Real):
        raise TypeError(
            f"Sleep duration must be an int or float, not {type(seconds).__name__}"
        )

    value = float(seconds)
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidDurationError(seconds)
    return value


def split_seconds(seconds: float) -> tuple[int, int]:
    """Split a non-negative duration into whole seconds and nanoseconds.

    The nanosecond part is rounded up from the exact value of the float, so
    the pair never describes a shorter duration than ``seconds``. A carry
    into the seconds part keeps the nanoseconds within ``[0, 1e9)``, which is
    what ``nanosleep`` accepts.
    """
    exact = Fraction(seconds)
    whole = math.floor(exact)
    nanos = math.ceil((exact - whole) * NANOS_PER_SECOND)
    if nanos >= NANOS_PER_SECOND:
        whole += 1
        nanos -= NANOS_PER_SECOND
    return int(whole), int(nanos)


def to_milliseconds(seconds: float) -> int:
    """Whole milliseconds for ``seconds``, rounded up."""
    return int(math.ceil(seconds * MILLIS_PER_SECOND))
