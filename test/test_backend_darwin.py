from __future__ import annotations

import errno
import sys
import time

import pytest

from timesource._backends.darwin import DarwinBackend
from timesource.exceptions import (
    CalibrationError,
    ClockReadError,
    SleepError,
    UnsupportedPlatformError,
)

from .native_stubs import FakeMachLibc


class TestDarwinClocks:
    def test_now_reads_timeofday(self, darwin_backend: DarwinBackend) -> None:
        assert darwin_backend.now() == 1_700_000_000.25

    def test_timeofday_failure(
        self, darwin_backend: DarwinBackend, mach_libc: FakeMachLibc
    ) -> None:
        mach_libc.timeofday_error = errno.EFAULT
        with pytest.raises(ClockReadError) as excinfo:
            darwin_backend.now()

        assert excinfo.value.call == "gettimeofday"
        assert excinfo.value.errno == errno.EFAULT

    def test_monotonic_scales_by_timebase(
        self, darwin_backend: DarwinBackend, mach_libc: FakeMachLibc
    ) -> None:
        # 125/3 ns per tick, as on Apple Silicon.
        mach_libc.ticks = 3_000_000
        assert darwin_backend.monotonic() == pytest.approx(0.125)

        mach_libc.ticks = 6_000_000
        assert darwin_backend.monotonic() == pytest.approx(0.25)

    def test_unit_timebase(self) -> None:
        mach_libc = FakeMachLibc(ticks=1_500_000_000, numer=1, denom=1)
        backend = DarwinBackend(mach_libc, get_errno=mach_libc.get_errno)

        assert backend.monotonic() == pytest.approx(1.5)
        assert backend.resolution() == pytest.approx(1e-9)

    def test_resolution(self, darwin_backend: DarwinBackend) -> None:
        assert darwin_backend.resolution() == pytest.approx(125 / 3 * 1e-9)

    def test_timebase_failure(self) -> None:
        mach_libc = FakeMachLibc()
        mach_libc.timebase_result = 5  # KERN_FAILURE
        with pytest.raises(CalibrationError) as excinfo:
            DarwinBackend(mach_libc, get_errno=mach_libc.get_errno)

        assert excinfo.value.call == "mach_timebase_info"
        assert excinfo.value.errno is None

    def test_zero_denominator(self) -> None:
        mach_libc = FakeMachLibc(denom=0)
        with pytest.raises(CalibrationError):
            DarwinBackend(mach_libc, get_errno=mach_libc.get_errno)

    @pytest.mark.skipif(sys.platform != "darwin", reason="needs libSystem")
    def test_system_library(self) -> None:
        backend = DarwinBackend()

        assert abs(backend.now() - time.time()) < 2
        first = backend.monotonic()
        assert backend.monotonic() >= first
        backend.sleep(0)

    @pytest.mark.skipif(
        not sys.platform.startswith("linux"), reason="needs a C library without mach_*"
    )
    def test_system_library_without_mach(self) -> None:
        with pytest.raises(UnsupportedPlatformError) as excinfo:
            DarwinBackend()

        assert isinstance(excinfo.value.__cause__, AttributeError)


class TestDarwinSleep:
    def test_resumes_after_interruption(
        self, darwin_backend: DarwinBackend, mach_libc: FakeMachLibc
    ) -> None:
        mach_libc.interrupt(3, remaining=(0, 40_000_000))
        darwin_backend.sleep(0.5)

        assert mach_libc.sleep_requests == [(0, 500_000_000)] + [(0, 40_000_000)] * 3

    def test_failure(
        self, darwin_backend: DarwinBackend, mach_libc: FakeMachLibc
    ) -> None:
        mach_libc.sleep_outcomes = [(errno.EINVAL, (0, 0))]
        with pytest.raises(SleepError):
            darwin_backend.sleep(0.5)
