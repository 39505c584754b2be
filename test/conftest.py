from __future__ import annotations

import pytest

from timesource._backends.darwin import DarwinBackend
from timesource._backends.linux import LinuxBackend
from timesource._backends.windows import WindowsBackend

from .native_stubs import FakeKernel32, FakeLibc, FakeMachLibc, ScriptedBackend


@pytest.fixture
def libc() -> FakeLibc:
    return FakeLibc()


@pytest.fixture
def linux_backend(libc: FakeLibc) -> LinuxBackend:
    return LinuxBackend(libc, get_errno=libc.get_errno)


@pytest.fixture
def mach_libc() -> FakeMachLibc:
    return FakeMachLibc()


@pytest.fixture
def darwin_backend(mach_libc: FakeMachLibc) -> DarwinBackend:
    return DarwinBackend(mach_libc, get_errno=mach_libc.get_errno)


@pytest.fixture
def kernel32() -> FakeKernel32:
    return FakeKernel32()


@pytest.fixture
def windows_backend(kernel32: FakeKernel32) -> WindowsBackend:
    return WindowsBackend(kernel32, get_last_error=kernel32.get_last_error)


@pytest.fixture
def scripted_backend() -> ScriptedBackend:
    return ScriptedBackend()
