from __future__ import annotations

import logging
import sys
import typing

from ..backends import Backend
from ..exceptions import UnsupportedPlatformError

if typing.TYPE_CHECKING:
    from ._base import BaseBackend

log = logging.getLogger(__name__)

_TYPE_LOADER = typing.Callable[[typing.Dict[str, typing.Any]], "BaseBackend"]


class Loader:
    def __init__(
        self, name: str, loader: _TYPE_LOADER, platforms: tuple[str, ...]
    ) -> None:
        self.name = name
        self.loader = loader
        # sys.platform prefixes this backend runs on.
        self.platforms = platforms

    def __call__(self, kwargs: dict[str, typing.Any]) -> BaseBackend:
        return self.loader(kwargs)

    def supports(self, platform: str) -> bool:
        return platform.startswith(self.platforms)


def load_windows_backend(kwargs: dict[str, typing.Any]) -> BaseBackend:
    from .windows import WindowsBackend

    return WindowsBackend(**kwargs)


def load_linux_backend(kwargs: dict[str, typing.Any]) -> BaseBackend:
    from .linux import LinuxBackend

    return LinuxBackend(**kwargs)


def load_darwin_backend(kwargs: dict[str, typing.Any]) -> BaseBackend:
    from .darwin import DarwinBackend

    return DarwinBackend(**kwargs)


def backend_directory() -> dict[str, Loader]:
    """
    We defer any native library loading until the last minute, so only the
    selected backend ever touches ctypes.
    """
    loaders = [
        Loader(
            name="windows",
            loader=load_windows_backend,
            platforms=("win32",),
        ),
        Loader(
            name="linux",
            loader=load_linux_backend,
            platforms=("linux",),
        ),
        Loader(
            name="darwin",
            loader=load_darwin_backend,
            platforms=("darwin",),
        ),
    ]
    return {loader.name: loader for loader in loaders}


def platform_backend_name(platform: str | None = None) -> str:
    """Name of the backend serving ``platform`` (``sys.platform`` by default).

    :raises UnsupportedPlatformError: If no backend serves the platform.
    """
    if platform is None:
        platform = sys.platform

    for loader in backend_directory().values():
        if loader.supports(platform):
            return loader.name

    raise UnsupportedPlatformError(platform)


def normalize_backend(backend: Backend | str | None) -> Backend:
    if backend is None:
        backend = Backend(name=platform_backend_name())
    elif not isinstance(backend, Backend):
        backend = Backend(name=backend)

    if backend.name not in backend_directory():
        raise ValueError(f"unknown backend specifier {backend.name}")

    return backend


def load_backend(backend: Backend) -> BaseBackend:
    loaders_by_name = backend_directory()
    loader = loaders_by_name[backend.name]
    log.debug("Loading %s time backend (%r)", loader.name, backend.kwargs)
    return loader(backend.kwargs)
