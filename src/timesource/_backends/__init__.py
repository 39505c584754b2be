from __future__ import annotations

from ._base import BaseBackend
from ._loader import load_backend, normalize_backend, platform_backend_name

__all__ = (
    "BaseBackend",
    "load_backend",
    "normalize_backend",
    "platform_backend_name",
)
