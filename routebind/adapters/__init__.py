"""
ROUTEBIND Adapters

Framework adapters. Loaded lazily so FastAPI is only required when used.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from routebind.adapters.fastapi import Bound, install, route_from_request

_FASTAPI_EXPORTS = {"Bound", "install", "route_from_request"}


def __getattr__(name: str):
    """Lazy import adapters only when accessed."""
    if name in _FASTAPI_EXPORTS:
        try:
            from routebind.adapters import fastapi as adapter
        except ImportError as e:
            raise ImportError(
                "FastAPI is not installed. Install it with: pip install routebind[fastapi]"
            ) from e
        return getattr(adapter, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["Bound", "install", "route_from_request"]
