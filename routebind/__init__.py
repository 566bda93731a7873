"""
ROUTEBIND - Route parameter binding for Python handlers

Turns raw route parameters into the typed arguments a handler class asks
for: string-backed enums become members, routable types become the
records the route identifies (scoped to their parent when asked), and
everything else comes from a small DI container.

Minimal Quick Start:
    from routebind import Binder, Route, using_route

    route = Route.from_pattern("users/{user}/dogs/{dog}", "/users/1/dogs/2", scoped=True)
    with using_route(route):
        page = Binder.make(DogPage)
        data = Binder.call(DogController, "show")

Full Import Guide:
    # Core
    from routebind import Binder, bind, bind_and_call, Route, using_route, Container

    # Capabilities
    from routebind import UrlRoutable, SoftDeletable

    # SQLAlchemy routable models
    from routebind.db import db, Model, SoftDeletes

    # FastAPI
    from routebind.adapters.fastapi import Bound, install

    # Logging
    from routebind.logging import get_logger
"""

__version__ = "0.1.0"


from routebind.binder import Binder, RoutableLookup, bind, bind_and_call
from routebind.config import Config, DevConfig, ProdConfig, get_config, set_config
from routebind.container import Container
from routebind.contracts import Resolver, SoftDeletable, UrlRoutable
from routebind.exceptions import (
    BindingError,
    CircularDependency,
    EnumCaseNotFound,
    MethodNotFound,
    ModelNotFound,
    NotFoundError,
    RouteMismatch,
    RouteNotBound,
    UnresolvableDependency,
)
from routebind.route import Route, RoutePattern, current_route, using_route


# Lazy import for adapters (requires optional dependencies)
def __getattr__(name: str):
    """Lazy import adapters to avoid requiring optional dependencies."""
    if name in ("Bound", "install"):
        from routebind import adapters
        return getattr(adapters, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Core
    "Binder",
    "RoutableLookup",
    "bind",
    "bind_and_call",
    "Route",
    "RoutePattern",
    "current_route",
    "using_route",
    "Container",
    # Capabilities
    "UrlRoutable",
    "SoftDeletable",
    "Resolver",
    # Config
    "Config",
    "DevConfig",
    "ProdConfig",
    "get_config",
    "set_config",
    # Errors
    "BindingError",
    "NotFoundError",
    "EnumCaseNotFound",
    "ModelNotFound",
    "UnresolvableDependency",
    "CircularDependency",
    "MethodNotFound",
    "RouteNotBound",
    "RouteMismatch",
    # Adapters
    "Bound",
    "install",
    # Version
    "__version__",
]
