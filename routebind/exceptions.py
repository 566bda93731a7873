"""
ROUTEBIND Exceptions

Shared across the descriptors, Binder, Container and adapters so every
module raises and catches the same types.

Hierarchy:
    BindingError
    ├── NotFoundError (status_code = 404)
    │   ├── EnumCaseNotFound
    │   └── ModelNotFound
    ├── UnresolvableDependency
    │   └── CircularDependency
    ├── MethodNotFound
    ├── RouteNotBound
    └── RouteMismatch
"""

from typing import Any, Iterable, List, Optional


class BindingError(Exception):
    """Base for all routebind-specific errors."""


class NotFoundError(BindingError):
    """
    A route value could not be turned into what the handler asked for.

    The HTTP boundary is expected to answer these with a generic
    "resource not found" response. The core never does that translation.
    """

    status_code = 404


class EnumCaseNotFound(NotFoundError):  # noqa: N818
    """
    Raised when a route value matches no member of a string-backed enum.

    Example:
        >>> raise EnumCaseNotFound(Suit, "test4")
        EnumCaseNotFound: Case [test4] not found on Backed Enum [tests.Suit].
    """

    def __init__(self, enum_type: type, value: str):
        self.enum_type = enum_type
        self.value = value
        super().__init__(
            f"Case [{value}] not found on Backed Enum [{_qualname(enum_type)}]."
        )


class ModelNotFound(NotFoundError):  # noqa: N818
    """
    Raised when a routable lookup (plain or child) yields no result.

    Attributes:
        model: The lookup type that was asked to resolve the value
        ids: The raw route values that were looked up
        lookup: The RoutableLookup that failed, when raised by the Binder
    """

    def __init__(self, model: type, ids: Iterable[Any] = (), lookup: Optional[Any] = None):
        self.model = model
        self.ids: List[Any] = list(ids)
        self.lookup = lookup

        message = f"No query results for model [{_qualname(model)}]"
        if self.ids:
            message += " " + ", ".join(str(i) for i in self.ids)
        super().__init__(message)


class UnresolvableDependency(BindingError):
    """
    Raised when a parameter can be satisfied neither from the route nor by
    the DI resolver.
    """

    def __init__(self, target: Any, message: str):
        self.target = target
        name = _qualname(target) if isinstance(target, type) else str(target)
        super().__init__(f"Unresolvable dependency resolving [{name}]: {message}")


class CircularDependency(UnresolvableDependency):
    """Raised when autowiring revisits a type already being built."""

    def __init__(self, chain: List[type]):
        self.chain = chain
        path = " -> ".join(_qualname(t) for t in chain)
        super().__init__(chain[-1] if chain else None, f"circular dependency {path}")


class MethodNotFound(BindingError, AttributeError):  # noqa: N818
    """Raised when Binder.call targets a method the class does not define."""

    def __init__(self, cls: type, method: str):
        self.cls = cls
        self.method = method
        super().__init__(f"Method [{_qualname(cls)}.{method}] does not exist.")


class RouteNotBound(BindingError, LookupError):  # noqa: N818
    """Raised when no route was passed and none is bound to the current context."""

    def __init__(self, detail: str = "No route is bound to the current context."):
        super().__init__(detail)


class RouteMismatch(BindingError, ValueError):  # noqa: N818
    """Raised when a path does not match the route pattern it was checked against."""

    def __init__(self, pattern: str, path: str):
        self.pattern = pattern
        self.path = path
        super().__init__(f"Path '{path}' does not match route pattern '{pattern}'")


def _qualname(obj: Any) -> str:
    module = getattr(obj, "__module__", None)
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None) or repr(obj)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name


__all__ = [
    "BindingError",
    "NotFoundError",
    "EnumCaseNotFound",
    "ModelNotFound",
    "UnresolvableDependency",
    "CircularDependency",
    "MethodNotFound",
    "RouteNotBound",
    "RouteMismatch",
]
