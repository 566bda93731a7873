"""
Route Parameter Source

A Route carries what the Binder needs from the router: the captured
parameters in route-declaration order plus the per-route binding options
(scoped bindings, trashed bindings, binding field overrides).

Routes can be built directly from captured values, or from a pattern such
as ``users/{user}/dogs/{dog:slug}`` matched against a path. ``{name:field}``
sets the binding field for that parameter.

The route for the current request can be bound to the context with
``using_route()`` so ``Binder.make()``/``Binder.call()`` find it without
passing it around.
"""

import functools
import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type

from routebind.config import Config, get_config
from routebind.exceptions import RouteMismatch, RouteNotBound



class RoutePattern:
    """
    A parsed route pattern.

    Example:
        pattern = RoutePattern("users/{user}/dogs/{dog:slug}")
        pattern.names            # ["user", "dog"]
        pattern.binding_fields   # {"dog": "slug"}
        pattern.match("/users/1/dogs/rex")  # {"user": "1", "dog": "rex"}
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.names: List[str] = []
        self.binding_fields: Dict[str, str] = {}
        self._regex = self._compile(pattern)

    def __repr__(self):
        return f"<RoutePattern '{self.pattern}'>"

    def _compile(self, pattern: str) -> "re.Pattern[str]":
        placeholder = re.compile(Config.Internal.PLACEHOLDER_PATTERN)
        parts = []
        position = 0
        normalized = pattern.strip("/")

        for found in placeholder.finditer(normalized):
            name, field = found.group("name"), found.group("field")
            if name in self.names:
                raise ValueError(f"Duplicate route parameter '{name}' in pattern '{pattern}'")

            parts.append(re.escape(normalized[position:found.start()]))
            parts.append(f"(?P<{name}>{Config.Internal.SEGMENT_PATTERN})")
            self.names.append(name)
            if field:
                self.binding_fields[name] = field
            position = found.end()

        parts.append(re.escape(normalized[position:]))
        return re.compile("".join(parts))

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """
        Captured parameters in pattern order, or None if *path* doesn't match.

        Leading and trailing slashes are ignored on both sides.
        """
        found = self._regex.fullmatch(path.strip("/"))
        if found is None:
            return None
        return {name: found.group(name) for name in self.names}


class Route:
    """
    Captured route parameters plus binding options.

    Args:
        parameters: Captured values, in route-declaration order
        pattern: The route pattern the values came from (informational)
        scoped: Enforce scoped child bindings (defaults to Config.SCOPED_BINDINGS)
        with_trashed: Allow soft-deleted records to bind
            (defaults to Config.ALLOW_TRASHED_BINDINGS)
        binding_fields: Per-parameter lookup field overrides
        config: Config class supplying the defaults (defaults to get_config())

    Example:
        route = Route.from_pattern("users/{user}/dogs/{dog}", "/users/1/dogs/2", scoped=True)
        route.parameters()               # {"user": "1", "dog": "2"}
        route.enforces_scoped_bindings() # True
    """

    def __init__(
        self,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        pattern: Optional[str] = None,
        scoped: Optional[bool] = None,
        with_trashed: Optional[bool] = None,
        binding_fields: Optional[Mapping[str, str]] = None,
        config: Optional[Type[Config]] = None,
    ):
        settings = config or get_config()

        self.pattern = pattern
        self._parameters: Dict[str, Any] = dict(parameters or {})
        self._scoped = settings.SCOPED_BINDINGS if scoped is None else bool(scoped)
        self._with_trashed = settings.ALLOW_TRASHED_BINDINGS if with_trashed is None else bool(with_trashed)
        self._binding_fields: Dict[str, str] = dict(binding_fields or {})

    def __repr__(self):
        options = []
        if self._scoped:
            options.append("scoped")
        if self._with_trashed:
            options.append("with_trashed")
        label = f" '{self.pattern}'" if self.pattern else ""
        return f"<Route{label} {self._parameters!r}{' ' + ','.join(options) if options else ''}>"

    @staticmethod
    @functools.lru_cache(maxsize=256)
    def compile(pattern: str) -> RoutePattern:
        """Parse (and cache) a route pattern."""
        return RoutePattern(pattern)

    @classmethod
    def from_pattern(cls, pattern: str, path: str, **options) -> "Route":
        """
        Match *path* against *pattern* and build a Route from the captures.

        Binding fields declared in the pattern (``{dog:slug}``) are merged
        with any passed in ``binding_fields``; explicit ones win.

        Raises:
            RouteMismatch: If the path doesn't match the pattern
        """
        compiled = cls.compile(pattern)
        captured = compiled.match(path)
        if captured is None:
            raise RouteMismatch(pattern, path)

        binding_fields = {**compiled.binding_fields, **(options.pop("binding_fields", None) or {})}
        return cls(captured, pattern=pattern, binding_fields=binding_fields, **options)

    def parameters(self) -> Dict[str, Any]:
        """Copy of the captured parameters, in route order."""
        return dict(self._parameters)

    def parameter(self, name: str, default: Any = None) -> Any:
        return self._parameters.get(name, default)

    def parameter_names(self) -> List[str]:
        return list(self._parameters)

    def enforces_scoped_bindings(self) -> bool:
        return self._scoped

    def allows_trashed_bindings(self) -> bool:
        return self._with_trashed

    def binding_field_for(self, name: str) -> Optional[str]:
        """Lookup field override for parameter *name*, if one is configured."""
        return self._binding_fields.get(name)

    def binding_fields(self) -> Dict[str, str]:
        return dict(self._binding_fields)

    def _copy(self, **changes) -> "Route":
        options = {
            "pattern": self.pattern,
            "scoped": self._scoped,
            "with_trashed": self._with_trashed,
            "binding_fields": self._binding_fields,
        }
        options.update(changes)
        return Route(self._parameters, **options)

    def scoped(self, binding_fields: Optional[Mapping[str, str]] = None) -> "Route":
        """Copy of this route that enforces scoped bindings."""
        fields = {**self._binding_fields, **(binding_fields or {})}
        return self._copy(scoped=True, binding_fields=fields)

    def with_trashed(self, allowed: bool = True) -> "Route":
        """Copy of this route that lets soft-deleted records bind."""
        return self._copy(with_trashed=allowed)


# =============================================================================
# Current route (request-scoped)
# =============================================================================

_current_route: ContextVar[Route] = ContextVar("routebind_route")


def current_route() -> Route:
    """
    Return the route bound to the current context.

    Raises:
        RouteNotBound: If called outside using_route() / a bound request
    """
    try:
        return _current_route.get()
    except LookupError:
        raise RouteNotBound() from None


@contextmanager
def using_route(route: Route) -> Iterator[Route]:
    """
    Bind *route* to the current context for the duration of the block.

    Usage:
        with using_route(Route.from_pattern("users/{user}", "/users/1")):
            controller = Binder.make(UserController)
    """
    token = _current_route.set(route)
    try:
        yield route
    finally:
        _current_route.reset(token)


__all__ = ["Route", "RoutePattern", "current_route", "using_route"]
