"""
Binder

Resolves a class's constructor, or one of its methods, against the current
route's parameters and invokes it.

Resolution order for the target method's parameters:

1. Name matching - a bag key equal to the parameter name, else its
   snake_case form.
2. Enum coercion - string-backed Enum parameters get the member whose
   value equals the route value (EnumCaseNotFound otherwise).
3. Routable coercion - UrlRoutable parameters get the record the route
   value identifies, scoped to the preceding route parameter when the route
   asks for it (ModelNotFound otherwise).
4. Service location - remaining class-typed parameters come from the
   container.

Usage:
    # GET /users/{user}/dogs/{dog}
    with using_route(Route.from_pattern("users/{user}/dogs/{dog}", "/users/1/dogs/2", scoped=True)):
        page = Binder.make(DogPage)                  # DogPage(user=<User 1>, dog=<Dog 2>)
        result = Binder.call(DogController, "show")  # DogController().show(user, dog)
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from routebind.config import Config
from routebind.container import Container
from routebind.contracts import Resolver, SoftDeletable, UrlRoutable
from routebind.descriptors import ClassDescriptor, MethodDescriptor, ParameterDescriptor
from routebind.exceptions import (
    EnumCaseNotFound,
    MethodNotFound,
    ModelNotFound,
    UnresolvableDependency,
)
from routebind.route import Route, current_route
from routebind.utils import merge_parameters, previous_value, snake_case

logger = logging.getLogger(__name__)

CONSTRUCTOR = "__init__"

# Marker for "leave this parameter to its default"
_SKIP = object()


@dataclass(frozen=True)
class RoutableLookup:
    """
    One routable lookup the Binder is about to perform.

    Attributes:
        parameter: Bag key being resolved
        value: Raw route value
        model: Lookup type (first UrlRoutable type of the parameter)
        parent: Resolved predecessor when the lookup is scoped, else None
        field: Binding field override from the route
        with_trashed: Use the soft-deletable lookup variant
    """

    parameter: str
    value: Any
    model: type
    parent: Optional[Any] = None
    field: Optional[str] = None
    with_trashed: bool = False

    @property
    def scoped(self) -> bool:
        return self.parent is not None

    @property
    def method(self) -> str:
        """Name of the UrlRoutable method that performs this lookup."""
        internal = Config.Internal
        if self.scoped:
            return internal.SOFT_DELETABLE_CHILD_BINDING_METHOD if self.with_trashed else internal.CHILD_BINDING_METHOD
        return internal.SOFT_DELETABLE_BINDING_METHOD if self.with_trashed else internal.BINDING_METHOD


class Binder:
    """
    Binds one constructor or method call against one route.

    A Binder holds the parameter bag for a single invocation; create a new
    one per call (Binder.make / Binder.call do).

    Args:
        route: Source of route parameters and binding options
        target: Class to instantiate, or an existing instance
        method: Method to call, "__init__" (default) for the constructor
        parameters: Extra parameters merged over the route's (overrides win)
        container: DI resolver (defaults to a fresh Container)
    """

    def __init__(
        self,
        route: Route,
        target: Any,
        method: Optional[str] = CONSTRUCTOR,
        parameters: Optional[Mapping[str, Any]] = None,
        container: Optional[Resolver] = None,
    ):
        self.route = route
        self.target = target
        self.container = container if container is not None else Container()
        self.descriptor = ClassDescriptor.of(target)
        self.parameters: Dict[str, Any] = merge_parameters(route.parameters(), parameters)

        self.method: Optional[MethodDescriptor] = self.descriptor.method(method or CONSTRUCTOR)
        if self.method is None and method not in (None, CONSTRUCTOR):
            raise MethodNotFound(self.descriptor.cls, method)

    @classmethod
    def call(
        cls,
        target: Any,
        method: str,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        route: Optional[Route] = None,
        container: Optional[Resolver] = None,
    ) -> Any:
        """
        Resolve and invoke *method* on *target*.

        A class is instantiated first (its constructor bound like any other
        call); an instance is used as-is.

        Returns:
            Whatever the method returns
        """
        route = route if route is not None else current_route()
        return cls(route, target, method, parameters, container).bind()

    @classmethod
    def make(
        cls,
        target: type,
        parameters: Optional[Mapping[str, Any]] = None,
        *,
        route: Optional[Route] = None,
        container: Optional[Resolver] = None,
    ) -> Any:
        """Resolve and construct an instance of *target*."""
        route = route if route is not None else current_route()
        return cls(route, target, CONSTRUCTOR, parameters, container).bind()

    def bind(self) -> Any:
        """Run the binding and perform the call."""
        if self.method is not None:
            self.bind_enums(self.method)
            self.bind_routables(self.method)

        instance = self.create_instance()

        if self.method is None or self.method.is_constructor:
            return instance

        args, kwargs = self.resolve_arguments(self.method)
        logger.debug(f"Calling {self.descriptor.name}.{self.method.name}")
        return getattr(instance, self.method.name)(*args, **kwargs)

    def create_instance(self) -> Any:
        """The target instance, building it through its constructor if needed."""
        if not isinstance(self.target, type):
            return self.target

        constructor = self.descriptor.constructor()
        if constructor is None:
            return self.descriptor.instantiate()

        args, kwargs = self.resolve_arguments(constructor)
        return self.descriptor.instantiate(args, kwargs)

    # =========================================================================
    # Name matching
    # =========================================================================

    def parameter_name(self, name: str) -> Optional[str]:
        """Bag key for parameter *name*: exact match first, then snake_case."""
        if name in self.parameters:
            return name

        snaked = snake_case(name)
        if snaked in self.parameters:
            return snaked

        return None

    # =========================================================================
    # Enum coercion
    # =========================================================================

    def bind_enums(self, method: MethodDescriptor) -> None:
        for parameter in method.parameters():
            if parameter.has_string_backed_enums():
                self.bind_enum(parameter)

    def bind_enum(self, parameter: ParameterDescriptor) -> None:
        name = self.parameter_name(parameter.name)
        if name is None:
            return

        # Only the first enum of a union is tried
        enum_type = parameter.string_backed_enums()[0]
        value = self.parameters[name]

        if isinstance(value, enum_type):
            return

        raw = str(value)
        try:
            member = enum_type(raw)
        except ValueError:
            logger.info(f"No {enum_type.__name__} case for '{name}' = {raw!r}")
            raise EnumCaseNotFound(enum_type, raw) from None

        self.parameters[name] = member
        logger.debug(f"Bound '{name}' to {member!r}")

    # =========================================================================
    # Routable coercion
    # =========================================================================

    def bind_routables(self, method: MethodDescriptor) -> None:
        for parameter in method.parameters(UrlRoutable):
            self.bind_routable(parameter)

    def bind_routable(self, parameter: ParameterDescriptor) -> None:
        name = self.parameter_name(parameter.name)
        if name is None:
            return

        value = self.parameters[name]

        # Already bound
        if isinstance(value, UrlRoutable):
            return

        model = parameter.types_matching(UrlRoutable)[0]
        instance = self.container.make(model)

        parent = previous_value(self.parameters, name)
        field = self.route.binding_field_for(name) or None
        scoped = isinstance(parent, UrlRoutable) and (
            self.route.enforces_scoped_bindings() or field is not None
        )

        lookup = RoutableLookup(
            parameter=name,
            value=value,
            model=model,
            parent=parent if scoped else None,
            field=field,
            with_trashed=self.route.allows_trashed_bindings() and isinstance(instance, SoftDeletable),
        )

        resolved = self.resolve_routable(instance, lookup)

        if resolved is None:
            logger.info(f"No {model.__name__} for '{name}' = {value!r}")
            raise ModelNotFound(model, [value], lookup)

        self.parameters[name] = resolved
        if lookup.scoped:
            logger.debug(f"Bound '{name}' to {resolved!r} as child of {lookup.parent!r}")
        else:
            logger.debug(f"Bound '{name}' to {resolved!r}")

    def resolve_routable(self, instance: UrlRoutable, lookup: RoutableLookup) -> Optional[Any]:
        """Perform *lookup*: on the parent when scoped, else on *instance*."""
        if lookup.scoped:
            return getattr(lookup.parent, lookup.method)(lookup.parameter, lookup.value, lookup.field)

        return getattr(instance, lookup.method)(lookup.value, lookup.field)

    # =========================================================================
    # Argument building (service-location fallback)
    # =========================================================================

    def resolve_arguments(self, method: MethodDescriptor) -> Tuple[List[Any], Dict[str, Any]]:
        """
        Build the call arguments for *method* from the bag.

        Matched parameters take their bag value; the rest go through
        resolve_dependency(). Parameters are passed positionally until one
        is left to its default, keyword-only ones always by name. Unmatched
        bag entries go to ``**kwargs`` when the method accepts it.
        """
        matched = {}
        for parameter in method.parameters():
            key = self.parameter_name(parameter.name)
            if key is not None:
                matched[parameter.name] = key
        claimed: Set[str] = set(matched.values())

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        positional = True

        for parameter in method.parameters():
            if parameter.name in matched:
                value = self.parameters[matched[parameter.name]]
            else:
                value = self.resolve_dependency(method, parameter, claimed)
                if value is _SKIP:
                    positional = False
                    continue

            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY or (
                positional and not parameter.is_keyword_only
            ):
                args.append(value)
            else:
                kwargs[parameter.name] = value

        if method.accepts_var_keyword:
            for key, value in self.parameters.items():
                if key not in claimed and key not in kwargs and method.parameter(key) is None:
                    kwargs[key] = value

        return args, kwargs

    def resolve_dependency(
        self, method: MethodDescriptor, parameter: ParameterDescriptor, claimed: Set[str]
    ) -> Any:
        """
        Value for a parameter the route didn't name.

        A bag value that already is an instance of the parameter's type is
        used first, then the container builds one. Parameters with a
        default keep it.

        Raises:
            UnresolvableDependency: Required parameter nothing can satisfy
        """
        service = parameter.service_type

        if service is not None:
            for key, value in self.parameters.items():
                if key not in claimed and isinstance(value, service):
                    claimed.add(key)
                    return value

        if parameter.has_default:
            return _SKIP

        if service is not None:
            return self.container.make(service)

        raise UnresolvableDependency(
            self.descriptor.cls,
            f"parameter '{parameter.name}' of {method.name}() is not a route parameter "
            f"and has no buildable type",
        )


def bind(target: type, parameters: Optional[Mapping[str, Any]] = None, **options) -> Any:
    """Shorthand for Binder.make()."""
    return Binder.make(target, parameters, **options)


def bind_and_call(target: Any, method: str, parameters: Optional[Mapping[str, Any]] = None, **options) -> Any:
    """Shorthand for Binder.call()."""
    return Binder.call(target, method, parameters, **options)


__all__ = ["Binder", "RoutableLookup", "bind", "bind_and_call"]
