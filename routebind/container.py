"""
Service Container

A minimal autowiring resolver: the DI collaborator the Binder uses to build
lookup-type instances and to satisfy class-typed parameters that don't come
from the route. Any object with a ``make(type_)`` method can be used
instead (see routebind.contracts.Resolver).
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Set, Type, TypeVar, Union

from routebind.descriptors import ClassDescriptor
from routebind.exceptions import CircularDependency, UnresolvableDependency

logger = logging.getLogger(__name__)

T = TypeVar("T")

Factory = Callable[["Container"], Any]


class Container:
    """
    Builds instances by type, autowiring constructor parameters.

    Usage:
        container = Container()
        container.singleton(Mailer, lambda c: SmtpMailer(host="localhost"))
        container.instance(Settings, settings)
        container.bind(Repository, SqlRepository)

        service = container.make(SignupService)  # Mailer/Settings/Repository injected
    """

    def __init__(self):
        self._factories: Dict[type, Factory] = {}
        self._shared: Set[type] = set()
        self._instances: Dict[type, Any] = {}
        self._building: List[type] = []

    def bind(
        self,
        abstract: type,
        concrete: Optional[Union[type, Factory]] = None,
        *,
        shared: bool = False,
    ) -> "Container":
        """
        Register how to build *abstract*.

        Args:
            abstract: The type parameters are annotated with
            concrete: A class to autowire, or a factory taking the container
                (defaults to *abstract* itself)
            shared: Build once and reuse the instance
        """
        concrete = abstract if concrete is None else concrete

        if isinstance(concrete, type):
            self._factories[abstract] = lambda container, cls=concrete: container.build(cls)
        elif callable(concrete):
            self._factories[abstract] = concrete
        else:
            raise TypeError(f"Cannot bind {abstract!r} to non-callable {concrete!r}")

        if shared:
            self._shared.add(abstract)
        else:
            self._shared.discard(abstract)
        self._instances.pop(abstract, None)
        return self

    def singleton(self, abstract: type, concrete: Optional[Union[type, Factory]] = None) -> "Container":
        """Register a shared binding."""
        return self.bind(abstract, concrete, shared=True)

    def instance(self, abstract: type, obj: Any) -> Any:
        """Register an existing object as the instance for *abstract*."""
        self._instances[abstract] = obj
        return obj

    def bound(self, abstract: type) -> bool:
        return abstract in self._instances or abstract in self._factories

    def make(self, type_: Type[T]) -> T:
        """
        Resolve an instance of *type_*.

        Raises:
            UnresolvableDependency: If the type (or one of its constructor
                parameters) can't be built
            CircularDependency: If building the type requires itself
        """
        if type_ in self._instances:
            return self._instances[type_]

        factory = self._factories.get(type_)
        obj = factory(self) if factory is not None else self.build(type_)

        if type_ in self._shared:
            self._instances[type_] = obj

        return obj

    def build(self, concrete: Type[T]) -> T:
        """Instantiate *concrete*, autowiring its constructor from type hints."""
        if not isinstance(concrete, type):
            raise UnresolvableDependency(concrete, "target is not a class")

        if inspect.isabstract(concrete):
            raise UnresolvableDependency(concrete, "class is abstract and has no binding")

        if concrete in self._building:
            raise CircularDependency(self._building + [concrete])

        self._building.append(concrete)
        try:
            descriptor = ClassDescriptor.of(concrete)
            logger.debug(f"Building {descriptor.name}")
            constructor = descriptor.constructor()
            if constructor is None:
                return descriptor.instantiate()

            args: List[Any] = []
            kwargs: Dict[str, Any] = {}
            for parameter in constructor.parameters():
                if parameter.has_default and not (
                    parameter.service_type and self.bound(parameter.service_type)
                ):
                    continue

                if parameter.service_type is None:
                    raise UnresolvableDependency(
                        concrete,
                        f"parameter '{parameter.name}' has no default and no buildable type",
                    )

                value = self.make(parameter.service_type)
                if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                    args.append(value)
                else:
                    kwargs[parameter.name] = value

            return descriptor.instantiate(args, kwargs)
        finally:
            self._building.pop()


__all__ = ["Container"]
