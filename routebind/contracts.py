"""
ROUTEBIND Contracts

Capabilities the Binder checks for when deciding how to coerce a route
value. They are checked with issubclass()/isinstance(), so a class may
implement them directly or be registered as a virtual subclass (the
SQLAlchemy models in routebind.db do the latter).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, Type, TypeVar, runtime_checkable

T = TypeVar("T")


class UrlRoutable(ABC):
    """
    A type that can turn a raw route value into an instance of itself.

    Example:
        class Team(UrlRoutable):
            def get_route_key(self):
                return self.slug

            def get_route_key_name(self):
                return "slug"

            def resolve_route_binding(self, value, field=None):
                return TEAMS.get(value)

            def resolve_child_route_binding(self, child_type, value, field=None):
                return self.members.get(value)
    """

    @abstractmethod
    def get_route_key(self) -> Any:
        """Value of this instance's route key."""

    @abstractmethod
    def get_route_key_name(self) -> str:
        """Name of the field used for route lookups when none is configured."""

    @abstractmethod
    def resolve_route_binding(self, value: Any, field: Optional[str] = None) -> Optional[Any]:
        """
        Resolve a route value to an instance.

        Args:
            value: Raw route value
            field: Binding field override from the route, if any

        Returns:
            The resolved instance, or None when nothing matches
        """

    @abstractmethod
    def resolve_child_route_binding(
        self, child_type: str, value: Any, field: Optional[str] = None
    ) -> Optional[Any]:
        """
        Resolve a route value as a child scoped to this (parent) instance.

        Args:
            child_type: Route parameter name of the child (e.g. "dog")
            value: Raw route value
            field: Binding field override from the route, if any

        Returns:
            The resolved child, or None when nothing matches
        """

    def resolve_soft_deletable_route_binding(
        self, value: Any, field: Optional[str] = None
    ) -> Optional[Any]:
        """Like resolve_route_binding, but soft-deleted records may match."""
        return self.resolve_route_binding(value, field)

    def resolve_soft_deletable_child_route_binding(
        self, child_type: str, value: Any, field: Optional[str] = None
    ) -> Optional[Any]:
        """Like resolve_child_route_binding, but soft-deleted children may match."""
        return self.resolve_child_route_binding(child_type, value, field)


class SoftDeletable(ABC):
    """
    Marker for routables whose records can be soft-deleted.

    When a route allows trashed bindings and the lookup type is
    SoftDeletable, the Binder uses the resolve_soft_deletable_* variants.
    """


@runtime_checkable
class Resolver(Protocol):
    """Anything that can build an instance for a type (the DI collaborator)."""

    def make(self, type_: Type[T]) -> T:
        ...


__all__ = ["UrlRoutable", "SoftDeletable", "Resolver"]
