"""
Base Model Class for ROUTEBIND

Provides a base model with common fields and route model binding: every
Model is a UrlRoutable, so a handler parameter annotated with a Model
subclass receives the record the route value identifies.
"""

import decimal
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import Column, DateTime, Integer, inspect
from sqlalchemy.orm import Query, declarative_base, with_parent

from routebind.config import get_config
from routebind.contracts import SoftDeletable, UrlRoutable
from routebind.db.connection import db
from routebind.exceptions import BindingError
from routebind.utils import pluralize

Base = declarative_base()

# Column python types a raw route string is converted to before comparing
_ROUTE_KEY_COERCIONS = {
    int: int,
    float: float,
    decimal.Decimal: decimal.Decimal,
    uuid.UUID: uuid.UUID,
}


def _coerce_route_value(column, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    convert = _ROUTE_KEY_COERCIONS.get(python_type)
    return convert(value) if convert else value


def _first_by_route_key(query: Query, model: type, value: Any, key: str) -> Optional[Any]:
    """First row of *query* whose *key* column equals the route *value*."""
    column = inspect(model).columns.get(key)
    if column is None:
        raise BindingError(f"{model.__name__} has no column '{key}' to bind route values by")

    try:
        value = _coerce_route_value(column, value)
    except (ValueError, TypeError, ArithmeticError):
        # "abc" for an integer key matches nothing
        return None

    return query.filter(getattr(model, key) == value).first()


class Model(Base):
    """
    Base model class with common fields and route binding

    All models should inherit from this class to get:
    - id, created_at, updated_at fields
    - create() for inserting records
    - route model binding (looked up by route_key_name, ``id`` by default)

    Child bindings are resolved through the parent's relationship named
    after the pluralized route parameter (``dog`` -> ``User.dogs``), falling
    back to a relationship with the parameter's own name.

    Example:
        from routebind.db.models import Model
        from sqlalchemy import Column, String

        class User(Model):
            __tablename__ = 'users'
            route_key_name = 'slug'

            slug = Column(String(100), unique=True)
            name = Column(String(100), nullable=False)
    """

    __abstract__ = True

    # Column route values are looked up by; None uses Config.DEFAULT_ROUTE_KEY
    route_key_name = None

    # Common fields for all models
    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # =========================================================================
    # Route binding
    # =========================================================================

    def get_route_key_name(self) -> str:
        return type(self).route_key_name or get_config().DEFAULT_ROUTE_KEY

    def get_route_key(self) -> Any:
        return getattr(self, self.get_route_key_name())

    @classmethod
    def scope_bindings(cls, query: Query, with_trashed: bool = False) -> Query:
        """
        Apply the model's binding scopes to *query*.

        Soft-deleting models drop trashed rows unless *with_trashed* is set.
        """
        if issubclass(cls, SoftDeletes) and not with_trashed:
            query = query.filter(cls.deleted_at.is_(None))
        return query

    def binding_query(self, with_trashed: bool = False) -> Query:
        """Query route lookups for this model run against."""
        model = type(self)
        return model.scope_bindings(db.current_session().query(model), with_trashed)

    def resolve_route_binding(self, value: Any, field: Optional[str] = None) -> Optional[Any]:
        return _first_by_route_key(
            self.binding_query(), type(self), value, field or self.get_route_key_name()
        )

    def resolve_soft_deletable_route_binding(self, value: Any, field: Optional[str] = None) -> Optional[Any]:
        return _first_by_route_key(
            self.binding_query(with_trashed=True), type(self), value, field or self.get_route_key_name()
        )

    def resolve_child_route_binding(self, child_type: str, value: Any, field: Optional[str] = None) -> Optional[Any]:
        return self._resolve_child(child_type, value, field, with_trashed=False)

    def resolve_soft_deletable_child_route_binding(
        self, child_type: str, value: Any, field: Optional[str] = None
    ) -> Optional[Any]:
        return self._resolve_child(child_type, value, field, with_trashed=True)

    def _child_relationship(self, child_type: str):
        relationships = inspect(type(self)).relationships
        plural = pluralize(child_type)
        for name in (plural, child_type):
            if name in relationships:
                return relationships[name]

        raise BindingError(
            f"{type(self).__name__} has no '{plural}' relationship to resolve child binding '{child_type}'"
        )

    def _resolve_child(self, child_type: str, value: Any, field: Optional[str], with_trashed: bool):
        relationship = self._child_relationship(child_type)
        related = relationship.mapper.class_

        query = db.current_session().query(related).filter(
            with_parent(self, getattr(type(self), relationship.key))
        )
        query = related.scope_bindings(query, with_trashed)

        key = field or related.route_key_name or get_config().DEFAULT_ROUTE_KEY
        return _first_by_route_key(query, related, value, key)

    # =========================================================================
    # Persistence
    # =========================================================================

    @classmethod
    def create(cls, session, **kwargs):
        """
        Create a new record

        Example:
            user = User.create(session, name="John", slug="john")
        """
        instance = cls(**kwargs)
        session.add(instance)
        session.flush()
        return instance

    def __repr__(self):
        """String representation"""
        return f"<{self.__class__.__name__}(id={self.id})>"


class SoftDeletes:
    """
    Mixin for models whose records are soft-deleted.

    Trashed rows (deleted_at set) are excluded from route bindings unless
    the route allows trashed bindings.

    Example:
        class Dog(SoftDeletes, Model):
            __tablename__ = 'dogs'
    """

    deleted_at = Column(DateTime, nullable=True, default=None)

    def soft_delete(self, session):
        """Mark the record as deleted."""
        self.deleted_at = datetime.now(timezone.utc)
        session.flush()
        return self

    def restore(self, session):
        self.deleted_at = None
        session.flush()
        return self

    def trashed(self) -> bool:
        return self.deleted_at is not None


# SQLAlchemy's declarative metaclass can't be combined with ABCMeta
UrlRoutable.register(Model)
SoftDeletable.register(SoftDeletes)


__all__ = ["Base", "Model", "SoftDeletes"]
