"""
Parameter Descriptor

Wraps a single constructor/method parameter and answers the questions the
Binder asks about its declared type(s).
"""

import inspect
import types
from enum import Enum
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin

_EMPTY = inspect.Parameter.empty
_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


def resolve_types(annotation: Any) -> Tuple[type, ...]:
    """
    Flatten a parameter annotation into the classes it declares.

    - A plain class yields a one-element tuple.
    - Union / ``X | Y`` / Optional yield one element per member, in
      declaration order, dropping ``None`` and anything that is not a plain
      class (Any, TypeVars, ``list[int]``, Literal, string forward refs).
    - ``Annotated[X, ...]`` is unwrapped to ``X``.
    - No annotation yields an empty tuple.
    """
    if annotation is _EMPTY or annotation is None:
        return ()

    if get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]

    if get_origin(annotation) in _UNION_ORIGINS:
        members = get_args(annotation)
    else:
        members = (annotation,)

    resolved = []
    for member in members:
        if get_origin(member) is Annotated:
            member = get_args(member)[0]
        # get_origin() guards against list[int] passing isinstance(type) on 3.10
        if isinstance(member, type) and member is not _NONE_TYPE and get_origin(member) is None:
            resolved.append(member)

    return tuple(resolved)


def is_string_backed_enum(candidate: Any) -> bool:
    """
    True if *candidate* is an Enum whose members are backed by strings.

    StrEnum and ``class E(str, Enum)`` always qualify; other enums qualify
    when every member value is a str. Empty enums never qualify.
    """
    if not (isinstance(candidate, type) and issubclass(candidate, Enum)):
        return False

    members = list(candidate)
    if not members:
        return False

    if issubclass(candidate, str):
        return True

    return all(isinstance(member.value, str) for member in members)


class ParameterDescriptor:
    """
    Metadata for one parameter of a described method.

    Example:
        def show(self, user: User, status: Status | None = None): ...

        status = MethodDescriptor(show).parameter("status")
        status.types                  # (Status,)
        status.has_string_backed_enums()  # True
        status.has_type(UrlRoutable)  # False
    """

    def __init__(self, parameter: inspect.Parameter, annotation: Any = _EMPTY):
        self.parameter = parameter
        self.annotation = parameter.annotation if annotation is _EMPTY else annotation
        self._types = resolve_types(self.annotation)

    def __repr__(self):
        return f"<ParameterDescriptor {self.name}: {', '.join(self.type_names) or '-'}>"

    @property
    def name(self) -> str:
        return self.parameter.name

    @property
    def kind(self) -> inspect._ParameterKind:
        return self.parameter.kind

    @property
    def default(self) -> Any:
        return self.parameter.default

    @property
    def has_default(self) -> bool:
        return self.parameter.default is not _EMPTY

    @property
    def is_keyword_only(self) -> bool:
        return self.parameter.kind is inspect.Parameter.KEYWORD_ONLY

    @property
    def types(self) -> Tuple[type, ...]:
        """Declared classes, in declaration order."""
        return self._types

    @property
    def type_names(self) -> Tuple[str, ...]:
        """Fully-qualified names of the declared classes."""
        return tuple(
            t.__qualname__ if t.__module__ == "builtins" else f"{t.__module__}.{t.__qualname__}"
            for t in self._types
        )

    def string_backed_enums(self) -> Tuple[type, ...]:
        """Declared types that are string-backed enums, in declaration order."""
        return tuple(t for t in self._types if is_string_backed_enum(t))

    def has_string_backed_enums(self) -> bool:
        return bool(self.string_backed_enums())

    def types_matching(self, capability: type) -> Tuple[type, ...]:
        """Declared types that are *capability* or a subtype of it."""
        return tuple(t for t in self._types if issubclass(t, capability))

    def has_type(self, capability: type) -> bool:
        return bool(self.types_matching(capability))

    @property
    def service_type(self) -> Optional[type]:
        """
        The single class a DI resolver could build for this parameter.

        None when the parameter declares zero or several types, a builtin
        scalar/container, or an enum.
        """
        if len(self._types) != 1:
            return None

        candidate = self._types[0]
        if candidate.__module__ == "builtins" or issubclass(candidate, Enum):
            return None

        return candidate
