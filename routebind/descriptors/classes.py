"""
Class Descriptor

Wraps a class: method lookup by name, constructor detection and
instantiation with or without running the initializer.
"""

import functools
import inspect
from typing import Any, Dict, Mapping, Optional, Sequence

from routebind.descriptors.method import MethodDescriptor


class ClassDescriptor:
    """
    Metadata for a class whose constructor or methods will be bound.

    Descriptors hold no call state, so ClassDescriptor.of() caches one per
    class.

    Example:
        descriptor = ClassDescriptor.of(UserController)
        descriptor.has_constructor()        # True
        descriptor.method("show")           # <MethodDescriptor UserController.show(user)>
        descriptor.method("missing")        # None
    """

    def __init__(self, cls: type):
        if not isinstance(cls, type):
            raise TypeError(f"ClassDescriptor expects a class, got {cls!r}")
        self.cls = cls
        self._methods: Dict[str, Optional[MethodDescriptor]] = {}

    def __repr__(self):
        return f"<ClassDescriptor {self.name}>"

    @classmethod
    def of(cls, target: Any) -> "ClassDescriptor":
        """Cached descriptor for a class, or for the class of an instance."""
        return _describe(target if isinstance(target, type) else type(target))

    @property
    def name(self) -> str:
        return f"{self.cls.__module__}.{self.cls.__qualname__}"

    def has_constructor(self) -> bool:
        """True if the class or a base other than object defines __init__."""
        return any("__init__" in klass.__dict__ for klass in self.cls.__mro__ if klass is not object)

    def constructor(self) -> Optional[MethodDescriptor]:
        return self.method("__init__")

    def method(self, name: str) -> Optional[MethodDescriptor]:
        """
        Descriptor for a method declared on (or inherited by) the class.

        Returns None when there is no such method, when the attribute is not
        a function, or for "__init__" when the class has no constructor.
        """
        if name not in self._methods:
            self._methods[name] = self._describe_method(name)
        return self._methods[name]

    def _describe_method(self, name: str) -> Optional[MethodDescriptor]:
        if name == "__init__":
            if not self.has_constructor():
                return None
            return MethodDescriptor(self.cls.__init__, name, owner=self.cls, skip_first=True)

        try:
            attribute = inspect.getattr_static(self.cls, name)
        except AttributeError:
            return None

        if isinstance(attribute, staticmethod):
            return MethodDescriptor(attribute.__func__, name, owner=self.cls)

        if isinstance(attribute, classmethod):
            # Bound to the class, so inspect already drops cls
            return MethodDescriptor(getattr(self.cls, name), name, owner=self.cls)

        if inspect.isfunction(attribute):
            return MethodDescriptor(attribute, name, owner=self.cls, skip_first=True)

        return None

    def instantiate(
        self, args: Sequence[Any] = (), kwargs: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """
        Create an instance.

        With a constructor, calls the class with *args*/*kwargs*. Without
        one, allocates the instance and runs no initializer logic.
        """
        if self.has_constructor():
            return self.cls(*args, **(kwargs or {}))

        return self.cls.__new__(self.cls)


@functools.lru_cache(maxsize=512)
def _describe(cls: type) -> ClassDescriptor:
    return ClassDescriptor(cls)


def clear_cache() -> None:
    """Forget every cached ClassDescriptor."""
    _describe.cache_clear()
