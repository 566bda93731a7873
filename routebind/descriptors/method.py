"""
Method Descriptor

Wraps a function/method and exposes its parameters, in declaration order,
as ParameterDescriptors.
"""

import inspect
import logging
import typing
from typing import Any, Callable, Dict, Optional, Tuple

from routebind.descriptors.parameter import ParameterDescriptor

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _type_hints(function: Callable) -> Dict[str, Any]:
    """Resolve string/postponed annotations, falling back to raw ones."""
    try:
        return typing.get_type_hints(function, include_extras=True)
    except (NameError, TypeError) as e:
        logger.debug(f"Could not resolve type hints for {function!r}: {e}")
        return {}


class MethodDescriptor:
    """
    Metadata for one method (or the constructor) of a class.

    Args:
        function: The underlying function
        name: Name the method is looked up by (defaults to function.__name__)
        owner: Class the method was looked up on
        skip_first: Drop the first parameter (self) of a plain function
    """

    def __init__(
        self,
        function: Callable,
        name: Optional[str] = None,
        owner: Optional[type] = None,
        skip_first: bool = False,
    ):
        self.function = function
        self.name = name or getattr(function, "__name__", repr(function))
        self.owner = owner

        signature = inspect.signature(function)
        hints = _type_hints(function)

        parameters = list(signature.parameters.values())
        if skip_first and parameters and parameters[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            parameters = parameters[1:]

        self.accepts_var_keyword = any(
            p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters
        )
        self._parameters: Dict[str, ParameterDescriptor] = {
            p.name: ParameterDescriptor(p, hints.get(p.name, p.annotation))
            for p in parameters
            if p.kind not in _SKIPPED_KINDS
        }

    def __repr__(self):
        owner = f"{self.owner.__name__}." if self.owner else ""
        return f"<MethodDescriptor {owner}{self.name}({', '.join(self._parameters)})>"

    @property
    def is_constructor(self) -> bool:
        return self.name == "__init__"

    def parameters(self, capability: Optional[type] = None) -> Tuple[ParameterDescriptor, ...]:
        """
        Parameters in declaration order.

        Args:
            capability: Only keep parameters with a type that is, or
                subclasses, this capability

        Returns:
            Tuple of ParameterDescriptors
        """
        if capability is None:
            return tuple(self._parameters.values())

        return tuple(p for p in self._parameters.values() if p.has_type(capability))

    def parameter(self, name: str) -> Optional[ParameterDescriptor]:
        """Descriptor for *name*, or None if the method has no such parameter."""
        return self._parameters.get(name)
