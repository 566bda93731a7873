"""
ROUTEBIND Descriptors

Reflection metadata for the classes, methods and parameters being bound.
"""

from routebind.descriptors.parameter import ParameterDescriptor, resolve_types, is_string_backed_enum
from routebind.descriptors.method import MethodDescriptor
from routebind.descriptors.classes import ClassDescriptor, clear_cache

__all__ = [
    "ParameterDescriptor",
    "MethodDescriptor",
    "ClassDescriptor",
    "resolve_types",
    "is_string_backed_enum",
    "clear_cache",
]
