"""
ROUTEBIND Utility Functions

Helper functions shared by the route, binder and db modules.
"""

import re
from typing import Any, Dict, Mapping, Optional

_SNAKE_BOUNDARY = re.compile(r"(.)(?=[A-Z])")


def snake_case(name: str, delimiter: str = "_") -> str:
    """
    Convert a camelCase / StudlyCase name to snake_case.

    Lowercase names are returned unchanged. Every uppercase letter that is
    not the first character gets a delimiter in front of it, so acronyms
    are split per letter.

    Examples:
        snake_case("userId")       -> "user_id"
        snake_case("ParentUser")   -> "parent_user"
        snake_case("user_id")      -> "user_id"
        snake_case("userID")       -> "user_i_d"
    """
    if name.islower() or not name:
        return name

    # Collapse whitespace the way "Title Case Words" would be joined
    collapsed = "".join(part[:1].upper() + part[1:] for part in name.split())
    return _SNAKE_BOUNDARY.sub(r"\1" + delimiter, collapsed).lower()


def merge_parameters(
    base: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Recursively overlay *overrides* on *base*, returning a new ordered dict.

    - Keys of *base* keep their position, new keys from *overrides* are
      appended in their own order.
    - When both sides hold a mapping for the same key, the mappings are
      merged recursively instead of replaced.
    - Otherwise the override value wins.

    Args:
        base: Route parameters in route-declaration order
        overrides: Caller-supplied parameters

    Returns:
        The merged parameter bag
    """
    merged: Dict[str, Any] = dict(base)

    for key, value in (overrides or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_parameters(current, value)
        else:
            merged[key] = value

    return merged


def previous_value(bag: Mapping[str, Any], key: str) -> Optional[Any]:
    """
    Return the value stored immediately before *key* in the bag's order.

    Returns None when *key* is the first entry or is not in the bag.
    """
    previous = None
    for position, (name, value) in enumerate(bag.items()):
        if name == key:
            return previous if position > 0 else None
        previous = value
    return None


# Irregular plurals common in resource names
_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
}


def pluralize(word: str) -> str:
    """
    Naive English pluralization for relationship names.

    Examples:
        pluralize("dog")      -> "dogs"
        pluralize("category") -> "categories"
        pluralize("box")      -> "boxes"
        pluralize("person")   -> "people"
    """
    lower = word.lower()
    if lower in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[lower]
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


__all__ = ["snake_case", "merge_parameters", "previous_value", "pluralize"]
