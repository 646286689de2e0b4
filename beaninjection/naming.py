"""
Bean naming convention

A class-based bean is addressed by its simple class name with the first
letter lowercased (``UserRepository`` -> ``userRepository``); a factory
bean by the literal name of its operation.
"""

from typing import Any


def lcfirst(value: str) -> str:
    """Lowercase the first character, leaving the rest untouched."""
    if not value:
        return value
    return value[0].lower() + value[1:]


def bean_name_for_type(tp: Any) -> str:
    """Derive the conventional bean name for a type.

    Args:
        tp: A class (or anything exposing ``__name__``)

    Returns:
        The lower-camel-cased simple name

    Example::

        >>> bean_name_for_type(UserRepository)
        'userRepository'
        >>> bean_name_for_type(HTTPClient)
        'hTTPClient'
    """
    return lcfirst(getattr(tp, '__name__', str(tp)))
