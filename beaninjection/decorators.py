"""
Component tagging

Decorators that mark classes and operations for discovery. They only set
marker attributes; nothing is registered until a descriptor source picks
the tagged objects up.

Example::

    @component
    class Database:
        pass

    @configuration
    class AppConfig:
        @bean
        def clock(self) -> Clock:
            return SystemClock()
"""

from typing import Any, Callable, Type, TypeVar

T = TypeVar('T')
F = TypeVar('F', bound=Callable[..., Any])

_COMPONENT_MARKER = '__beaninjection_component__'
_CONFIGURATION_MARKER = '__beaninjection_configuration__'
_BEAN_MARKER = '__beaninjection_bean__'
_CONSTRUCTOR_MARKER = '__beaninjection_constructor__'


def component(cls: Type[T]) -> Type[T]:
    """Mark a class as a component (class-based bean)."""
    setattr(cls, _COMPONENT_MARKER, True)
    return cls


def configuration(cls: Type[T]) -> Type[T]:
    """Mark a class as a configuration.

    A configuration is itself a component and additionally contributes its
    ``@bean`` operations as factory beans.
    """
    setattr(cls, _CONFIGURATION_MARKER, True)
    return component(cls)


def bean(func: F) -> F:
    """Mark an operation of a configuration class as a factory bean.

    Apply it below ``@staticmethod``/``@classmethod``::

        @staticmethod
        @bean
        def clock() -> Clock: ...
    """
    setattr(func, _BEAN_MARKER, True)
    return func


def constructor(func: F) -> F:
    """Mark a classmethod as an alternate constructor of a component.

    When a component offers several constructors, the one with the most
    parameters is used::

        @component
        class Settings:
            def __init__(self): ...

            @classmethod
            @constructor
            def from_env(cls, env: Environment) -> 'Settings': ...
    """
    setattr(func, _CONSTRUCTOR_MARKER, True)
    return func


def _unwrap(obj: Any) -> Any:
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def is_component(obj: Any) -> bool:
    # vars() so subclasses of a tagged class are not tagged implicitly
    return isinstance(obj, type) and vars(obj).get(_COMPONENT_MARKER, False) is True


def is_configuration(obj: Any) -> bool:
    return isinstance(obj, type) and vars(obj).get(_CONFIGURATION_MARKER, False) is True


def is_bean_method(obj: Any) -> bool:
    return getattr(_unwrap(obj), _BEAN_MARKER, False) is True


def is_constructor(obj: Any) -> bool:
    return isinstance(obj, classmethod) and getattr(obj.__func__, _CONSTRUCTOR_MARKER, False) is True
