"""
BeanInjection Exceptions

Custom exception hierarchy for the BeanInjection IoC container
"""

from typing import Any, Iterable, Optional, Sequence, Tuple


def _type_name(tp: Any) -> str:
    return tp.__name__ if hasattr(tp, '__name__') else str(tp)


class BeanInjectionError(Exception):
    """
    Base exception for all BeanInjection errors.

    All BeanInjection-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Example:
        >>> try:
        ...     service = context.get("userService")
        ... except BeanInjectionError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class BeanResolutionError(BeanInjectionError):
    """
    Base class for failures tied to a specific bean.

    Attributes:
        bean_name: Name of the bean whose resolution failed
    """

    def __init__(self, message: str, bean_name: Optional[str] = None):
        super().__init__(message)
        self.bean_name = bean_name


class AlreadyInitializedError(BeanInjectionError):
    """
    Raised when ApplicationContext.init() is called a second time.

    The registry is populated exactly once from the descriptor source.

    Solution:
        Create a new ``ApplicationContext`` instead of re-initializing::

            context = ApplicationContext(source)
            context.init()
            # context.init()  # AlreadyInitializedError!
    """

    pass


class NotInitializedError(BeanInjectionError):
    """
    Raised when a bean is requested before ApplicationContext.init().

    Solution:
        Initialize the context before using it::

            context = ApplicationContext(source)
            context.init()  # Initialize first!
            service = context.get("userService")
    """

    pass


class ContextClosedError(BeanInjectionError):
    """
    Raised when attempting to use a closed context.

    Common causes:
        - Using a context after calling ``context.close()``
        - Using a context after exiting a ``with`` block

    Solution:
        Create a new ``ApplicationContext`` instead of reusing a closed one.
    """

    pass


class SignatureInspectionError(BeanInjectionError):
    """
    Raised when a component or factory operation cannot be described.

    Common causes:
        - Missing type hints on ``__init__`` or ``@bean`` parameters
        - Forward references naming a type that does not exist
        - Built-in or C extension callables without an inspectable signature

    Solution:
        Annotate every injected parameter::

            @component
            class UserRepository:
                def __init__(self, db: Database, cache: CacheService):
                    ...
    """

    pass


class DuplicateDefinitionError(BeanResolutionError):
    """
    Raised when two descriptors derive the same bean name.

    Common causes:
        - A ``@bean`` operation named like a component (``widget`` and
          ``class Widget``)
        - Two components with the same simple class name in different modules
        - Registering the same class twice

    Solution:
        Rename the factory operation or one of the classes. Later
        registrations never overwrite earlier ones.
    """

    def __init__(self, bean_name: str):
        super().__init__(
            f"Bean '{bean_name}' is already defined. "
            f"Each bean name may only be registered once.",
            bean_name,
        )


class DefinitionNotFoundError(BeanResolutionError):
    """
    Raised when a requested bean name has no registered definition.

    Common causes:
        - Typo in the bean name
        - Forgetting the ``@component`` decorator
        - Module containing the component not under the scanned package

    Note:
        The error message lists the registered names to help identify
        available beans.
    """

    def __init__(self, bean_name: str, registered_names: Iterable[str] = ()):
        self.registered_names: Tuple[str, ...] = tuple(sorted(registered_names))
        registered = ", ".join(self.registered_names) or "None"
        super().__init__(
            f"No bean named '{bean_name}' is defined.\n"
            f"Registered beans: {registered}",
            bean_name,
        )


class MissingDependencyError(BeanResolutionError):
    """
    Raised when a parameter type is satisfied by no registered bean.

    Example::

        @component
        class Mailer:
            def __init__(self, transport: SmtpTransport): ...

        # No component or @bean produces SmtpTransport -> MissingDependencyError

    Solution:
        Register a component or a ``@bean`` operation producing the type.
    """

    def __init__(self, bean_name: str, parameter_type: Any):
        self.parameter_type = parameter_type
        super().__init__(
            f"Cannot create bean '{bean_name}': no bean satisfies "
            f"parameter type {_type_name(parameter_type)}.",
            bean_name,
        )


class AmbiguousDependencyError(BeanResolutionError):
    """
    Raised when several beans satisfy a parameter type and none of them
    matches the naming convention.

    Example::

        class Storage(ABC): ...

        @component
        class DiskStorage(Storage): ...

        @component
        class MemoryStorage(Storage): ...

        @component
        class Archive:
            def __init__(self, storage: Storage): ...  # Ambiguous!

    Solution:
        Depend on the concrete type, or name one implementation ``Storage``
        (or a ``@bean`` operation ``storage``) so the naming convention wins.
    """

    def __init__(self, bean_name: str, parameter_type: Any, candidates: Iterable[str]):
        self.parameter_type = parameter_type
        self.candidates: Tuple[str, ...] = tuple(sorted(candidates))
        super().__init__(
            f"Cannot create bean '{bean_name}': parameter type "
            f"{_type_name(parameter_type)} is satisfied by several beans: "
            f"{', '.join(self.candidates)}.",
            bean_name,
        )


class CircularDependencyError(BeanResolutionError):
    """
    Raised when circular dependency is detected during resolution.

    This error occurs when bean A depends on bean B, and bean B
    (directly or indirectly) depends on bean A.

    Example of circular dependency::

        @component
        class ServiceA:
            def __init__(self, b: 'ServiceB'): ...

        @component
        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!

    Solution:
        Refactor to remove the cycle, or extract the shared part into a
        third component both depend on.
    """

    def __init__(self, bean_name: str, path: Sequence[str]):
        self.path: Tuple[str, ...] = tuple(path)
        super().__init__(
            f"Circular dependency detected: {' -> '.join(self.path)}",
            bean_name,
        )


class NullFactoryResultError(BeanResolutionError):
    """
    Raised when a ``@bean`` operation returns ``None``.

    Solution:
        Factory operations must return the object to register::

            @configuration
            class AppConfig:
                @bean
                def clock(self) -> Clock:
                    return Clock()  # Not just Clock()
    """

    def __init__(self, bean_name: str):
        super().__init__(
            f"Factory operation for bean '{bean_name}' returned None.",
            bean_name,
        )


class ConstructionFailureError(BeanResolutionError):
    """
    Raised when a constructor or factory operation itself raises.

    The original exception is chained as ``__cause__``. Nothing is cached
    for the bean, so a later ``get()`` retries construction.
    """

    def __init__(self, bean_name: str, cause: BaseException):
        super().__init__(
            f"Failed to create bean '{bean_name}': "
            f"{type(cause).__name__}: {cause}",
            bean_name,
        )


class SingletonAlreadyRegisteredError(BeanResolutionError):
    """
    Raised when a singleton is stored twice under the same name.

    Singleton instances are never replaced. This indicates a bug in the
    caller, not a configuration problem.
    """

    def __init__(self, bean_name: str):
        super().__init__(
            f"A singleton for bean '{bean_name}' has already been stored.",
            bean_name,
        )


class BeanNotOfRequiredTypeError(BeanResolutionError):
    """
    Raised when ``get(name, required_type)`` finds a bean of another type.
    """

    def __init__(self, bean_name: str, required_type: Any, actual: Any):
        self.required_type = required_type
        super().__init__(
            f"Bean '{bean_name}' is a {type(actual).__name__}, "
            f"expected {_type_name(required_type)}.",
            bean_name,
        )
