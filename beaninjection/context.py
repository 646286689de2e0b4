"""
ApplicationContext

The single entry point of the container. A context owns one registry and
one resolver; independent contexts never share state.

Use Cases:
    - Application wiring (one context per process)
    - Test isolation (fresh context per test)
    - Libraries wiring their own components next to the host application

Example::

    context = ApplicationContext.for_package("myapp")
    context.init()
    service = context.get("userService")

    # Use as context manager for automatic init and cleanup
    with ApplicationContext(source) as context:
        service = context.get("userService", UserService)
    # close() is called automatically
"""

import logging
from typing import Any, FrozenSet, List, Optional, Type, TypeVar, overload

from .definition import ClassDefinition, FactoryDefinition
from .descriptor import DescriptorSource
from .exceptions import (
    AlreadyInitializedError,
    BeanNotOfRequiredTypeError,
    ContextClosedError,
    NotInitializedError,
)
from .naming import bean_name_for_type
from .registry import BeanRegistry
from .resolution_session import ResolutionSession
from .resolver import DependencyResolver

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ApplicationContext:
    """IoC container facade.

    Attributes:
        _source: Descriptor source read once by init()
        _registry: Definitions and singletons of this context
        _resolver: Instantiation engine bound to the registry
        _eager: Create every bean right after init()

    Example::

        source = StaticDescriptorSource()
        source.add_component(Database)
        source.add_component(UserRepository)

        context = ApplicationContext(source)
        context.init()

        repo = context.get("userRepository")
        assert repo.db is context.get("database")
    """

    def __init__(self, source: DescriptorSource, *, eager: bool = False):
        """Create an uninitialized context.

        Args:
            source: Where the component and factory descriptors come from
            eager: If True, init() instantiates every registered bean.
                Defaults to False (beans are created on first request).
        """
        self._source = source
        self._eager = eager
        self._registry = BeanRegistry()
        self._resolver = DependencyResolver(self._registry)
        self._initialized: bool = False
        self._closed: bool = False

    @classmethod
    def for_package(cls, base_package: str, **kwargs: Any) -> 'ApplicationContext':
        """Create a context over every tagged candidate in a package.

        Args:
            base_package: Dotted name of the package to scan
            **kwargs: Forwarded to ApplicationContext()
        """
        from .scanner import PackageScanner

        return cls(PackageScanner(base_package), **kwargs)

    def _ensure_not_closed(self) -> None:
        if self._closed:
            raise ContextClosedError("This context is already closed")

    def _ensure_initialized(self) -> None:
        self._ensure_not_closed()
        if not self._initialized:
            raise NotInitializedError(
                "ApplicationContext is not initialized. Call init() first."
            )

    def init(self) -> None:
        """Load the descriptor source and register every definition.

        Components are registered before factory operations. When a
        descriptor fails, nothing is registered and init() may be retried.

        Raises:
            AlreadyInitializedError: When init() was already called
            ContextClosedError: When the context has been closed
            DuplicateDefinitionError: When two descriptors derive the same name
            SignatureInspectionError: When the source cannot describe a candidate
        """
        self._ensure_not_closed()
        if self._initialized:
            raise AlreadyInitializedError(
                "ApplicationContext is already initialized. "
                "Create a new context instead of calling init() again."
            )

        descriptors = self._source.load()
        # Register into a fresh registry; a failed init leaves this context untouched
        registry = BeanRegistry()
        for component in descriptors.components:
            definition = ClassDefinition.from_descriptor(component)
            registry.register_definition(definition.bean_name, definition)
        for factory in descriptors.factories:
            definition = FactoryDefinition.from_descriptor(factory)
            registry.register_definition(definition.bean_name, definition)

        self._registry = registry
        self._resolver = DependencyResolver(registry)
        self._initialized = True

        logger.info(
            "Initialized context with %d component(s) and %d factory bean(s)",
            len(descriptors.components), len(descriptors.factories)
        )

        if self._eager:
            self.eager_initialize()

    def eager_initialize(self) -> None:
        """Create every registered bean that does not exist yet.

        Beans are requested in registration order; each request is a
        regular top-level get().
        """
        self._ensure_initialized()
        names = self._registry.definition_names()
        for name in names:
            self.get(name)
        logger.info("Eagerly initialized %d bean(s)", len(names))

    @overload
    def get(self, name: str) -> Any: ...

    @overload
    def get(self, name: str, required_type: Type[T]) -> T: ...

    def get(self, name: str, required_type: Optional[Type[T]] = None) -> Any:
        """Get a bean by name, creating it and its dependencies on first use.

        Args:
            name: The bean name (``userRepository`` for ``class UserRepository``,
                the operation name for ``@bean`` operations)
            required_type: Optional type the bean must be an instance of

        Returns:
            The singleton instance; every call returns the same object

        Raises:
            NotInitializedError: When init() has not been called
            ContextClosedError: When the context has been closed
            BeanNotOfRequiredTypeError: When the bean is not a required_type
            BeanResolutionError: Any resolution failure, see exceptions
        """
        self._ensure_initialized()
        instance = self._resolver.resolve(name, ResolutionSession())
        if required_type is not None and not isinstance(instance, required_type):
            raise BeanNotOfRequiredTypeError(name, required_type, instance)
        return instance

    def get_by_type(self, required_type: Type[T]) -> T:
        """Get the single bean satisfying a type.

        Uses the same policy as constructor parameters: the conventional
        name of the type first, then the unique assignable bean.

        Raises:
            MissingDependencyError: When no bean satisfies the type
            AmbiguousDependencyError: When several beans satisfy the type
        """
        self._ensure_initialized()
        name = self._resolver.candidate_name(bean_name_for_type(required_type), required_type)
        return self.get(name, required_type)

    def contains_bean(self, name: str) -> bool:
        """Check whether a definition exists under the name."""
        self._ensure_initialized()
        return self._registry.has_definition(name)

    def bean_names(self) -> List[str]:
        """Registered bean names in registration order."""
        self._ensure_initialized()
        return self._registry.definition_names()

    def names_for_type(self, required_type: Any) -> FrozenSet[str]:
        """Names of every bean assignable to a type."""
        self._ensure_initialized()
        return self._registry.names_assignable_to(required_type)

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def close(self) -> None:
        """Close the context.

        After closing, every operation raises ContextClosedError. Singletons
        are released with the context; no disposal hooks are called.

        This method is idempotent - calling it multiple times has no effect.
        """
        if not self._closed:
            self._closed = True
            logger.debug("Closed context")

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __enter__(self) -> 'ApplicationContext':
        """Enter context manager, initializing the context if needed."""
        if not self._initialized:
            self.init()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit context manager and close the context.

        Returns:
            False (exceptions are not suppressed)
        """
        self.close()
        return False
