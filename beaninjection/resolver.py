"""
DependencyResolver

The instantiation engine. Given a bean name it:

1. Returns the cached singleton if one exists
2. Detects circular dependencies through the resolution session
3. Selects the constructor (most parameters wins) or factory operation
4. Maps every parameter type to a bean name (naming convention first,
   then the unique assignable bean)
5. Resolves the parameters recursively, constructs the bean and stores
   it as a singleton

Any failure aborts the whole chain; nothing partial is cached.
"""

import logging
from typing import Any, List, Sequence

from .definition import BeanDefinition, ClassDefinition, FactoryDefinition
from .descriptor import ConstructorDescriptor
from .exceptions import (
    AmbiguousDependencyError,
    BeanInjectionError,
    CircularDependencyError,
    ConstructionFailureError,
    MissingDependencyError,
    NullFactoryResultError,
)
from .naming import bean_name_for_type
from .registry import BeanRegistry
from .resolution_session import ResolutionSession

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Resolves bean names to fully wired singleton instances.

    The resolver holds no state between calls apart from the registry it
    reads from and writes to; per-call state lives in the session.

    Example (internal usage)::

        resolver = DependencyResolver(registry)
        service = resolver.resolve("userService", ResolutionSession())
    """

    def __init__(self, registry: BeanRegistry):
        self._registry = registry

    def resolve(self, name: str, session: ResolutionSession) -> Any:
        """Resolve a bean by name, creating it and its dependencies if needed.

        Args:
            name: The bean name
            session: Session of the top-level request

        Returns:
            The singleton instance

        Raises:
            DefinitionNotFoundError: When the name is not registered
            CircularDependencyError: When the name is already in progress
            MissingDependencyError: When a parameter type has no producer
            AmbiguousDependencyError: When a parameter type has several producers
            NullFactoryResultError: When a factory operation returns None
            ConstructionFailureError: When a constructor or operation raises
        """
        instance = self._registry.get_singleton(name)
        if instance is not None:
            return instance

        if name in session:
            raise CircularDependencyError(name, session.path + (name,))

        with session.enter(name):
            definition = self._registry.get_definition(name)
            with self._registry.creation_slot(name, session):
                # Another session may have finished it while we waited
                instance = self._registry.get_singleton(name)
                if instance is not None:
                    return instance

                instance = self._create(name, definition, session)
                self._registry.put_singleton(name, instance)

        return instance

    @staticmethod
    def select_constructor(definition: ClassDefinition) -> ConstructorDescriptor:
        """Pick the constructor with the most parameters.

        Ties go to the constructor declared first, so ``__init__`` wins over
        an alternate constructor of the same arity.
        """
        return max(definition.constructors, key=lambda c: len(c.parameter_types))

    def candidate_name(self, requester: str, parameter_type: Any) -> str:
        """Map a parameter type to the bean name that satisfies it.

        The conventional name of the type wins when it is registered.
        Otherwise exactly one registered bean must be assignable to the type.

        Raises:
            MissingDependencyError: When no bean satisfies the type
            AmbiguousDependencyError: When several beans satisfy the type
        """
        conventional = bean_name_for_type(parameter_type)
        if self._registry.has_definition(conventional):
            return conventional

        candidates = self._registry.names_assignable_to(parameter_type)
        if not candidates:
            raise MissingDependencyError(requester, parameter_type)
        if len(candidates) > 1:
            raise AmbiguousDependencyError(requester, parameter_type, candidates)
        return next(iter(candidates))

    def _resolve_arguments(
        self,
        name: str,
        parameter_types: Sequence[Any],
        session: ResolutionSession
    ) -> List[Any]:
        names = self._match_arguments(name, parameter_types)
        return [self.resolve(parameter_name, session) for parameter_name in names]

    def _match_arguments(self, name: str, parameter_types: Sequence[Any]) -> List[str]:
        return [self.candidate_name(name, parameter_type) for parameter_type in parameter_types]

    def _create(self, name: str, definition: BeanDefinition, session: ResolutionSession) -> Any:
        if isinstance(definition, FactoryDefinition):
            # Match every parameter before the owner is constructed
            names = self._match_arguments(name, definition.parameter_types)
            args = []
            if not definition.is_static:
                args.append(self.resolve(definition.owner_bean_name, session))
            args.extend(self.resolve(parameter_name, session) for parameter_name in names)
            invoke = definition.operation
        elif isinstance(definition, ClassDefinition):
            selected = self.select_constructor(definition)
            logger.debug(
                "Bean %r: using constructor %s with %d parameter(s)",
                name, getattr(selected.invoke, '__qualname__', selected.invoke),
                len(selected.parameter_types)
            )
            args = self._resolve_arguments(name, selected.parameter_types, session)
            invoke = selected.invoke
        else:
            raise TypeError(f"Unsupported definition type {type(definition).__name__}")

        try:
            instance = invoke(*args)
        except BeanInjectionError:
            # Re-raise container errors from nested lookups as-is
            raise
        except Exception as e:
            logger.warning("Construction of bean %r failed: %s", name, e)
            raise ConstructionFailureError(name, e) from e

        if instance is None:
            raise NullFactoryResultError(name)

        logger.debug("Created bean %r (%s)", name, type(instance).__name__)
        return instance
