"""
Descriptors

The input of the container: what a discovery mechanism found, before any
registration. A ``DescriptorSource`` hands the container two lists, one
of component descriptors and one of factory-operation descriptors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple, Type

from .naming import bean_name_for_type


@dataclass(frozen=True)
class ConstructorDescriptor:
    """One way of building a component"""
    invoke: Callable[..., Any]
    parameter_types: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class ComponentDescriptor:
    """A class eligible for class-based bean production"""
    component_type: Type
    constructors: Tuple[ConstructorDescriptor, ...]

    @property
    def bean_name(self) -> str:
        return bean_name_for_type(self.component_type)


@dataclass(frozen=True)
class FactoryDescriptor:
    """An operation whose return value becomes a bean"""
    operation_name: str
    owner_bean_name: Optional[str]  # None for module-level functions
    is_static: bool
    parameter_types: Tuple[Any, ...]
    operation: Callable[..., Any]
    return_type: Optional[Any] = None

    @property
    def bean_name(self) -> str:
        return self.operation_name


@dataclass
class DescriptorSet:
    """Everything a descriptor source discovered"""
    components: List[ComponentDescriptor] = field(default_factory=list)
    factories: List[FactoryDescriptor] = field(default_factory=list)


class DescriptorSource(ABC):
    """Abstract interface for descriptor discovery.

    Implementations decide how candidates are found. The container calls
    ``load()`` exactly once, from ``ApplicationContext.init()``. No ordering
    or uniqueness is promised; the registry rejects duplicate names.

    Example::

        class ListSource(DescriptorSource):
            def __init__(self, classes):
                self._classes = classes

            def load(self) -> DescriptorSet:
                return DescriptorSet(
                    components=[describe_component(c) for c in self._classes]
                )
    """

    @abstractmethod
    def load(self) -> DescriptorSet:
        """Produce the discovered descriptors.

        Returns:
            The component and factory descriptors
        """
        pass


class StaticDescriptorSource(DescriptorSource):
    """Descriptor source fed by explicit registration calls.

    The alternative to scanning: list the classes and operations by hand.

    Example::

        source = StaticDescriptorSource()
        source.add_component(Database)
        source.add_component(UserRepository)
        source.add_configuration(AppConfig)

        context = ApplicationContext(source)
        context.init()
    """

    def __init__(self):
        self._descriptors = DescriptorSet()

    def add_component(self, cls: Type) -> 'StaticDescriptorSource':
        """Register a class as a component.

        Raises:
            SignatureInspectionError: When the constructor cannot be described
        """
        from .introspection import describe_component

        self._descriptors.components.append(describe_component(cls))
        return self

    def add_configuration(self, cls: Type) -> 'StaticDescriptorSource':
        """Register a configuration class and all of its ``@bean`` operations."""
        from .introspection import describe_factories

        self.add_component(cls)
        self._descriptors.factories.extend(describe_factories(cls))
        return self

    def add_function(self, func: Callable[..., Any]) -> 'StaticDescriptorSource':
        """Register a module-level function as a factory bean named after it."""
        from .introspection import describe_function

        self._descriptors.factories.append(describe_function(func))
        return self

    def add(self, descriptor: Any) -> 'StaticDescriptorSource':
        """Register a prebuilt component or factory descriptor."""
        if isinstance(descriptor, ComponentDescriptor):
            self._descriptors.components.append(descriptor)
        elif isinstance(descriptor, FactoryDescriptor):
            self._descriptors.factories.append(descriptor)
        else:
            raise TypeError(
                f"Expected ComponentDescriptor or FactoryDescriptor, "
                f"got {type(descriptor).__name__}"
            )
        return self

    def load(self) -> DescriptorSet:
        return DescriptorSet(
            components=list(self._descriptors.components),
            factories=list(self._descriptors.factories),
        )
