"""
Definition

Data classes describing how each named bean is produced
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type

from .descriptor import ComponentDescriptor, ConstructorDescriptor, FactoryDescriptor


@dataclass(frozen=True)
class BeanDefinition:
    """Recipe for one named bean"""
    bean_name: str

    @property
    def produced_type(self) -> Optional[Any]:
        """Type of the object the definition produces, if known"""
        raise NotImplementedError


@dataclass(frozen=True)
class ClassDefinition(BeanDefinition):
    """Bean built by calling one of a component's constructors"""
    target_type: Type
    constructors: Tuple[ConstructorDescriptor, ...]

    @property
    def produced_type(self) -> Type:
        return self.target_type

    @classmethod
    def from_descriptor(cls, descriptor: ComponentDescriptor) -> 'ClassDefinition':
        return cls(
            bean_name=descriptor.bean_name,
            target_type=descriptor.component_type,
            constructors=descriptor.constructors,
        )


@dataclass(frozen=True)
class FactoryDefinition(BeanDefinition):
    """Bean returned by a factory operation"""
    owner_bean_name: Optional[str]
    is_static: bool
    parameter_types: Tuple[Any, ...]
    operation: Callable[..., Any]
    return_type: Optional[Any] = None

    @property
    def produced_type(self) -> Optional[Any]:
        return self.return_type

    @classmethod
    def from_descriptor(cls, descriptor: FactoryDescriptor) -> 'FactoryDefinition':
        return cls(
            bean_name=descriptor.bean_name,
            owner_bean_name=descriptor.owner_bean_name,
            is_static=descriptor.is_static,
            parameter_types=descriptor.parameter_types,
            operation=descriptor.operation,
            return_type=descriptor.return_type,
        )
