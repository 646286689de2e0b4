import logging
from importlib.metadata import PackageNotFoundError, version

# Public API
from .context import ApplicationContext
from .decorators import bean, component, configuration, constructor
from .definition import BeanDefinition, ClassDefinition, FactoryDefinition
from .descriptor import (
    ComponentDescriptor,
    ConstructorDescriptor,
    DescriptorSet,
    DescriptorSource,
    FactoryDescriptor,
    StaticDescriptorSource,
)
from .exceptions import (
    AlreadyInitializedError,
    AmbiguousDependencyError,
    BeanInjectionError,
    BeanNotOfRequiredTypeError,
    BeanResolutionError,
    CircularDependencyError,
    ConstructionFailureError,
    ContextClosedError,
    DefinitionNotFoundError,
    DuplicateDefinitionError,
    MissingDependencyError,
    NotInitializedError,
    NullFactoryResultError,
    SignatureInspectionError,
    SingletonAlreadyRegisteredError,
)
from .naming import bean_name_for_type
from .registry import BeanRegistry
from .resolution_session import ResolutionSession
from .resolver import DependencyResolver
from .scanner import PackageScanner

__all__ = [
    "ApplicationContext",
    "BeanRegistry",
    "DependencyResolver",
    "ResolutionSession",
    # Definitions
    "BeanDefinition",
    "ClassDefinition",
    "FactoryDefinition",
    # Descriptors
    "ComponentDescriptor",
    "ConstructorDescriptor",
    "FactoryDescriptor",
    "DescriptorSet",
    "DescriptorSource",
    "StaticDescriptorSource",
    "PackageScanner",
    # Tagging
    "component",
    "configuration",
    "bean",
    "constructor",
    "bean_name_for_type",
    # Exceptions
    "BeanInjectionError",
    "BeanResolutionError",
    "AlreadyInitializedError",
    "NotInitializedError",
    "ContextClosedError",
    "SignatureInspectionError",
    "DuplicateDefinitionError",
    "DefinitionNotFoundError",
    "MissingDependencyError",
    "AmbiguousDependencyError",
    "CircularDependencyError",
    "NullFactoryResultError",
    "ConstructionFailureError",
    "SingletonAlreadyRegisteredError",
    "BeanNotOfRequiredTypeError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = version("beaninjection")
except PackageNotFoundError:
    # Running from a source checkout
    __version__ = '0.0.0'
