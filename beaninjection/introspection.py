"""
Introspection

Turns classes and operations into descriptors by reading their signatures.

- Constructor and operation parameter types from annotations
- Forward references (string annotations) resolved against the
  declaring module
- Alternate constructors and ``@bean`` operations collected from the
  class body in declaration order
"""

import inspect
import logging
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from .decorators import is_bean_method, is_constructor
from .descriptor import ComponentDescriptor, ConstructorDescriptor, FactoryDescriptor
from .exceptions import SignatureInspectionError
from .naming import bean_name_for_type

logger = logging.getLogger(__name__)


def _label(func: Callable, owner: Optional[Type]) -> str:
    name = getattr(func, '__name__', repr(func))
    return f"{owner.__name__}.{name}" if owner is not None else name


def _resolve_type_hints(func: Callable) -> Dict[str, Any]:
    """Resolve annotations with typing.get_type_hints().

    Returns an empty dict when resolution fails (typically local classes
    referenced by name), letting callers fall back to manual resolution.
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, RecursionError):
        return {}


def _resolve_string_annotation(
    func: Callable,
    owner: Optional[Type],
    param_name: str,
    annotation: str
) -> Any:
    """Evaluate a string annotation in the declaring module's namespace.

    Raises:
        SignatureInspectionError: When the annotation cannot be evaluated
    """
    namespace: Dict[str, Any] = {}
    module = inspect.getmodule(func) or (inspect.getmodule(owner) if owner else None)
    if module is not None:
        namespace.update(vars(module))
    if owner is not None:
        namespace.update(vars(owner))
        # allow a class to reference itself, e.g. an alternate constructor's return
        namespace.setdefault(owner.__name__, owner)

    try:
        return eval(annotation, namespace)
    except NameError as e:
        raise SignatureInspectionError(
            f"Cannot resolve forward reference '{annotation}' for parameter "
            f"'{param_name}' in {_label(func, owner)}. "
            f"Hint: Ensure '{annotation}' is defined at module level and imported."
        ) from e
    except SyntaxError as e:
        raise SignatureInspectionError(
            f"Invalid forward reference '{annotation}' for parameter "
            f"'{param_name}' in {_label(func, owner)}: {e}"
        ) from e
    except Exception as e:
        raise SignatureInspectionError(
            f"Failed to evaluate forward reference '{annotation}' for parameter "
            f"'{param_name}' in {_label(func, owner)}: {type(e).__name__}: {e}"
        ) from e


def _signature(func: Callable, owner: Optional[Type]) -> inspect.Signature:
    try:
        return inspect.signature(func)
    except (ValueError, TypeError) as e:
        raise SignatureInspectionError(
            f"Cannot inspect {_label(func, owner)}: {e}. "
            f"This may occur with built-in types or C extension classes."
        ) from e


def get_parameter_types(func: Callable, owner: Optional[Type] = None) -> Tuple[Any, ...]:
    """Extract the injected parameter types of a callable.

    ``self``, ``*args`` and ``**kwargs`` are skipped. Every other parameter
    must carry a type hint.

    Args:
        func: Constructor (``cls.__init__``) or operation to analyze
        owner: Declaring class, used for messages and forward references

    Returns:
        Parameter types in declaration order

    Raises:
        SignatureInspectionError: When a type hint is missing or unresolvable
    """
    sig = _signature(func, owner)
    hints = _resolve_type_hints(func)

    parameter_types: List[Any] = []
    for param_name, param in sig.parameters.items():
        if param_name == 'self':
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        if param.annotation is inspect.Parameter.empty:
            raise SignatureInspectionError(
                f"Missing type hint for parameter '{param_name}' in {_label(func, owner)}. "
                f"Injection requires type hints for all parameters."
            )

        param_type = hints.get(param_name, param.annotation)
        if isinstance(param_type, str):
            param_type = _resolve_string_annotation(func, owner, param_name, param_type)
        parameter_types.append(param_type)

    return tuple(parameter_types)


def get_return_type(func: Callable, owner: Optional[Type] = None) -> Optional[Any]:
    """Return the annotated return type of an operation, or None."""
    annotation = _signature(func, owner).return_annotation
    if annotation is inspect.Signature.empty:
        return None
    return_type = _resolve_type_hints(func).get('return', annotation)
    if isinstance(return_type, str):
        return_type = _resolve_string_annotation(func, owner, 'return', return_type)
    return return_type


def describe_component(cls: Type) -> ComponentDescriptor:
    """Build the descriptor of a component class.

    ``__init__`` is the first constructor; classmethods tagged with
    ``@constructor`` follow in class-body order.
    """
    constructors = [ConstructorDescriptor(cls, get_parameter_types(cls.__init__, cls))]
    for attr_name, attr in vars(cls).items():
        if is_constructor(attr):
            alternate = getattr(cls, attr_name)
            constructors.append(
                ConstructorDescriptor(alternate, get_parameter_types(alternate, cls))
            )

    logger.debug(
        "Described component %s with %d constructor(s)", cls.__qualname__, len(constructors)
    )
    return ComponentDescriptor(cls, tuple(constructors))


def describe_function(func: Callable) -> FactoryDescriptor:
    """Build the descriptor of a module-level ``@bean`` function."""
    return FactoryDescriptor(
        operation_name=func.__name__,
        owner_bean_name=None,
        is_static=True,
        parameter_types=get_parameter_types(func),
        operation=func,
        return_type=get_return_type(func),
    )


def describe_factories(cls: Type) -> List[FactoryDescriptor]:
    """Build descriptors for every ``@bean`` operation of a configuration.

    Instance operations are stored as plain functions and later called
    with the configuration bean as first argument. Static and class
    operations are stored bound and need no owner instance.
    """
    owner_bean_name = bean_name_for_type(cls)
    factories = []
    for attr_name, attr in vars(cls).items():
        if not is_bean_method(attr):
            continue
        is_static = isinstance(attr, (staticmethod, classmethod))
        operation = getattr(cls, attr_name) if is_static else attr
        factories.append(FactoryDescriptor(
            operation_name=attr_name,
            owner_bean_name=owner_bean_name,
            is_static=is_static,
            parameter_types=get_parameter_types(operation, cls),
            operation=operation,
            return_type=get_return_type(operation, cls),
        ))
        logger.debug("Described factory operation %s.%s", cls.__qualname__, attr_name)
    return factories
