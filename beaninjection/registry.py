"""
BeanRegistry

Storage for bean definitions and the singletons created from them.

- name -> definition (populated once during init, immutable afterwards)
- name -> singleton instance (populated lazily, never replaced)
- type -> names assignable to it (derived from the definitions, cached)

The registry also owns one creation slot per bean name. A slot is a lock
held while the bean is constructed, so concurrent requests for the same
name construct it at most once while requests for different names
proceed independently.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Iterator, List, Optional

from .definition import BeanDefinition
from .exceptions import (
    CircularDependencyError,
    DefinitionNotFoundError,
    DuplicateDefinitionError,
    SingletonAlreadyRegisteredError,
)
from .resolution_session import ResolutionSession

logger = logging.getLogger(__name__)


def _is_assignable(produced: Any, requested: Any) -> bool:
    if produced is None:
        return False
    if produced is requested:
        return True
    if not (isinstance(produced, type) and isinstance(requested, type)):
        return False
    try:
        return issubclass(produced, requested)
    except TypeError:
        # protocols that are not runtime checkable
        return False


class _CreationSlot:
    """Per-name construction lock and its current owner"""

    def __init__(self):
        self.lock = threading.Lock()
        self.owner: Optional[ResolutionSession] = None
        self.owner_thread: Optional[int] = None


class BeanRegistry:
    """Definitions, singletons and the type index of one context.

    A registry is owned by exactly one ``ApplicationContext``; independent
    contexts never share state.

    Example::

        registry = BeanRegistry()
        registry.register_definition("database", ClassDefinition(...))
        registry.has_definition("database")  # True
        registry.get_singleton("database")   # None until created
    """

    def __init__(self):
        self._definitions: Dict[str, BeanDefinition] = {}
        self._singletons: Dict[str, Any] = {}
        self._type_index: Dict[Any, FrozenSet[str]] = {}
        self._slots: Dict[str, _CreationSlot] = {}
        # Guards map bookkeeping only; construction happens outside it
        self._lock = threading.RLock()

    # Definitions

    def register_definition(self, name: str, definition: BeanDefinition) -> None:
        """Insert a definition.

        Raises:
            DuplicateDefinitionError: When the name is already registered.
                Existing definitions are never overwritten.
        """
        with self._lock:
            if name in self._definitions:
                raise DuplicateDefinitionError(name)
            self._definitions[name] = definition
            self._type_index.clear()
        logger.debug("Registered bean definition %r (%s)", name, type(definition).__name__)

    def has_definition(self, name: str) -> bool:
        return name in self._definitions

    def get_definition(self, name: str) -> BeanDefinition:
        """Look up a definition by name.

        Raises:
            DefinitionNotFoundError: When no definition exists under the name
        """
        definition = self._definitions.get(name)
        if definition is None:
            raise DefinitionNotFoundError(name, self._definitions.keys())
        return definition

    def definition_names(self) -> List[str]:
        """Registered names in registration order"""
        with self._lock:
            return list(self._definitions)

    def names_assignable_to(self, requested_type: Any) -> FrozenSet[str]:
        """Every registered name whose produced type satisfies ``requested_type``.

        Class definitions produce their target type; factory definitions
        produce their annotated return type (unknown return types match
        nothing).
        """
        with self._lock:
            names = self._type_index.get(requested_type)
            if names is None:
                names = frozenset(
                    name for name, definition in self._definitions.items()
                    if _is_assignable(definition.produced_type, requested_type)
                )
                self._type_index[requested_type] = names
            return names

    # Singletons

    def get_singleton(self, name: str) -> Optional[Any]:
        """Return the cached instance, or None when not created yet"""
        return self._singletons.get(name)

    def put_singleton(self, name: str, instance: Any) -> None:
        """Store a singleton.

        Raises:
            SingletonAlreadyRegisteredError: When an instance is already
                stored under the name
        """
        with self._lock:
            if name in self._singletons:
                raise SingletonAlreadyRegisteredError(name)
            self._singletons[name] = instance
        logger.debug("Stored singleton %r (%s)", name, type(instance).__name__)

    def singleton_count(self) -> int:
        return len(self._singletons)

    # Creation slots

    @contextmanager
    def creation_slot(self, name: str, session: ResolutionSession) -> Iterator[None]:
        """Hold the exclusive right to construct ``name``.

        Blocks while another session constructs the same name. On exit the
        slot is released whether construction succeeded or not, so a failed
        name can be retried.

        Raises:
            CircularDependencyError: When waiting would deadlock, either because
                the current thread already holds the slot from an outer
                get() or because the owner of the slot is itself waiting on a
                bean this session is constructing
        """
        with self._lock:
            slot = self._slots.get(name)
            if slot is None:
                slot = self._slots[name] = _CreationSlot()
            owner = slot.owner
            if (owner is not None and owner is not session
                    and slot.owner_thread == threading.get_ident()):
                # get() called back into a bean this thread is constructing
                raise CircularDependencyError(name, owner.path + session.path)
            self._check_wait_cycle(name, session)
            session.waiting_for = name

        slot.lock.acquire()
        with self._lock:
            session.waiting_for = None
            slot.owner = session
            slot.owner_thread = threading.get_ident()
        try:
            yield
        finally:
            with self._lock:
                slot.owner = None
                slot.owner_thread = None
            slot.lock.release()

    def _check_wait_cycle(self, name: str, session: ResolutionSession) -> None:
        # Follow owner -> waiting_for links; reaching a bean this session
        # already holds means nobody in the chain could ever proceed.
        waiting = name
        seen = set()
        while waiting is not None and waiting not in seen:
            seen.add(waiting)
            slot = self._slots.get(waiting)
            owner = slot.owner if slot is not None else None
            if owner is None or owner is session:
                return
            blocked_on = owner.waiting_for
            if blocked_on is not None and blocked_on != name and blocked_on in session:
                raise CircularDependencyError(name, session.path + (blocked_on,))
            waiting = blocked_on
