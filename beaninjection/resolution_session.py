"""
ResolutionSession

Bookkeeping for one top-level ``ApplicationContext.get()`` call:

- Bean names currently under construction, in entry order
  (circular dependency detection and error paths)
- The bean name the session is blocked on, if any (lets the registry
  detect cycles that span threads)

A session is created per call and discarded when the call returns or
fails.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple


class ResolutionSession:
    """Tracks the in-progress chain of one resolution.

    Attributes:
        waiting_for: Name of the bean slot this session is blocked on

    Example (internal usage)::

        session = ResolutionSession()
        with session.enter("userService"):
            with session.enter("database"):
                session.path  # ('userService', 'database')
    """

    def __init__(self):
        self._in_progress: List[str] = []
        self.waiting_for: Optional[str] = None

    def __contains__(self, bean_name: object) -> bool:
        return bean_name in self._in_progress

    def __len__(self) -> int:
        return len(self._in_progress)

    @property
    def path(self) -> Tuple[str, ...]:
        """Names under construction, outermost first"""
        return tuple(self._in_progress)

    @contextmanager
    def enter(self, bean_name: str) -> Iterator[None]:
        """Mark a bean as in progress for the duration of the block.

        The marker is cleared on the way out whether construction
        succeeded or failed.
        """
        self._in_progress.append(bean_name)
        try:
            yield
        finally:
            self._in_progress.pop()

    def __repr__(self) -> str:
        return f"<ResolutionSession path={' -> '.join(self._in_progress) or '-'}>"
