"""
Once-initialised cache slot for lazily resolved selector fields.
"""

import threading
from typing import Callable, Generic, Optional, Tuple, TypeVar

from selectorkit.exceptions import ResolutionError

T = TypeVar("T")


class LazySlot(Generic[T]):
    """
    Memoize the outcome of a computation, success or ResolutionError.

    The computation runs outside the lock; only the compare-and-set of the
    outcome is guarded. Racing first accesses may both compute, but every
    caller observes whichever outcome was stored first.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._outcome: Optional[Tuple[Optional[T], Optional[ResolutionError]]] = None

    @property
    def is_set(self) -> bool:
        return self._outcome is not None

    def get(self, compute: Callable[[], T]) -> T:
        outcome = self._outcome
        if outcome is None:
            try:
                candidate = (compute(), None)
            except ResolutionError as e:
                candidate = (None, e)
            with self._lock:
                if self._outcome is None:
                    self._outcome = candidate
                outcome = self._outcome

        value, error = outcome
        if error is not None:
            raise error
        return value
