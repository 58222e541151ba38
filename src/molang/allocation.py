"""Allocation accounting for hosts that enforce a memory budget.

The compiler reports every allocation whose size the user controls
(variables, variable names, store growth, scratch growth, generated code)
to an :class:`AllocationTracker`. The tracker may refuse by raising the
host's error type, which aborts whatever operation was in progress.
"""

from __future__ import annotations

import logging
import weakref
from array import array
from typing import Any, Callable

from molang.errors import MolangMemoryError

logger = logging.getLogger(__name__)

# Rough per-unit sizes used by estimates, in bytes.
OBJECT_SIZE = 16
REFERENCE_SIZE = 8
INT_SIZE = 4
FLOAT_SIZE = 4
BOOLEAN_SIZE = 1


def estimate_size(obj: Any) -> int:
    """Estimate the footprint of a string or numeric array."""
    if isinstance(obj, str):
        return OBJECT_SIZE + INT_SIZE + len(obj) * 2
    if isinstance(obj, array):
        return OBJECT_SIZE + INT_SIZE + len(obj) * obj.itemsize
    if isinstance(obj, (bytes, bytearray)):
        return OBJECT_SIZE + INT_SIZE + len(obj)
    raise TypeError(f"Cannot estimate the size of {type(obj).__name__}; pass an explicit size")


class TrackedState:
    """Handle for one tracked object; its size can change over time."""

    def __init__(self, tracker: AllocationTracker, size: int) -> None:
        self._tracker = tracker
        self.size = 0
        self.change_size(size)

    def change_size(self, delta: int) -> None:
        """Grow (or shrink) this object's charge by ``delta`` bytes."""
        self._tracker._charge(delta)
        self.size += delta

    def release(self) -> None:
        """Refund the whole charge; called once the object is collected."""
        self._tracker._charge(-self.size)
        self.size = 0


class AllocationTracker:
    """Byte-budget tracker.

    Args:
        budget: Maximum number of bytes that may be charged, or None for
            unlimited (tracking only).
        error_factory: Called with a message to build the exception raised
            when the budget would be exceeded.
    """

    def __init__(
        self,
        budget: int | None = None,
        error_factory: Callable[[str], BaseException] = MolangMemoryError,
    ) -> None:
        self.budget = budget
        self.error_factory = error_factory
        self.used = 0

    def track(self, obj: Any, size: int | None = None) -> TrackedState:
        """Start tracking ``obj`` with an initial size in bytes.

        The charge is refunded when ``obj`` is garbage collected. Objects
        that cannot be weakly referenced (such as strings) stay charged.
        """
        if size is None:
            size = estimate_size(obj)
        state = TrackedState(self, size)
        try:
            weakref.finalize(obj, state.release)
        except TypeError:
            pass
        return state

    def _charge(self, delta: int) -> None:
        if self.budget is not None and delta > 0 and self.used + delta > self.budget:
            raise self.error_factory(
                f"Allocation of {delta} bytes exceeds budget "
                f"({self.used} of {self.budget} bytes in use)"
            )
        self.used += delta
        logger.debug("Charged %d bytes, %d in use", delta, self.used)
