"""Scratch storage for intermediate values of running expressions."""

from __future__ import annotations

import logging
from array import array
from enum import IntEnum

from molang.allocation import FLOAT_SIZE, AllocationTracker, TrackedState

logger = logging.getLogger(__name__)


class ReentrancyState(IntEnum):
    """How many evaluations are in flight on one instance, saturating at 2."""

    IDLE = 0
    ONE_ACTIVE = 1
    MULTIPLE_ACTIVE = 2

    @classmethod
    def from_depth(cls, depth: int) -> ReentrancyState:
        return cls(min(max(depth, 0), 2))


def zeroed(size: int) -> array:
    """Allocate a float array of ``size`` zeros."""
    return array("f", bytes(size * FLOAT_SIZE))


class ScratchSpace:
    """One shared buffer, plus fresh buffers for nested evaluations.

    The shared buffer is only ever grown by the compiler, which knows how
    many slots each compiled expression needs. Evaluations at depth 2 or
    more must not touch it, because an enclosing evaluation may still be
    using it.
    """

    def __init__(self, tracker: AllocationTracker | None = None) -> None:
        self.buffer = zeroed(0)
        self._tracker = tracker
        self._state: TrackedState | None = None
        if tracker is not None:
            self._state = tracker.track(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def ensure_capacity(self, size: int) -> None:
        """Grow the shared buffer in place to at least ``size`` slots."""
        delta = size - len(self.buffer)
        if delta <= 0:
            return
        if self._state is not None:
            self._state.change_size(delta * FLOAT_SIZE)
        self.buffer.extend(zeroed(delta))
        logger.debug("Grew scratch buffer to %d slots", len(self.buffer))

    def acquire(self, required_size: int, depth: int) -> array:
        """Return the buffer an evaluation at ``depth`` should write into."""
        if ReentrancyState.from_depth(depth) is ReentrancyState.MULTIPLE_ACTIVE:
            buffer = zeroed(required_size)
            if self._tracker is not None:
                self._tracker.track(buffer)
            return buffer
        return self.buffer
