"""Per-instance actor variable namespace."""

from __future__ import annotations

import logging
from array import array
from dataclasses import dataclass
from typing import Iterator

from molang.allocation import (
    FLOAT_SIZE,
    INT_SIZE,
    OBJECT_SIZE,
    REFERENCE_SIZE,
    AllocationTracker,
    TrackedState,
)
from molang.errors import VariableSizeError

logger = logging.getLogger(__name__)

SIZE_DELIMITER = "$"


@dataclass(frozen=True)
class ActorVariable:
    """A named slot range in the instance's variable store.

    ``name`` may carry its size as a prefix, e.g. ``"3$pos"`` for a
    three-wide vector. Offsets never change once assigned.
    """

    name: str
    size: int
    offset: int

    SIZE_ESTIMATE = OBJECT_SIZE + REFERENCE_SIZE + INT_SIZE * 2

    @property
    def base_name(self) -> str:
        """The name without any size prefix."""
        return self.name.partition(SIZE_DELIMITER)[2] or self.name

    @property
    def end(self) -> int:
        return self.offset + self.size


def encoded_size(name: str) -> int | None:
    """Return the size encoded in ``name``, or None if it has no prefix."""
    if SIZE_DELIMITER not in name:
        return None
    prefix = name[: name.index(SIZE_DELIMITER)]
    try:
        return int(prefix)
    except ValueError:
        return -1


def sized_name(base_name: str, size: int) -> str:
    """Build the storage name for a variable of the given width."""
    if size == 1:
        return base_name
    return f"{size}{SIZE_DELIMITER}{base_name}"


class VariableNamespace:
    """Maps variable names to stable offsets in a flat float store.

    Args:
        tracker: Optional allocation tracker to charge for new variables.
        owner_state: The owning instance's tracked state; store growth is
            charged against it.
    """

    def __init__(
        self,
        tracker: AllocationTracker | None = None,
        owner_state: TrackedState | None = None,
    ) -> None:
        self.store: array = array("f")
        self._tracker = tracker
        self._owner_state = owner_state
        self._cursor = 0
        self._by_name: dict[str, ActorVariable] = {}

    @property
    def cursor(self) -> int:
        """Offset that the next new variable will receive."""
        return self._cursor

    def get(self, name: str) -> ActorVariable | None:
        """Look up a variable by its exact (possibly size-prefixed) name."""
        return self._by_name.get(name)

    def find(self, base_name: str) -> ActorVariable | None:
        """Look up a variable by name, ignoring any size prefix."""
        existing = self._by_name.get(base_name)
        if existing is not None:
            return existing
        for variable in self._by_name.values():
            if variable.base_name == base_name:
                return variable
        return None

    def get_or_create(self, name: str, size: int) -> ActorVariable:
        """Return the variable called ``name``, creating it if needed.

        Raises:
            VariableSizeError: If ``size`` is not positive or disagrees with
                the size encoded in ``name``.
        """
        existing = self._by_name.get(name)
        if existing is not None:
            if existing.size != size:
                raise VariableSizeError(
                    f"Variable '{name}' already has size {existing.size}, not {size}"
                )
            return existing
        self._validate(name, size)

        offset = self._cursor
        new_cursor = offset + size
        if new_cursor >= len(self.store):
            self._grow(new_cursor * 2)

        variable = ActorVariable(name=name, size=size, offset=offset)
        if self._tracker is not None:
            if self._owner_state is not None:
                # Map entry overhead
                self._owner_state.change_size(REFERENCE_SIZE * 4)
            self._tracker.track(variable, ActorVariable.SIZE_ESTIMATE)
            self._tracker.track(name)

        self._by_name[name] = variable
        self._cursor = new_cursor
        logger.debug("Created actor variable %r at offset %d (size %d)", name, offset, size)
        return variable

    def _validate(self, name: str, size: int) -> None:
        if size <= 0:
            raise VariableSizeError(f"Variable '{name}' must have a positive size, got {size}")
        declared = encoded_size(name)
        expected = 1 if declared is None else declared
        if expected != size:
            raise VariableSizeError(
                f"Variable '{name}' encodes size {expected} but size {size} was requested"
            )

    def _grow(self, new_length: int) -> None:
        delta = new_length - len(self.store)
        if self._owner_state is not None:
            self._owner_state.change_size(delta * FLOAT_SIZE)
        self.store.extend(array("f", bytes(delta * self.store.itemsize)))
        logger.debug("Grew variable store to %d slots", len(self.store))

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ActorVariable]:
        return iter(sorted(self._by_name.values(), key=lambda v: v.offset))
