"""Slot bookkeeping while emitting code for one expression tree."""

from __future__ import annotations

from typing import Any


class CompilationContext:
    """Tracks scratch output regions and call-frame locals for one compile.

    Two independent allocators live here. Output regions are slot ranges in
    the scratch buffer, valid for the duration of one evaluation; the
    largest extent ever reserved decides how big the scratch buffer must
    be. Locals are variables of the generated function itself and are
    handed out monotonically.

    Args:
        scratch_local: Local slot index that holds the scratch buffer.
        first_unused_local: First local slot free for emitted code.
        first_output_slot: First scratch slot free for output regions.
    """

    def __init__(self, scratch_local: int, first_unused_local: int, first_output_slot: int = 0) -> None:
        self.scratch_local = scratch_local
        self._next_local = first_unused_local
        self._next_output_slot = first_output_slot
        self._max_output_slots = first_output_slot
        self._globals: dict[str, Any] = {}
        self.result_region: int | None = None

    # -- output regions ------------------------------------------------

    def reserve_output_region(self, width: int) -> int:
        """Reserve ``width`` contiguous scratch slots; return the first."""
        if width < 0:
            raise ValueError(f"Output region width must not be negative, got {width}")
        base = self._next_output_slot
        self._next_output_slot += width
        self._max_output_slots = max(self._max_output_slots, self._next_output_slot)
        return base

    def release_output_region(self, base: int) -> None:
        """Free every region reserved at or after ``base``."""
        if base > self._next_output_slot:
            raise ValueError(f"Region {base} was never reserved")
        self._next_output_slot = base

    @property
    def max_output_slots(self) -> int:
        """Largest scratch extent reserved so far."""
        return self._max_output_slots

    # -- locals -----------------------------------------------------------

    def next_free_local(self) -> int:
        """Index of the next local that :meth:`reserve_locals` would return."""
        return self._next_local

    def reserve_locals(self, count: int) -> int:
        """Reserve ``count`` locals; return the index of the first."""
        first = self._next_local
        self._next_local += count
        return first

    @staticmethod
    def local_name(index: int) -> str:
        return f"_l{index}"

    @property
    def scratch_name(self) -> str:
        return self.local_name(self.scratch_local)

    def slot(self, index: int) -> str:
        """Source text addressing scratch slot ``index``."""
        return f"{self.scratch_name}[{index}]"

    # -- runtime objects --------------------------------------------------

    def bind_global(self, value: Any, hint: str = "obj") -> str:
        """Expose ``value`` to the generated code; return the name to use."""
        for name, bound in self._globals.items():
            if bound is value:
                return name
        name = f"_{hint}{len(self._globals)}"
        self._globals[name] = value
        return name

    @property
    def globals(self) -> dict[str, Any]:
        return dict(self._globals)
