"""Compiled Molang expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from molang.runtime import f32

if TYPE_CHECKING:
    from molang.instance import MolangInstance


class CompiledMolang:
    """An expression compiled for one instance.

    Call :meth:`evaluate` with one number per context variable; it returns
    ``return_count`` floats. Evaluation reads and writes the instance's
    actor variables, and may be nested inside another evaluation on the
    same instance.
    """

    def __init__(
        self,
        instance: MolangInstance,
        routine: Callable[..., Any],
        arg_count: int,
        return_count: int,
        name: str,
        source: str,
        result_offset: int = 0,
    ) -> None:
        self._instance = instance
        self._routine = routine
        self._arg_count = arg_count
        self._return_count = return_count
        self._name = name
        self._source = source
        self._result_offset = result_offset

    @property
    def instance(self) -> MolangInstance:
        return self._instance

    @property
    def arg_count(self) -> int:
        return self._arg_count

    @property
    def return_count(self) -> int:
        return self._return_count

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> str:
        """The generated Python source."""
        return self._source

    def evaluate(self, *args: float) -> list[float]:
        """Run the expression and return its values."""
        if len(args) != self._arg_count:
            raise TypeError(
                f"{self._name} takes {self._arg_count} context value"
                f"{'s' if self._arg_count != 1 else ''}, got {len(args)}"
            )
        values = [f32(float(arg)) for arg in args]
        with self._instance.evaluation() as depth:
            buffer = self._routine(depth, *values)
            start = self._result_offset
            return buffer[start : start + self._return_count].tolist()

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"CompiledMolang({self._name!r}, args={self._arg_count}, returns={self._return_count})"
