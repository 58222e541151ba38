"""Molang instances: per-host namespaces and the compiler entry point."""

from __future__ import annotations

import logging
from array import array
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Sequence

from molang.allocation import (
    BOOLEAN_SIZE,
    INT_SIZE,
    OBJECT_SIZE,
    REFERENCE_SIZE,
    AllocationTracker,
    TrackedState,
)
from molang.codegen.context import CompilationContext
from molang.codegen.loader import DynamicLoader
from molang.codegen.writer import SourceWriter
from molang.compiled import CompiledMolang
from molang.errors import CompilerBackendError, ContextArityError
from molang.expressions import VARS, MolangExpr
from molang.parsing.molang_parser import MolangParser, canonical_name
from molang.queries import DEFAULT_QUERIES, Query
from molang.runtime import HELPERS
from molang.scratch import ReentrancyState, ScratchSpace
from molang.variables import ActorVariable, VariableNamespace, sized_name

logger = logging.getLogger(__name__)

MAX_CONTEXT_VARIABLES = 8

# Bytes charged per byte of generated source, covering code objects too.
CODE_SIZE_FACTOR = 4


class MolangInstance:
    """Owns the ``v.`` namespace, scratch space and queries for one host.

    Expressions compiled by one instance share its actor variables, and
    variable names are bound to offsets at compile time.

    Not thread-safe. Re-entrant use is supported: anything here may be
    called while an expression compiled by this instance is running.

    Args:
        actor: Host object the queries may consult; opaque to the compiler.
        allocation_tracker: Tracker to charge for allocations, if any.
        queries: Functions available to source code, by name.
        trace: Log the generated Python source of every compile at DEBUG.
    """

    SIZE_ESTIMATE = OBJECT_SIZE + REFERENCE_SIZE * 8 + INT_SIZE + BOOLEAN_SIZE

    def __init__(
        self,
        actor: Any = None,
        allocation_tracker: AllocationTracker | None = None,
        queries: Mapping[str, Query] = DEFAULT_QUERIES,
        trace: bool = False,
    ) -> None:
        self.actor = actor
        self.trace = trace
        self._queries = {canonical_name(name): query for name, query in queries.items()}
        self._allocation_tracker = allocation_tracker
        self._alloc_state: TrackedState | None = None
        if allocation_tracker is not None:
            size = self.SIZE_ESTIMATE + len(self._queries) * REFERENCE_SIZE * 4
            self._alloc_state = allocation_tracker.track(self, size)
        self.variables = VariableNamespace(allocation_tracker, self._alloc_state)
        self._scratch = ScratchSpace(allocation_tracker)
        self._loader = DynamicLoader()
        self._depth = 0

    # -- variables ----------------------------------------------------------

    @property
    def actor_variables(self) -> array:
        """The flat store backing every actor variable."""
        return self.variables.store

    def get_actor_variable(self, name: str) -> ActorVariable | None:
        return self.variables.get(name)

    def get_or_create_actor_variable(self, name: str, size: int = 1) -> ActorVariable:
        return self.variables.get_or_create(name, size)

    def get_value(self, name: str) -> list[float]:
        """Current value(s) of an actor variable, looked up without a size prefix."""
        variable = self.variables.find(name)
        if variable is None:
            raise KeyError(name)
        return self.actor_variables[variable.offset : variable.end].tolist()

    def set_value(self, name: str, *values: float) -> None:
        """Set an actor variable, creating it (sized to ``values``) if needed."""
        variable = self.variables.find(name)
        if variable is None:
            variable = self.get_or_create_actor_variable(sized_name(name, len(values)), len(values))
        if len(values) != variable.size:
            raise ValueError(f"Variable '{name}' holds {variable.size} values, got {len(values)}")
        for i, value in enumerate(values):
            self.actor_variables[variable.offset + i] = value

    # -- queries --------------------------------------------------------------

    def get_query(self, name: str) -> Query | None:
        return self._queries.get(canonical_name(name))

    # -- re-entrancy ----------------------------------------------------------

    @property
    def scratch(self) -> ScratchSpace:
        return self._scratch

    @property
    def depth(self) -> int:
        """Number of evaluations currently running on this instance."""
        return self._depth

    @property
    def reentrancy_state(self) -> ReentrancyState:
        return ReentrancyState.from_depth(self._depth)

    @contextmanager
    def evaluation(self) -> Iterator[int]:
        """Bracket one evaluation; yields the depth it runs at."""
        self._depth += 1
        try:
            yield self._depth
        finally:
            self._depth -= 1

    # -- compiling --------------------------------------------------------------

    def compile(
        self,
        source: str,
        context_variables: Sequence[str] = (),
        constants: Mapping[str, Sequence[float]] | None = None,
    ) -> CompiledMolang:
        """Compile ``source`` into a callable bound to this instance.

        Args:
            source: Molang source text.
            context_variables: Names of the positional arguments, at most 8.
            constants: Named constants (each one or more floats).

        Raises:
            ContextArityError: More than 8 context variables were given.
            MolangCompileError: The source is invalid.
            CompilerBackendError: Code generation failed (a compiler bug).
        """
        arg_count = len(context_variables)
        if arg_count > MAX_CONTEXT_VARIABLES:
            raise ContextArityError(
                f"Must have at most {MAX_CONTEXT_VARIABLES} context variables, got {arg_count}"
            )

        parser = MolangParser(source, self, context_variables, constants)
        expr = parser.parse_all()
        scratch_local = arg_count
        first_unused_local = scratch_local + 1 + parser.max_locals

        try:
            name = self._loader.fetch_unique_name()
            ctx = CompilationContext(scratch_local, first_unused_local)
            code = self._generate(name, expr, arg_count, parser.max_locals, ctx)
        except Exception as ex:
            raise CompilerBackendError(f"Failed to compile molang: {source!r}") from ex

        # Resize the shared scratch buffer if needed
        self._scratch.ensure_capacity(ctx.max_output_slots)

        # Pay for the generated code
        if self._alloc_state is not None:
            self._alloc_state.change_size(len(code) * CODE_SIZE_FACTOR)

        try:
            namespace: dict[str, Any] = dict(HELPERS)
            namespace.update(ctx.globals)
            namespace[VARS] = self.actor_variables
            namespace["_scratch"] = self._scratch
            routine = self._loader.load(name, code, namespace)
        except Exception as ex:
            raise CompilerBackendError(f"Failed to load molang: {source!r}") from ex

        if self.trace:
            logger.debug("Generated %s for %r:\n%s", name, source, code)
        logger.debug(
            "Compiled %r as %s (%d args, %d results, %d scratch slots)",
            source,
            name,
            arg_count,
            expr.return_count,
            ctx.max_output_slots,
        )
        return CompiledMolang(self, routine, arg_count, expr.return_count, name, code)

    def _generate(
        self,
        name: str,
        expr: MolangExpr,
        arg_count: int,
        temp_count: int,
        ctx: CompilationContext,
    ) -> str:
        writer = SourceWriter()
        params = ", ".join(["_depth"] + [ctx.local_name(i) for i in range(arg_count)])
        with writer.block(f"def {name}({params}):"):
            header = writer.mark()
            output = ctx.reserve_output_region(expr.return_count)
            expr.emit_into(writer, output, ctx)
            writer.line(f"return {ctx.scratch_name}")
            # The scratch size is only known now that the body is emitted.
            for i in range(temp_count - 1, -1, -1):
                writer.insert(header, f"{ctx.local_name(ctx.scratch_local + 1 + i)} = 0.0")
            writer.insert(
                header,
                f"{ctx.scratch_name} = _scratch.acquire({ctx.max_output_slots}, _depth)",
            )
        return writer.get_code()
