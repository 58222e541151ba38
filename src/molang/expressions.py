"""Expression tree produced by the parser.

Every node knows its static width (``return_count``) and how to emit
Python source for itself. Scalar nodes produce a Python expression string
via :meth:`MolangExpr.emit_scalar`, possibly writing setup statements to
the writer first. Any node can write its values into a region of the
scratch buffer via :meth:`MolangExpr.emit_into`.

Generated code sees these globals: ``_vars`` (the actor variable store),
``_scratch`` (the instance's :class:`~molang.scratch.ScratchSpace`) and the
helpers in :data:`molang.runtime.HELPERS`.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

from molang.codegen.context import CompilationContext
from molang.codegen.writer import SourceWriter
from molang.runtime import HELPERS, f32
from molang.variables import ActorVariable

VARS = "_vars"


def float_literal(value: float) -> str:
    """Python source for a single precision constant, including inf and nan."""
    value = f32(float(value))
    if math.isnan(value):
        return "float('nan')"
    if math.isinf(value):
        return "float('inf')" if value > 0 else "float('-inf')"
    return repr(value)


class MolangExpr(ABC):
    """Base class for value-producing nodes."""

    @property
    @abstractmethod
    def return_count(self) -> int:
        """Number of floats this expression produces."""

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        """Emit setup code and return a Python expression for the value."""
        raise TypeError(f"{type(self).__name__} of width {self.return_count} is not a scalar")

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        """Emit code storing this expression's values at scratch ``output``."""
        value = self.emit_scalar(writer, ctx)
        writer.line(f"{ctx.slot(output)} = {value}")

    @property
    def is_constant(self) -> bool:
        return False


class MolangStatement(ABC):
    """Base class for nodes executed only for their effect."""

    @abstractmethod
    def emit_statement(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        """Emit the statement's code."""


def emit_operands(
    writer: SourceWriter, ctx: CompilationContext, operands: Sequence[MolangExpr]
) -> list[str]:
    """Emit scalar operands left to right and return their expressions.

    If a later operand needs setup statements, earlier operands are first
    copied into fresh locals so that they still observe the state from
    before that setup ran.
    """
    codes: list[str] = []
    marks: list[int] = []
    for operand in operands:
        codes.append(operand.emit_scalar(writer, ctx))
        marks.append(writer.mark())
    end = writer.mark()
    # Walk backwards so inserted lines don't shift marks still to be used.
    for i in range(len(operands) - 1, -1, -1):
        if operands[i].is_constant:
            continue
        emitted_after = end - marks[i]
        if emitted_after <= 0:
            continue
        local = ctx.local_name(ctx.reserve_locals(1))
        writer.insert(marks[i], f"{local} = {codes[i]}")
        codes[i] = local
    return codes


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


class Constant(MolangExpr):
    """A literal number or a vector of numbers."""

    def __init__(self, values: Sequence[float]) -> None:
        if not values:
            raise ValueError("A constant needs at least one value")
        self.values = tuple(f32(float(v)) for v in values)

    @property
    def return_count(self) -> int:
        return len(self.values)

    @property
    def is_constant(self) -> bool:
        return True

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        if len(self.values) != 1:
            return super().emit_scalar(writer, ctx)
        return float_literal(self.values[0])

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        for i, value in enumerate(self.values):
            writer.line(f"{ctx.slot(output + i)} = {float_literal(value)}")

    def __repr__(self) -> str:
        return f"Constant({list(self.values)!r})"


class LocalRead(MolangExpr):
    """Read a local of the generated function (a context argument or temp)."""

    def __init__(self, local_index: int, name: str = "") -> None:
        self.local_index = local_index
        self.name = name

    @property
    def return_count(self) -> int:
        return 1

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        return ctx.local_name(self.local_index)

    def __repr__(self) -> str:
        return f"LocalRead({self.local_index}, {self.name!r})"


class ActorVariableRead(MolangExpr):
    def __init__(self, variable: ActorVariable) -> None:
        self.variable = variable

    @property
    def return_count(self) -> int:
        return self.variable.size

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        if self.variable.size != 1:
            return super().emit_scalar(writer, ctx)
        return f"{VARS}[{self.variable.offset}]"

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        if self.variable.size == 1:
            super().emit_into(writer, output, ctx)
            return
        start, end = self.variable.offset, self.variable.end
        writer.line(
            f"{ctx.scratch_name}[{output}:{output + self.variable.size}] = {VARS}[{start}:{end}]"
        )

    def __repr__(self) -> str:
        return f"ActorVariableRead({self.variable.name!r})"


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Negate(MolangExpr):
    def __init__(self, operand: MolangExpr) -> None:
        self.operand = operand

    @property
    def return_count(self) -> int:
        return 1

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        return f"(-{self.operand.emit_scalar(writer, ctx)})"


class Not(MolangExpr):
    def __init__(self, operand: MolangExpr) -> None:
        self.operand = operand

    @property
    def return_count(self) -> int:
        return 1

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        return f"(0.0 if {self.operand.emit_scalar(writer, ctx)} else 1.0)"


class BinaryOp(MolangExpr):
    """Arithmetic and comparison on two scalars."""

    ARITHMETIC = {"+": "{} + {}", "-": "{} - {}", "*": "{} * {}", "/": "_div({}, {})"}
    COMPARISON = {"<", "<=", ">", ">=", "==", "!="}

    def __init__(self, op: str, left: MolangExpr, right: MolangExpr) -> None:
        if op not in self.ARITHMETIC and op not in self.COMPARISON:
            raise ValueError(f"Unknown binary operator '{op}'")
        self.op = op
        self.left = left
        self.right = right

    @property
    def return_count(self) -> int:
        return 1

    @property
    def is_constant(self) -> bool:
        return self.left.is_constant and self.right.is_constant

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        left, right = emit_operands(writer, ctx, [self.left, self.right])
        if self.op in self.ARITHMETIC:
            return "_f32(" + self.ARITHMETIC[self.op].format(left, right) + ")"
        return f"(1.0 if {left} {self.op} {right} else 0.0)"

    def __repr__(self) -> str:
        return f"BinaryOp({self.op!r}, {self.left!r}, {self.right!r})"


class LogicalOp(MolangExpr):
    """Short-circuiting ``&&`` and ``||``; the result is 0.0 or 1.0."""

    def __init__(self, op: str, left: MolangExpr, right: MolangExpr) -> None:
        if op not in ("&&", "||"):
            raise ValueError(f"Unknown logical operator '{op}'")
        self.op = op
        self.left = left
        self.right = right

    @property
    def return_count(self) -> int:
        return 1

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        result = ctx.local_name(ctx.reserve_locals(1))
        left = self.left.emit_scalar(writer, ctx)
        # For && the right side runs only when the left is true; for || only when false.
        test = left if self.op == "&&" else f"not {left}"
        shortcut = "0.0" if self.op == "&&" else "1.0"
        with writer.block(f"if {test}:"):
            right = self.right.emit_scalar(writer, ctx)
            writer.line(f"{result} = 1.0 if {right} else 0.0")
        with writer.block("else:"):
            writer.line(f"{result} = {shortcut}")
        return result


class Ternary(MolangExpr):
    """``condition ? if_true : if_false``; only the chosen branch runs."""

    def __init__(self, condition: MolangExpr, if_true: MolangExpr, if_false: MolangExpr) -> None:
        self.condition = condition
        self.if_true = if_true
        self.if_false = if_false

    @property
    def return_count(self) -> int:
        return self.if_true.return_count

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        if self.return_count != 1:
            return super().emit_scalar(writer, ctx)
        result = ctx.local_name(ctx.reserve_locals(1))
        condition = self.condition.emit_scalar(writer, ctx)
        with writer.block(f"if {condition}:"):
            writer.line(f"{result} = {self.if_true.emit_scalar(writer, ctx)}")
        with writer.block("else:"):
            writer.line(f"{result} = {self.if_false.emit_scalar(writer, ctx)}")
        return result

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        if self.return_count == 1:
            super().emit_into(writer, output, ctx)
            return
        condition = self.condition.emit_scalar(writer, ctx)
        with writer.block(f"if {condition}:"):
            self.if_true.emit_into(writer, output, ctx)
        with writer.block("else:"):
            self.if_false.emit_into(writer, output, ctx)


class VectorLiteral(MolangExpr):
    """``[a, b, c]``: several scalars packed side by side."""

    def __init__(self, elements: Sequence[MolangExpr]) -> None:
        self.elements = list(elements)

    @property
    def return_count(self) -> int:
        return len(self.elements)

    @property
    def is_constant(self) -> bool:
        return all(element.is_constant for element in self.elements)

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        if len(self.elements) != 1:
            return super().emit_scalar(writer, ctx)
        return self.elements[0].emit_scalar(writer, ctx)

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        for i, element in enumerate(self.elements):
            element.emit_into(writer, output + i, ctx)


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------


class HelperCall(MolangExpr):
    """Call one of the numeric helpers in :mod:`molang.runtime`."""

    def __init__(self, helper: str, args: Sequence[MolangExpr]) -> None:
        if helper not in HELPERS:
            raise ValueError(f"Unknown runtime helper '{helper}'")
        self.helper = helper
        self.args = list(args)

    @property
    def return_count(self) -> int:
        return 1

    @property
    def is_constant(self) -> bool:
        return all(arg.is_constant for arg in self.args)

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        args = emit_operands(writer, ctx, self.args)
        return f"_f32({self.helper}({', '.join(args)}))"

    def __repr__(self) -> str:
        return f"HelperCall({self.helper!r}, {self.args!r})"


class RuntimeCall(MolangExpr):
    """Call a host function at evaluation time.

    The function receives the argument values as floats and returns a
    float, or a sequence of ``return_count`` floats.
    """

    def __init__(
        self, function: Callable[..., Any], args: Sequence[MolangExpr], return_count: int = 1
    ) -> None:
        self.function = function
        self.args = list(args)
        self._return_count = return_count

    @property
    def return_count(self) -> int:
        return self._return_count

    def _call(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        function = ctx.bind_global(self.function, "fn")
        args = emit_operands(writer, ctx, self.args)
        return f"{function}({', '.join(args)})"

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        if self._return_count != 1:
            return super().emit_scalar(writer, ctx)
        return f"_f32({self._call(writer, ctx)})"

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        if self._return_count == 1:
            super().emit_into(writer, output, ctx)
            return
        call = self._call(writer, ctx)
        targets = ", ".join(ctx.slot(output + i) for i in range(self._return_count))
        writer.line(f"{targets} = {call}")


class Let(MolangExpr):
    """Evaluate ``value`` once into a local, then evaluate ``body``.

    Queries use this to expand into code that refers to an argument more
    than once without evaluating it repeatedly.
    """

    def __init__(self, local_index: int, value: MolangExpr, body: MolangExpr) -> None:
        self.local_index = local_index
        self.value = value
        self.body = body

    @property
    def return_count(self) -> int:
        return self.body.return_count

    def _bind(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        writer.line(f"{ctx.local_name(self.local_index)} = {self.value.emit_scalar(writer, ctx)}")

    def emit_scalar(self, writer: SourceWriter, ctx: CompilationContext) -> str:
        self._bind(writer, ctx)
        return self.body.emit_scalar(writer, ctx)

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        self._bind(writer, ctx)
        self.body.emit_into(writer, output, ctx)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class ExpressionStatement(MolangStatement):
    """An expression evaluated for its side effects; the value is dropped."""

    def __init__(self, expr: MolangExpr) -> None:
        self.expr = expr

    def emit_statement(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        if self.expr.is_constant:
            return
        region = ctx.reserve_output_region(self.expr.return_count)
        self.expr.emit_into(writer, region, ctx)
        ctx.release_output_region(region)


class LocalAssign(MolangStatement):
    def __init__(self, local_index: int, value: MolangExpr) -> None:
        self.local_index = local_index
        self.value = value

    def emit_statement(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        writer.line(f"{ctx.local_name(self.local_index)} = {self.value.emit_scalar(writer, ctx)}")


class ActorVariableAssign(MolangStatement):
    def __init__(self, variable: ActorVariable, value: MolangExpr) -> None:
        self.variable = variable
        self.value = value

    def emit_statement(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        variable = self.variable
        if variable.size == 1:
            writer.line(f"{VARS}[{variable.offset}] = {self.value.emit_scalar(writer, ctx)}")
            return
        # Stage through scratch so the value may read the variable itself.
        region = ctx.reserve_output_region(variable.size)
        self.value.emit_into(writer, region, ctx)
        writer.line(
            f"{VARS}[{variable.offset}:{variable.end}] = "
            f"{ctx.scratch_name}[{region}:{region + variable.size}]"
        )
        ctx.release_output_region(region)


class Return(MolangStatement):
    def __init__(self, value: MolangExpr) -> None:
        self.value = value

    def emit_statement(self, writer: SourceWriter, ctx: CompilationContext) -> None:
        if ctx.result_region is None:
            raise RuntimeError("return emitted outside of a statement sequence")
        self.value.emit_into(writer, ctx.result_region, ctx)
        writer.line(f"return {ctx.scratch_name}")


class StatementSequence(MolangExpr):
    """A ``;``-separated program. Its value comes from ``return``, else zeros."""

    def __init__(self, statements: Sequence[MolangStatement], return_count: int = 1) -> None:
        self.statements = list(statements)
        self._return_count = return_count

    @property
    def return_count(self) -> int:
        return self._return_count

    def emit_into(self, writer: SourceWriter, output: int, ctx: CompilationContext) -> None:
        ctx.result_region = output
        for statement in self.statements:
            statement.emit_statement(writer, ctx)
        for i in range(self._return_count):
            writer.line(f"{ctx.slot(output + i)} = 0.0")
