"""Queries: functions callable from Molang source.

A query runs while the source is being parsed. It receives the already
parsed arguments and returns the expression to splice in at the call
site, so most queries behave like macros. Queries may also declare temps
or actor variables through the parser they are given.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Protocol, Sequence

from molang.errors import MolangCompileError
from molang.expressions import (
    BinaryOp,
    Constant,
    HelperCall,
    Let,
    LocalRead,
    MolangExpr,
    RuntimeCall,
)

if TYPE_CHECKING:
    from molang.parsing.molang_parser import MolangParser


class Query(Protocol):
    def __call__(
        self,
        parser: MolangParser,
        args: list[MolangExpr],
        source: str,
        name_start: int,
        name_end: int,
    ) -> MolangExpr: ...


def check_args(
    args: Sequence[MolangExpr], arity: int, source: str, name_start: int, name_end: int
) -> None:
    """Raise if the call does not have exactly ``arity`` scalar arguments."""
    name = source[name_start:name_end]
    if len(args) != arity:
        raise MolangCompileError(
            f"'{name}' expects {arity} argument{'s' if arity != 1 else ''}, got {len(args)}",
            source,
            name_start,
            name_end,
        )
    for arg in args:
        if arg.return_count != 1:
            raise MolangCompileError(
                f"Arguments to '{name}' must be single values", source, name_start, name_end
            )


def helper_query(helper: str, arity: int) -> Query:
    """A query that calls a runtime helper with its arguments."""

    def bind(parser: MolangParser, args: list[MolangExpr], source: str, start: int, end: int) -> MolangExpr:
        check_args(args, arity, source, start, end)
        return HelperCall(helper, args)

    return bind


def constant_query(*values: float) -> Query:
    """A zero-argument query that expands to a constant."""

    def bind(parser: MolangParser, args: list[MolangExpr], source: str, start: int, end: int) -> MolangExpr:
        check_args(args, 0, source, start, end)
        return Constant(values)

    return bind


def runtime_query(function: Callable[..., Any], arity: int, return_count: int = 1) -> Query:
    """A query that calls ``function`` each time the expression is evaluated.

    This is the way for an expression to reach back into the host, for
    example to evaluate another compiled expression.
    """

    def bind(parser: MolangParser, args: list[MolangExpr], source: str, start: int, end: int) -> MolangExpr:
        check_args(args, arity, source, start, end)
        return RuntimeCall(function, args, return_count)

    return bind


def _clamp(parser: MolangParser, args: list[MolangExpr], source: str, start: int, end: int) -> MolangExpr:
    check_args(args, 3, source, start, end)
    value, low, high = args
    return HelperCall("_min", [HelperCall("_max", [value, low]), high])


def _lerp(parser: MolangParser, args: list[MolangExpr], source: str, start: int, end: int) -> MolangExpr:
    check_args(args, 3, source, start, end)
    a, b, t = args
    # a + (b - a) * t, evaluating a only once
    local = parser.allocate_local()
    a_value = LocalRead(local)
    body = BinaryOp("+", a_value, BinaryOp("*", BinaryOp("-", b, a_value), t))
    return Let(local, a, body)


DEFAULT_QUERIES: dict[str, Query] = {
    "math.abs": helper_query("_abs", 1),
    "math.ceil": helper_query("_ceil", 1),
    "math.floor": helper_query("_floor", 1),
    "math.round": helper_query("_round", 1),
    "math.trunc": helper_query("_trunc", 1),
    "math.sqrt": helper_query("_sqrt", 1),
    "math.sin": helper_query("_sin", 1),
    "math.cos": helper_query("_cos", 1),
    "math.atan2": helper_query("_atan2", 2),
    "math.exp": helper_query("_exp", 1),
    "math.ln": helper_query("_ln", 1),
    "math.pow": helper_query("_pow", 2),
    "math.min": helper_query("_min", 2),
    "math.max": helper_query("_max", 2),
    "math.mod": helper_query("_mod", 2),
    "math.clamp": _clamp,
    "math.lerp": _lerp,
    "math.pi": constant_query(math.pi),
}
