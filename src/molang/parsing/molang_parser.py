"""Parser for Molang source.

Names are resolved while parsing: actor variables get their offsets from
the instance, temps and context variables become locals of the generated
function, constants are inlined and query calls are expanded in place.
The resulting tree needs no name lookups at evaluation time.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Mapping, Sequence

import ply.yacc as yacc

from molang.errors import MolangCompileError
from molang.expressions import (
    ActorVariableAssign,
    ActorVariableRead,
    BinaryOp,
    Constant,
    ExpressionStatement,
    LocalAssign,
    LocalRead,
    LogicalOp,
    MolangExpr,
    MolangStatement,
    Negate,
    Not,
    Return,
    StatementSequence,
    Ternary,
    VectorLiteral,
)
from molang.parsing.molang_lexer import MolangLexer
from molang.variables import ActorVariable, sized_name

if TYPE_CHECKING:
    from molang.instance import MolangInstance

_PARSER_DIR = os.path.dirname(os.path.abspath(__file__))
TABMODULE = "molang.parsing._molang_parsetab"

# Long prefixes and the short form they mean.
PREFIX_ALIASES = {
    "variable": "v",
    "temp": "t",
    "context": "c",
    "query": "q",
}


def canonical_name(name: str) -> str:
    """Lowercase ``name`` and replace a long prefix with its short form."""
    name = name.lower()
    head, dot, rest = name.partition(".")
    return PREFIX_ALIASES.get(head, head) + dot + rest


def context_key(name: str) -> str:
    """Key a context variable by its name without any ``c.`` prefix."""
    name = canonical_name(name)
    if name.startswith("c."):
        return name[2:]
    return name


class MolangParser:
    """Parses one Molang program against an instance.

    Args:
        source: The program text.
        instance: Instance supplying actor variables and queries.
        context_variables: Names of the positional arguments, in order.
        constants: Named constant values, each a sequence of floats.
    """

    tokens = MolangLexer.tokens

    # Operator precedence: loosest to tightest
    precedence = (
        ("right", "QUESTION", "COLON"),
        ("left", "OR"),
        ("left", "AND"),
        ("left", "EQ", "NEQ"),
        ("left", "LT", "LE", "GT", "GE"),
        ("left", "PLUS", "MINUS"),
        ("left", "TIMES", "DIVIDE"),
        ("right", "NOT", "UMINUS"),
    )

    def __init__(
        self,
        source: str,
        instance: MolangInstance,
        context_variables: Sequence[str] = (),
        constants: Mapping[str, Sequence[float]] | None = None,
    ) -> None:
        self.source = source
        self.instance = instance
        self._context = {context_key(name): i for i, name in enumerate(context_variables)}
        self._constants = {
            canonical_name(name): tuple(values) for name, values in (constants or {}).items()
        }
        # Local layout: arguments, then the scratch buffer, then temps.
        self._first_local = len(context_variables) + 1
        self._temps: dict[str, int] = {}
        self.max_locals = 0
        self._return_width: int | None = None
        self.lexer = MolangLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    # -- program structure ------------------------------------------------

    def p_program_expression(self, p: yacc.YaccProduction) -> None:
        """program : expression"""
        p[0] = p[1]

    def p_program_single_statement(self, p: yacc.YaccProduction) -> None:
        """program : effect_statement"""
        p[0] = self._sequence([p[1]])

    def p_program_statements(self, p: yacc.YaccProduction) -> None:
        """program : statement_list"""
        p[0] = self._sequence(p[1])

    def p_program_statements_unterminated(self, p: yacc.YaccProduction) -> None:
        """program : statement_list statement"""
        p[0] = self._sequence(p[1] + [p[2]])

    def p_statement_list_single(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement SEMI"""
        p[0] = [p[1]]

    def p_statement_list_multiple(self, p: yacc.YaccProduction) -> None:
        """statement_list : statement_list statement SEMI"""
        p[0] = p[1] + [p[2]]

    def p_statement_expression(self, p: yacc.YaccProduction) -> None:
        """statement : expression"""
        p[0] = ExpressionStatement(p[1])

    def p_statement_effect(self, p: yacc.YaccProduction) -> None:
        """statement : effect_statement"""
        p[0] = p[1]

    def p_effect_statement_assign(self, p: yacc.YaccProduction) -> None:
        """effect_statement : NAME ASSIGN expression"""
        p[0] = self._assignment(p[1], p[3], p.lexpos(1))

    def p_effect_statement_return(self, p: yacc.YaccProduction) -> None:
        """effect_statement : RETURN expression"""
        width = p[2].return_count
        if self._return_width is None:
            self._return_width = width
        elif self._return_width != width:
            self._fail(
                f"Return of {width} values conflicts with an earlier return of {self._return_width}",
                p.lexpos(1),
                p.lexpos(1) + len("return"),
            )
        p[0] = Return(p[2])

    # -- expressions --------------------------------------------------------

    def p_expression_arithmetic(self, p: yacc.YaccProduction) -> None:
        """expression : expression PLUS expression
                      | expression MINUS expression
                      | expression TIMES expression
                      | expression DIVIDE expression
                      | expression LT expression
                      | expression LE expression
                      | expression GT expression
                      | expression GE expression
                      | expression EQ expression
                      | expression NEQ expression"""
        self._require_scalar(p, 2, p[1], p[3])
        p[0] = BinaryOp(p[2], p[1], p[3])

    def p_expression_logical(self, p: yacc.YaccProduction) -> None:
        """expression : expression AND expression
                      | expression OR expression"""
        self._require_scalar(p, 2, p[1], p[3])
        p[0] = LogicalOp(p[2], p[1], p[3])

    def p_expression_ternary(self, p: yacc.YaccProduction) -> None:
        """expression : expression QUESTION expression COLON expression"""
        self._require_scalar(p, 2, p[1])
        if p[3].return_count != p[5].return_count:
            self._fail(
                f"Ternary branches have different widths "
                f"({p[3].return_count} and {p[5].return_count})",
                p.lexpos(4),
                p.lexpos(4) + 1,
            )
        p[0] = Ternary(p[1], p[3], p[5])

    def p_expression_negate(self, p: yacc.YaccProduction) -> None:
        """expression : MINUS expression %prec UMINUS"""
        self._require_scalar(p, 1, p[2])
        if isinstance(p[2], Constant):
            p[0] = Constant([-p[2].values[0]])
        else:
            p[0] = Negate(p[2])

    def p_expression_not(self, p: yacc.YaccProduction) -> None:
        """expression : NOT expression"""
        self._require_scalar(p, 1, p[2])
        p[0] = Not(p[2])

    def p_expression_group(self, p: yacc.YaccProduction) -> None:
        """expression : LPAREN expression RPAREN"""
        p[0] = p[2]

    def p_expression_vector(self, p: yacc.YaccProduction) -> None:
        """expression : LBRACKET expression_list RBRACKET"""
        self._require_scalar(p, 1, *p[2])
        p[0] = VectorLiteral(p[2])

    def p_expression_number(self, p: yacc.YaccProduction) -> None:
        """expression : NUMBER"""
        p[0] = Constant([p[1]])

    def p_expression_name(self, p: yacc.YaccProduction) -> None:
        """expression : NAME"""
        p[0] = self._resolve(p[1], p.lexpos(1))

    def p_expression_call_empty(self, p: yacc.YaccProduction) -> None:
        """expression : NAME LPAREN RPAREN"""
        p[0] = self._call(p[1], [], p.lexpos(1))

    def p_expression_call(self, p: yacc.YaccProduction) -> None:
        """expression : NAME LPAREN expression_list RPAREN"""
        p[0] = self._call(p[1], p[3], p.lexpos(1))

    def p_expression_list_single(self, p: yacc.YaccProduction) -> None:
        """expression_list : expression"""
        p[0] = [p[1]]

    def p_expression_list_multiple(self, p: yacc.YaccProduction) -> None:
        """expression_list : expression_list COMMA expression"""
        p[0] = p[1] + [p[3]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            width = len(p.value) if isinstance(p.value, str) else 1
            self._fail(f"Syntax error at '{p.value}'", p.lexpos, p.lexpos + width)
        else:
            self._fail("Syntax error at end of input", len(self.source), len(self.source))

    # -- resolution helpers -------------------------------------------------

    def _fail(self, message: str, start: int, end: int | None = None) -> None:
        raise MolangCompileError(message, self.source, start, end)

    def _require_scalar(self, p: yacc.YaccProduction, op_index: int, *operands: MolangExpr) -> None:
        for operand in operands:
            if operand.return_count != 1:
                start = p.lexpos(op_index)
                self._fail(
                    f"Expected a single value but got {operand.return_count}",
                    start,
                    start + len(str(p[op_index])),
                )

    def _sequence(self, statements: list[MolangStatement]) -> StatementSequence:
        return StatementSequence(statements, self._return_width or 1)

    def _resolve(self, name: str, start: int) -> MolangExpr:
        end = start + len(name)
        name = canonical_name(name)
        head, _, rest = name.partition(".")
        if head == "v" and rest:
            existing = self.instance.variables.find(rest)
            if existing is None:
                existing = self.instance.get_or_create_actor_variable(rest, 1)
            return ActorVariableRead(existing)
        if head == "t" and rest:
            return LocalRead(self.declare_temp(rest), name)
        if head == "c" and rest:
            if rest not in self._context:
                self._fail(f"Unknown context variable '{rest}'", start, end)
            return LocalRead(self._context[rest], name)
        if name in self._constants:
            values = self._constants[name]
            if not values:
                self._fail(f"Constant '{name}' has no values", start, end)
            return Constant(values)
        if self.instance.get_query(name) is not None:
            return self._call(name, [], start)
        self._fail(f"Unknown identifier '{name}'", start, end)
        raise AssertionError("unreachable")

    def _call(self, name: str, args: list[MolangExpr], start: int) -> MolangExpr:
        end = start + len(name)
        name = canonical_name(name)
        query = self.instance.get_query(name)
        if query is None:
            self._fail(f"Unknown function '{name}'", start, end)
        result = query(self, args, self.source, start, end)  # type: ignore[misc]
        if not isinstance(result, MolangExpr):
            raise TypeError(f"Query '{name}' returned {type(result).__name__}, not an expression")
        return result

    def _assignment(self, name: str, value: MolangExpr, start: int) -> MolangStatement:
        end = start + len(name)
        name = canonical_name(name)
        head, _, rest = name.partition(".")
        width = value.return_count
        if head == "v" and rest:
            existing = self.instance.variables.find(rest)
            if existing is not None and existing.size != width:
                self._fail(
                    f"Cannot assign {width} values to variable '{rest}' of width {existing.size}",
                    start,
                    end,
                )
            variable = existing or self.instance.get_or_create_actor_variable(
                sized_name(rest, width), width
            )
            return ActorVariableAssign(variable, value)
        if head == "t" and rest:
            if width != 1:
                self._fail(f"Temp variable '{rest}' can only hold a single value", start, end)
            return LocalAssign(self.declare_temp(rest), value)
        self._fail(f"Cannot assign to '{name}'", start, end)
        raise AssertionError("unreachable")

    # -- API for queries ------------------------------------------------------

    def declare_temp(self, name: str) -> int:
        """Return the local index of temp ``name``, declaring it if new."""
        if name not in self._temps:
            self._temps[name] = self.allocate_local()
        return self._temps[name]

    def allocate_local(self) -> int:
        """Reserve an anonymous local; temps start out as 0.0."""
        index = self._first_local + self.max_locals
        self.max_locals += 1
        return index

    def get_or_create_actor_variable(self, name: str, size: int = 1) -> ActorVariable:
        """Declare an actor variable on the instance being compiled for."""
        return self.instance.get_or_create_actor_variable(name, size)

    # -- entry points ---------------------------------------------------------

    def build(self, **kwargs: Any) -> None:
        """Build the parser.

        The LALR tables are generated once and written next to this module;
        later builds load them instead of regenerating.
        """
        kwargs.setdefault("debug", False)
        kwargs.setdefault("write_tables", True)
        kwargs.setdefault("outputdir", _PARSER_DIR)
        kwargs.setdefault("tabmodule", TABMODULE)
        kwargs.setdefault("errorlog", yacc.NullLogger())
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse_all(self) -> MolangExpr:
        """Parse the whole source and return the expression tree."""
        if self.parser is None:
            self.build()
        if not self.source.strip():
            self._fail("Empty expression", 0, 0)
        return self.parser.parse(self.source, lexer=self.lexer.lexer)
