"""Tests for the Molang lexer and parser."""

import ply.yacc as yacc
import pytest

from molang import MolangInstance
from molang.errors import MolangCompileError
from molang.expressions import (
    ActorVariableAssign,
    ActorVariableRead,
    BinaryOp,
    Constant,
    LocalRead,
    StatementSequence,
    Ternary,
    VectorLiteral,
)
from molang.parsing import MolangLexer, MolangParser
from molang.parsing.molang_parser import canonical_name


class TestMolangLexer:
    """Tests for the Molang lexer."""

    @pytest.fixture
    def lexer(self):
        lexer = MolangLexer()
        lexer.build()
        return lexer

    def test_tokenize_arithmetic(self, lexer):
        tokens = lexer.tokenize("1 + v.x * 2.5")
        assert [t.type for t in tokens] == ["NUMBER", "PLUS", "NAME", "TIMES", "NUMBER"]
        assert tokens[0].value == 1.0
        assert tokens[2].value == "v.x"

    def test_two_character_operators(self, lexer):
        tokens = lexer.tokenize("a <= b == c != d >= e && f || !g")
        types = [t.type for t in tokens]
        assert types == [
            "NAME", "LE", "NAME", "EQ", "NAME", "NEQ", "NAME", "GE", "NAME",
            "AND", "NAME", "OR", "NOT", "NAME",
        ]

    def test_names_are_lowercased(self, lexer):
        tokens = lexer.tokenize("Variable.Speed")
        assert tokens[0].value == "variable.speed"

    def test_return_keyword(self, lexer):
        tokens = lexer.tokenize("return 1;")
        assert [t.type for t in tokens] == ["RETURN", "NUMBER", "SEMI"]

    def test_float_suffix(self, lexer):
        tokens = lexer.tokenize("0.5f .25")
        assert [t.value for t in tokens] == [0.5, 0.25]

    def test_newlines_ignored(self, lexer):
        tokens = lexer.tokenize("1\n+\n2")
        assert [t.type for t in tokens] == ["NUMBER", "PLUS", "NUMBER"]

    def test_illegal_character(self, lexer):
        with pytest.raises(MolangCompileError) as info:
            lexer.tokenize("1 # 2")
        assert info.value.start == 2


class TestMolangParser:
    """Tests for parse trees and name resolution."""

    @pytest.fixture
    def instance(self):
        return MolangInstance()

    def _parse(self, instance, source, context=(), constants=None):
        return MolangParser(source, instance, context, constants).parse_all()

    def test_precedence(self, instance):
        expr = self._parse(instance, "1 + 2 * 3")
        assert isinstance(expr, BinaryOp)
        assert expr.op == "+"
        assert isinstance(expr.right, BinaryOp)
        assert expr.right.op == "*"

    def test_ternary_is_loosest(self, instance):
        expr = self._parse(instance, "1 < 2 ? 3 : 4 + 5")
        assert isinstance(expr, Ternary)
        assert isinstance(expr.condition, BinaryOp)
        assert isinstance(expr.if_false, BinaryOp)

    def test_negative_literal_folds(self, instance):
        expr = self._parse(instance, "-2")
        assert isinstance(expr, Constant)
        assert expr.values == (-2.0,)

    def test_actor_variable_created_on_read(self, instance):
        expr = self._parse(instance, "variable.speed")
        assert isinstance(expr, ActorVariableRead)
        assert instance.get_actor_variable("speed") is expr.variable

    def test_context_variables_are_arguments(self, instance):
        expr = self._parse(instance, "c.b", context=["a", "context.b"])
        assert isinstance(expr, LocalRead)
        assert expr.local_index == 1

    def test_unknown_context_variable(self, instance):
        with pytest.raises(MolangCompileError, match="Unknown context variable"):
            self._parse(instance, "c.nope", context=["a"])

    def test_temps_follow_scratch_local(self, instance):
        parser = MolangParser("t.a = 1; t.b = t.a; return t.b;", instance, ["x", "y"])
        parser.parse_all()
        # locals: x=0, y=1, scratch=2, temps from 3
        assert parser.max_locals == 2
        assert parser.declare_temp("a") == 3
        assert parser.declare_temp("b") == 4

    def test_constants(self, instance):
        expr = self._parse(instance, "Offset", constants={"offset": [1.0, 2.0, 3.0]})
        assert isinstance(expr, Constant)
        assert expr.return_count == 3

    def test_vector_literal(self, instance):
        expr = self._parse(instance, "[1, 2, v.x]")
        assert isinstance(expr, VectorLiteral)
        assert expr.return_count == 3

    def test_statement_list_width_from_return(self, instance):
        expr = self._parse(instance, "t.x = 1; return [t.x, 2];")
        assert isinstance(expr, StatementSequence)
        assert expr.return_count == 2

    def test_statement_list_without_return(self, instance):
        expr = self._parse(instance, "v.a = 1; v.b = 2")
        assert isinstance(expr, StatementSequence)
        assert expr.return_count == 1

    def test_single_assignment(self, instance):
        expr = self._parse(instance, "v.a = 4")
        assert isinstance(expr, StatementSequence)
        assert isinstance(expr.statements[0], ActorVariableAssign)

    def test_vector_assignment_creates_sized_variable(self, instance):
        self._parse(instance, "v.pos = [1, 2, 3];")
        variable = instance.get_actor_variable("3$pos")
        assert variable is not None
        assert variable.size == 3

    def test_canonical_name(self):
        assert canonical_name("Query.Foo") == "q.foo"
        assert canonical_name("temp.x") == "t.x"
        assert canonical_name("math.sin") == "math.sin"


class TestParserTables:
    def test_tables_are_reused(self, monkeypatch):
        instance = MolangInstance()
        MolangParser("1 + 2", instance).parse_all()

        def regenerate(*args, **kwargs):
            raise AssertionError("LALR tables were regenerated")

        monkeypatch.setattr(yacc, "LRGeneratedTable", regenerate)
        expr = MolangParser("3 * 4", instance).parse_all()
        assert isinstance(expr, BinaryOp)


class TestParseErrors:
    """Tests for compile errors raised by the parser."""

    @pytest.fixture
    def instance(self):
        return MolangInstance()

    def _parse(self, instance, source, **kwargs):
        return MolangParser(source, instance, **kwargs).parse_all()

    def test_syntax_error_position(self, instance):
        with pytest.raises(MolangCompileError) as info:
            self._parse(instance, "1 + * 2")
        assert info.value.start == 4
        assert "^" in str(info.value)

    def test_unexpected_end(self, instance):
        with pytest.raises(MolangCompileError, match="end of input"):
            self._parse(instance, "1 +")

    def test_empty_source(self, instance):
        with pytest.raises(MolangCompileError):
            self._parse(instance, "   ")

    def test_unknown_identifier(self, instance):
        with pytest.raises(MolangCompileError, match="Unknown identifier") as info:
            self._parse(instance, "1 + foo.bar")
        assert info.value.start == 4
        assert info.value.end == 11

    def test_unknown_function(self, instance):
        with pytest.raises(MolangCompileError, match="Unknown function"):
            self._parse(instance, "q.nothing(1)")

    def test_vector_in_arithmetic(self, instance):
        with pytest.raises(MolangCompileError, match="single value"):
            self._parse(instance, "[1, 2] + 1")

    def test_ternary_width_mismatch(self, instance):
        with pytest.raises(MolangCompileError, match="different widths"):
            self._parse(instance, "1 ? [1, 2] : 3")

    def test_conflicting_returns(self, instance):
        with pytest.raises(MolangCompileError, match="conflicts"):
            self._parse(instance, "return 1; return [1, 2];")

    def test_vector_into_temp(self, instance):
        with pytest.raises(MolangCompileError, match="single value"):
            self._parse(instance, "t.x = [1, 2];")

    def test_assign_to_context(self, instance):
        with pytest.raises(MolangCompileError, match="Cannot assign"):
            self._parse(instance, "c.x = 1;", context_variables=["x"])

    def test_assign_wrong_width(self, instance):
        instance.get_or_create_actor_variable("x", 1)
        with pytest.raises(MolangCompileError, match="Cannot assign"):
            self._parse(instance, "v.x = [1, 2];")
