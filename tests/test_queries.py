"""Tests for the default queries and host-defined queries."""

import math

import pytest

from molang import MolangCompileError, MolangInstance, runtime_query
from molang.expressions import BinaryOp, Constant
from molang.queries import DEFAULT_QUERIES, check_args


@pytest.fixture
def instance():
    return MolangInstance()


def _eval(instance, source, *args, context=()):
    return instance.compile(source, context).evaluate(*args)


class TestMathQueries:
    def test_abs_floor_ceil(self, instance):
        assert _eval(instance, "math.abs(-3)") == [3.0]
        assert _eval(instance, "math.floor(2.7)") == [2.0]
        assert _eval(instance, "math.ceil(2.2)") == [3.0]
        assert _eval(instance, "math.trunc(-2.7)") == [-2.0]

    def test_round_half_up(self, instance):
        assert _eval(instance, "math.round(2.5)") == [3.0]
        assert _eval(instance, "math.round(-2.5)") == [-2.0]

    def test_trig_uses_degrees(self, instance):
        assert _eval(instance, "math.sin(90)")[0] == pytest.approx(1.0)
        assert _eval(instance, "math.cos(180)")[0] == pytest.approx(-1.0)
        assert _eval(instance, "math.atan2(1, 1)")[0] == pytest.approx(45.0)

    def test_min_max_clamp(self, instance):
        assert _eval(instance, "math.min(3, 1)") == [1.0]
        assert _eval(instance, "math.max(3, 1)") == [3.0]
        assert _eval(instance, "math.clamp(15, 0, 10)") == [10.0]
        assert _eval(instance, "math.clamp(-5, 0, 10)") == [0.0]
        assert _eval(instance, "math.clamp(5, 0, 10)") == [5.0]

    def test_min_max_propagate_nan(self, instance):
        for source in ("math.min(0 / 0, 1)", "math.min(1, 0 / 0)", "math.max(0 / 0, 1)", "math.max(1, 0 / 0)"):
            assert math.isnan(_eval(instance, source)[0]), source

    def test_clamp_propagates_nan(self, instance):
        assert math.isnan(_eval(instance, "math.clamp(0 / 0, 0, 10)")[0])

    def test_pow_sqrt_exp_ln(self, instance):
        assert _eval(instance, "math.pow(2, 10)") == [1024.0]
        assert _eval(instance, "math.sqrt(16)") == [4.0]
        assert _eval(instance, "math.ln(1)") == [0.0]
        assert _eval(instance, "math.exp(0)") == [1.0]
        assert math.isnan(_eval(instance, "math.sqrt(-1)")[0])

    def test_mod_keeps_dividend_sign(self, instance):
        assert _eval(instance, "math.mod(7, 3)") == [1.0]
        assert _eval(instance, "math.mod(-7, 3)") == [-1.0]
        assert math.isnan(_eval(instance, "math.mod(1, 0)")[0])

    def test_pi_with_and_without_call(self, instance):
        assert _eval(instance, "math.pi")[0] == pytest.approx(math.pi)
        assert _eval(instance, "math.pi()")[0] == pytest.approx(math.pi)

    def test_lerp(self, instance):
        assert _eval(instance, "math.lerp(10, 20, 0.25)") == [12.5]

    def test_lerp_evaluates_first_argument_once(self):
        calls = []

        def start():
            calls.append(1)
            return 10.0

        queries = dict(DEFAULT_QUERIES)
        queries["q.start"] = runtime_query(start, 0)
        instance = MolangInstance(queries=queries)
        assert _eval(instance, "math.lerp(q.start(), 20, 0.5)") == [15.0]
        assert calls == [1]

    def test_nested_calls_with_context(self, instance):
        result = _eval(instance, "math.max(c.a, math.abs(c.b)) * 2", 3, -4, context=["a", "b"])
        assert result == [8.0]

    def test_case_insensitive(self, instance):
        assert _eval(instance, "Math.Abs(-1)") == [1.0]

    def test_wrong_arity(self, instance):
        with pytest.raises(MolangCompileError, match="expects 2 arguments") as info:
            instance.compile("1 + math.pow(2)")
        assert info.value.start == 4
        assert info.value.end == 12

    def test_vector_argument_rejected(self, instance):
        with pytest.raises(MolangCompileError, match="single values"):
            instance.compile("math.abs([1, 2])")


class TestHostQueries:
    def test_macro_expansion(self):
        def double(parser, args, source, start, end):
            check_args(args, 1, source, start, end)
            return BinaryOp("*", args[0], Constant([2.0]))

        instance = MolangInstance(queries={"query.double": double})
        assert _eval(instance, "q.double(21)") == [42.0]
        assert _eval(instance, "query.double(1) + 1") == [3.0]

    def test_query_declares_variable(self):
        from molang.expressions import ActorVariableRead

        def health(parser, args, source, start, end):
            check_args(args, 0, source, start, end)
            return ActorVariableRead(parser.get_or_create_actor_variable("health", 1))

        instance = MolangInstance(queries={"q.health": health})
        compiled = instance.compile("q.health * 2")
        assert instance.get_actor_variable("health") is not None
        instance.set_value("health", 5)
        assert compiled.evaluate() == [10.0]

    def test_query_reads_actor(self):
        class Actor:
            speed = 3.5

        def speed(parser, args, source, start, end):
            return Constant([parser.instance.actor.speed])

        instance = MolangInstance(actor=Actor(), queries={"q.speed": speed})
        assert _eval(instance, "q.speed") == [3.5]

    def test_runtime_query_vector(self):
        instance = MolangInstance(queries={"q.position": runtime_query(lambda: (1, 2, 3), 0, 3)})
        compiled = instance.compile("q.position()")
        assert compiled.return_count == 3
        assert compiled.evaluate() == [1.0, 2.0, 3.0]

    def test_runtime_query_called_every_evaluation(self):
        counter = iter(range(100))
        instance = MolangInstance(queries={"q.tick": runtime_query(lambda: next(counter), 0)})
        compiled = instance.compile("q.tick()")
        assert compiled.evaluate() == [0.0]
        assert compiled.evaluate() == [1.0]

    def test_query_errors_propagate(self):
        def picky(parser, args, source, start, end):
            raise MolangCompileError("no thanks", source, start, end)

        instance = MolangInstance(queries={"q.picky": picky})
        with pytest.raises(MolangCompileError, match="no thanks"):
            instance.compile("q.picky()")

    def test_query_must_return_expression(self):
        instance = MolangInstance(queries={"q.bad": lambda *args: 3})
        with pytest.raises(TypeError):
            instance.compile("q.bad()")
