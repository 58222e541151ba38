"""Tests for nested evaluation and scratch buffer isolation."""

import pytest

from molang import MolangInstance, ReentrancyState, runtime_query


class _Host:
    """Wires queries that reach back into compiled expressions."""

    def __init__(self):
        self.artifacts = {}
        self.states = []
        self.instance = MolangInstance(
            queries={
                "q.run": runtime_query(self.run, 1),
                "q.state": runtime_query(self.state, 0),
                "q.fail": runtime_query(self.fail, 0),
            }
        )

    def compile(self, key, source):
        self.artifacts[key] = self.instance.compile(source)
        return self.artifacts[key]

    def run(self, key):
        return self.artifacts[int(key)].evaluate()[0]

    def state(self):
        self.states.append(self.instance.reentrancy_state)
        return float(self.instance.reentrancy_state)

    def fail(self):
        raise RuntimeError("query failed")


@pytest.fixture
def host():
    return _Host()


class TestReentrancyCounter:
    def test_idle_outside_evaluation(self, host):
        assert host.instance.reentrancy_state is ReentrancyState.IDLE
        host.compile(0, "1").evaluate()
        assert host.instance.reentrancy_state is ReentrancyState.IDLE

    def test_one_active_while_running(self, host):
        assert host.compile(0, "q.state()").evaluate() == [1.0]
        assert host.states == [ReentrancyState.ONE_ACTIVE]

    def test_multiple_active_when_nested(self, host):
        host.compile(1, "q.state()")
        assert host.compile(0, "q.run(1)").evaluate() == [2.0]
        assert host.states == [ReentrancyState.MULTIPLE_ACTIVE]

    def test_depth_restored_after_error(self, host):
        compiled = host.compile(0, "q.fail()")
        with pytest.raises(RuntimeError):
            compiled.evaluate()
        assert host.instance.depth == 0
        assert host.instance.reentrancy_state is ReentrancyState.IDLE

    def test_deep_nesting_does_not_unwind_early(self, host):
        # Level 2 asks for the state after level 3 has returned.
        host.compile(2, "1")
        host.compile(1, "q.run(2) + q.state()")
        assert host.compile(0, "q.run(1)").evaluate() == [3.0]
        assert host.states == [ReentrancyState.MULTIPLE_ACTIVE]
        assert host.instance.depth == 0


class TestScratchIsolation:
    def _spy(self, monkeypatch, instance):
        acquired = []
        real_acquire = instance.scratch.acquire

        def spy(size, depth):
            buffer = real_acquire(size, depth)
            acquired.append(buffer)
            return buffer

        monkeypatch.setattr(instance.scratch, "acquire", spy)
        return acquired

    def test_shared_buffer_reused(self, host, monkeypatch):
        compiled = host.compile(0, "[1, 2, 3]")
        acquired = self._spy(monkeypatch, host.instance)
        compiled.evaluate()
        compiled.evaluate()
        host.compile(1, "4").evaluate()

        assert len(acquired) == 3
        assert all(buffer is host.instance.scratch.buffer for buffer in acquired)

    def test_nested_calls_get_fresh_buffers(self, host, monkeypatch):
        host.compile(1, "[7, 8]")
        outer = host.compile(0, "q.run(1) + q.run(1)")
        acquired = self._spy(monkeypatch, host.instance)
        assert outer.evaluate() == [14.0]

        shared, first, second = acquired
        assert shared is host.instance.scratch.buffer
        assert first is not shared
        assert second is not shared
        assert first is not second

    def test_inner_call_does_not_corrupt_outer(self, host):
        host.compile(1, "[100, 200, 300, 400]")
        outer = host.compile(0, "[1, 2, q.run(1), 4]")
        assert outer.evaluate() == [1.0, 2.0, 100.0, 4.0]

    def test_nested_vector_return(self, host):
        host.compile(1, "t.a = 5; return [t.a, t.a + 1, t.a + 2];")
        outer = host.compile(0, "t.x = 9; return [t.x, q.run(1), t.x];")
        assert outer.evaluate() == [9.0, 5.0, 9.0]

    def test_same_artifact_nested(self, host):
        # The expression re-enters itself once through the host.
        host.instance.set_value("n", 2)
        host.compile(0, "v.n = v.n - 1; return v.n > 0 ? [q.run(0) + 10] : [0];")
        assert host.run(0) == 10.0

    def test_compile_during_evaluation_grows_scratch(self):
        def compile_wide():
            wide = instance.compile("[1, 2, 3, 4, 5, 6, 7, 8]")
            return sum(wide.evaluate())

        instance = MolangInstance(queries={"q.compile_wide": runtime_query(compile_wide, 0)})
        outer = instance.compile("[3, q.compile_wide(), 5]")
        buffer = instance.scratch.buffer
        assert outer.evaluate() == [3.0, 36.0, 5.0]
        assert len(instance.scratch) >= 8
        assert instance.scratch.buffer is buffer
