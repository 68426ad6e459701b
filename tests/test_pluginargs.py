import pytest

from pluginsdk.pluginargs import Cleanup, Internal


def test_close_runs_newest_first():
    calls = []
    cleanup = Cleanup()
    for name in ("a", "b", "c"):
        cleanup.do(lambda name=name: calls.append(name))
    cleanup.close()
    assert calls == ["c", "b", "a"]


def test_close_without_functions_then_with_one():
    calls = []
    cleanup = Cleanup()
    cleanup.close()
    cleanup.do(lambda: calls.append("only"))
    cleanup.close()
    assert calls == ["only"]


def test_failing_function_does_not_stop_older_ones():
    calls = []
    cleanup = Cleanup()
    cleanup.do(lambda: calls.append("older"))

    def fail():
        raise RuntimeError("boom")

    cleanup.do(fail)
    with pytest.raises(RuntimeError, match="boom"):
        cleanup.close()
    assert calls == ["older"]


def test_context_manager_closes():
    calls = []
    with Cleanup() as cleanup:
        cleanup.do(lambda: calls.append(1))
        assert calls == []
    assert calls == [1]


def test_internal_defaults_are_independent():
    first, second = Internal(), Internal()
    assert first.cleanup is not second.cleanup
    assert first.mappers == [] and first.broker is None
    first.mappers.append("mapper")
    assert second.mappers == []