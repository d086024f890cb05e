"""Tests for Effect and effect()."""

import pytest

from sigflow import Effect, computed, effect, signal


class TestEffect:
    def test_runs_immediately(self):
        s = signal(10)
        log = []
        effect(lambda: log.append(s.value))
        assert log == [10]

    def test_reruns_on_change(self):
        s = signal("a")
        log = []
        effect(lambda: log.append(s.value))
        s.value = "aa"
        assert log == ["a", "aa"]

    def test_inactive_construction_does_not_run(self):
        log = []
        e = effect(lambda: log.append(1), is_active=False)
        assert log == []
        assert e.subscriptions == frozenset()

    def test_deactivated_effect_is_skipped(self):
        s = signal("a")
        log = []
        e = effect(lambda: log.append(s.value))
        e.is_active = False
        s.value = "aa"
        assert log == ["a"]
        assert s in e.subscriptions  # edges kept

    def test_reactivation_does_not_run_retroactively(self):
        s = signal(1)
        log = []
        e = effect(lambda: log.append(s.value))
        e.is_active = False
        s.value = 2
        e.is_active = True
        assert log == [1]
        s.value = 3
        assert log == [1, 3]

    def test_dispose_stops(self):
        s = signal("a")
        log = []
        e = effect(lambda: log.append(s.value))
        e.dispose()
        s.value = "aa"
        assert log == ["a"]
        assert e.subscriptions == frozenset()
        assert s._dependents == {}

    def test_dispose_keeps_is_active(self):
        e = effect(lambda: None)
        e.dispose()
        assert e.is_active is True

    def test_on_dispose_from_constructor(self):
        calls = []
        e = effect(lambda: None, lambda: calls.append("disposed"))
        e.dispose()
        assert calls == ["disposed"]

    def test_on_dispose_assigned_later(self):
        calls = []
        e = effect(lambda: None)
        e.on_dispose = lambda: calls.append("disposed")
        e.dispose()
        assert calls == ["disposed"]

    def test_manual_execute_after_dispose(self):
        s = signal(1)
        log = []
        e = effect(lambda: log.append(s.value))
        e.dispose()
        e.execute()
        assert log == [1, 1]
        # reading again inside execute() re-subscribes
        s.value = 2
        assert log == [1, 1, 2]

    def test_dynamic_dependencies(self):
        """Only the signals read on the latest run are tracked."""
        flag = signal(True)
        a = signal("a")
        b = signal("b")
        log = []
        effect(lambda: log.append(a.value if flag.value else b.value))

        b.value = "b1"
        assert log == ["a"]
        flag.value = False
        assert log == ["a", "b1"]
        a.value = "a1"
        assert log == ["a", "b1"]
        b.value = "b2"
        assert log == ["a", "b1", "b2"]

    def test_callback_errors_propagate(self):
        s = signal(1)

        def body():
            if s.value > 1:
                raise ValueError("boom")

        effect(body)
        with pytest.raises(ValueError, match="boom"):
            s.value = 2

    def test_failed_run_keeps_previous_dependencies(self):
        """Signals past the raise point still trigger the next run."""
        a = signal(0)
        b = signal(0)
        runs = []

        def body():
            runs.append((a.value, b.peek()))
            if a.value == 1:
                raise ValueError("halfway")
            b.value

        e = effect(body)
        with pytest.raises(ValueError, match="halfway"):
            a.value = 1
        assert b in e.subscriptions

        with pytest.raises(ValueError, match="halfway"):
            b.value = 1
        assert runs == [(0, 0), (1, 0), (1, 1)]

        a.value = 2
        assert runs[-1] == (2, 1)
        assert e.subscriptions == frozenset({a, b})

    def test_construction_error_propagates(self):
        with pytest.raises(ZeroDivisionError):
            effect(lambda: 1 / 0)

    def test_context_restored_after_error(self):
        """A failing inner run must not leave itself as the current reader."""
        inner_source = signal(0)
        outer_source = signal(0)
        other = signal(0)

        def fail():
            if inner_source.value:
                raise RuntimeError("inner")

        effect(fail)
        outer_log = []

        def outer():
            outer_log.append(outer_source.value)
            try:
                inner_source.value = outer_source.peek()
            except RuntimeError:
                pass
            other.value  # still tracked by outer

        effect(outer)
        outer_source.value = 1
        assert outer_log == [0, 1]
        other.value = 5
        assert outer_log == [0, 1, 1]

    def test_nested_effect_reads_go_to_innermost(self):
        outer_sig = signal(0)
        inner_sig = signal(0)
        log = []

        def outer():
            log.append("outer")
            outer_sig.value
            effect(lambda: (log.append("inner"), inner_sig.value))

        effect(outer)
        assert log == ["outer", "inner"]
        inner_sig.value = 1
        # the one inner effect reruns, outer does not
        assert log == ["outer", "inner", "inner"]

    def test_reads_computed(self):
        a = signal(1)
        b = computed(lambda: a.value * 2)
        log = []
        effect(lambda: log.append(b.value))
        assert log == [2]
        a.value = 5
        assert log == [2, 10]
        a.value = 5
        assert log == [2, 10]

    def test_repr(self):
        def render():
            pass

        e = effect(render)
        assert "Effect#" in repr(e)
        assert "render" in repr(e)
        assert "active" in repr(e)

    def test_is_effect_instance(self):
        assert isinstance(effect(lambda: None), Effect)
        assert effect(lambda: None).is_watcher is False
