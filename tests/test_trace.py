"""Tests for hierarchical tracing — branches, scope guard and @traced."""

import io
import threading

import pytest

from stderrkit.config import LoggerConfig
from stderrkit.lib.log_lib import Logger, init_logger, traced


class SwitchableStream(io.StringIO):
    """StringIO whose writes fail once ``broken`` is set."""

    broken = False

    def write(self, s):
        if self.broken:
            raise OSError("stream closed")
        return super().write(s)


def _branch(name, msg, prefix="[…]"):
    return [f"{prefix} λ┄┄┄[{name}]", "    ┆", f"    └┄┄> {msg}"]


@pytest.fixture
def tlog(make_log):
    """Logger with tracing on."""
    return make_log(trace=True)


# =============================================================================
# trace_fn branches
# =============================================================================

class TestTraceFn:
    """Branch opening and continuation."""

    def test_first_call_opens_branch(self, tlog, buf):
        tlog.trace_fn("parse", "start")
        assert buf.getvalue().splitlines() == _branch("parse", "start")

    def test_same_name_continues(self, tlog, buf):
        tlog.trace_fn("parse", "start")
        tlog.trace_fn("parse", "more")
        lines = buf.getvalue().splitlines()
        assert lines == _branch("parse", "start") + ["    └┄┄>> more"]

    def test_new_name_opens_new_branch(self, tlog, buf):
        tlog.trace_fn("a", "one")
        tlog.trace_fn("b", "two")
        tlog.trace_fn("a", "three")
        lines = buf.getvalue().splitlines()
        assert lines == _branch("a", "one") + _branch("b", "two") + _branch("a", "three")

    def test_reset_forces_new_branch(self, tlog, buf):
        tlog.trace_fn("a", "one")
        tlog.reset_trace_state()
        assert tlog.current_trace_func() is None
        tlog.trace_fn("a", "two")
        assert buf.getvalue().count("λ┄┄┄[a]") == 2

    def test_label_on_header_only(self, tlog, buf):
        tlog.set_label("job")
        tlog.trace_fn("a", "one")
        tlog.trace_fn("a", "two")
        lines = buf.getvalue().splitlines()
        assert lines[0] == "[job][…] λ┄┄┄[a]"
        assert lines[3] == "    └┄┄>> two"

    def test_disabled_writes_nothing(self, log, buf):
        log.trace_fn("a", "one")
        assert buf.getvalue() == ""
        assert log.current_trace_func() is None

    def test_quiet_suppresses_without_state_change(self, make_log, buf):
        log = make_log(trace=True, quiet=True)
        log.trace_fn("a", "one")
        assert buf.getvalue() == ""
        assert log.current_trace_func() is None

    def test_tracks_current_function(self, tlog):
        tlog.trace_fn("a", "one")
        assert tlog.current_trace_func() == "a"

    def test_enter_exit_helpers(self, tlog, buf):
        tlog.trace_enter("f")
        tlog.trace_exit_with("f", [1, 2])
        tlog.trace_exit("f")
        lines = buf.getvalue().splitlines()
        assert lines[2] == "    └┄┄> → entering"
        assert lines[3] == "    └┄┄>> ← exiting with: [1, 2]"
        assert lines[4] == "    └┄┄>> ← exiting"

    def test_trace_level_is_flat(self, tlog, buf):
        tlog.trace_level(2, "f", "deep")
        assert buf.getvalue() == "[…]     └┄ [f] deep\n"


class TestLabelledTrace:
    """trace_add / trace_sub / trace_found / trace_done / trace_item."""

    @pytest.mark.parametrize("method, label", [
        ("trace_add", "+"),
        ("trace_sub", "-"),
        ("trace_found", "✻"),
        ("trace_done", "✔"),
        ("trace_item", "⟐"),
    ])
    def test_labelled_line(self, tlog, buf, method, label):
        getattr(tlog, method)("msg")
        assert buf.getvalue() == f"    └┄┄[ {label} ] msg\n"

    def test_labelled_gated_by_trace(self, log, buf):
        log.trace_add("hidden")
        assert buf.getvalue() == ""

    def test_labelled_does_not_move_cursor(self, tlog):
        tlog.trace_fn("a", "x")
        tlog.trace_done("ok")
        assert tlog.current_trace_func() == "a"


# =============================================================================
# Scope guard
# =============================================================================

class TestTraceScope:
    """Exactly one exit record per scope."""

    def test_enter_and_exit(self, tlog, buf):
        with tlog.trace_scope("f") as scope:
            scope.step("working")
        lines = buf.getvalue().splitlines()
        assert lines == _branch("f", "entering") + [
            "    └┄┄>> working",
            "    └┄┄>> exiting",
        ]

    def test_exit_on_exception(self, tlog, buf):
        with pytest.raises(RuntimeError):
            with tlog.trace_scope("f"):
                raise RuntimeError("boom")
        assert buf.getvalue().splitlines()[-1] == "    └┄┄>> exiting"
        assert buf.getvalue().count("exiting") == 1

    def test_exit_survives_trace_turned_off(self, tlog, buf):
        with tlog.trace_scope("f"):
            tlog.set_trace(False)
        assert buf.getvalue().count("exiting") == 1

    def test_no_exit_when_trace_turned_on_inside(self, log, buf):
        with log.trace_scope("f") as scope:
            log.set_trace(True)
            scope.step("ignored")
        assert buf.getvalue() == ""

    def test_disabled_scope_is_silent(self, log, buf):
        with log.trace_scope("f") as scope:
            scope.step("x")
            scope.step_debug("y", {"k": 1})
        assert buf.getvalue() == ""

    def test_step_debug_pretty_prints(self, tlog, buf):
        with tlog.trace_scope("f") as scope:
            scope.step_debug("cfg", {"k": 1})
        assert "    └┄┄>> cfg: {'k': 1}" in buf.getvalue().splitlines()

    def test_nested_scopes_reopen_outer_branch(self, tlog, buf):
        with tlog.trace_scope("outer"):
            with tlog.trace_scope("inner"):
                pass
        lines = buf.getvalue().splitlines()
        assert lines[-3:] == _branch("outer", "exiting")

    def test_lock_released_after_exception(self, tlog):
        with pytest.raises(ValueError):
            with tlog.trace_scope("f"):
                raise ValueError()
        acquired = []

        def try_lock():
            got = tlog._lock.acquire(blocking=False)
            acquired.append(got)
            if got:
                tlog._lock.release()

        t = threading.Thread(target=try_lock)
        t.start()
        t.join()
        assert acquired == [True]

    def test_body_exception_wins_over_failed_exit_record(self):
        stream = SwitchableStream()
        log = Logger(LoggerConfig(trace=True), file=stream, width=80)
        with pytest.raises(RuntimeError, match="boom"):
            with log.trace_scope("f"):
                stream.broken = True
                raise RuntimeError("boom")

    def test_failed_exit_record_raises_on_clean_exit(self):
        stream = SwitchableStream()
        log = Logger(LoggerConfig(trace=True), file=stream, width=80)
        with pytest.raises(OSError):
            with log.trace_scope("f"):
                stream.broken = True


# =============================================================================
# @traced decorator
# =============================================================================

class TestTracedDecorator:
    """Function tracing through the singleton or an explicit logger."""

    def test_traces_args_and_result(self, tlog, buf):
        @traced(name="add", logger=tlog)
        def add(a, b=0):
            return a + b

        assert add(1, b=2) == 3
        lines = buf.getvalue().splitlines()
        assert lines[:3] == _branch("add", "entering")
        assert "    └┄┄>> called with (1, b=2)" in lines
        assert "    └┄┄>> returned 3" in lines
        assert lines[-1] == "    └┄┄>> exiting"

    def test_traces_exception(self, tlog, buf):
        @traced(logger=tlog)
        def fail():
            raise KeyError("x")

        with pytest.raises(KeyError):
            fail()
        assert "    └┄┄>> raised KeyError: 'x'" in buf.getvalue().splitlines()
        assert buf.getvalue().count("exiting") == 1

    def test_default_name_is_qualname(self, tlog, buf):
        @traced(logger=tlog)
        def helper():
            return None

        helper()
        assert f"λ┄┄┄[{helper.__qualname__}]" in buf.getvalue()
        assert "returned" not in buf.getvalue()

    def test_method_shows_self(self, tlog, buf):
        class Job:
            @traced(name="Job.run", logger=tlog)
            def run(self, n):
                return n

        Job().run(5)
        assert "    └┄┄>> called with (self, 5)" in buf.getvalue().splitlines()

    def test_long_values_shortened(self, tlog, buf):
        @traced(name="f", logger=tlog)
        def f(items, text):
            return None

        f([1, 2, 3, 4], "x" * 60)
        expected = f"    └┄┄>> called with ([...4 items...], '{'x' * 47}...')"
        assert expected in buf.getvalue().splitlines()

    def test_bare_decorator_uses_singleton(self, buf):
        log = init_logger(LoggerConfig(trace=True), file=buf, width=80)

        @traced
        def ping():
            return "pong"

        assert ping() == "pong"
        assert "returned 'pong'" in buf.getvalue()
        assert log.current_trace_func() == ping.__qualname__

    def test_disabled_calls_through(self, log, buf):
        @traced(logger=log)
        def f():
            return 1

        assert f() == 1
        assert buf.getvalue() == ""

    def test_exception_kept_when_exit_record_fails(self):
        stream = SwitchableStream()
        log = Logger(LoggerConfig(trace=True), file=stream, width=80)

        @traced(logger=log)
        def fail():
            stream.broken = True
            raise KeyError("x")

        with pytest.raises(KeyError):
            fail()


@pytest.mark.slow
class TestTracedThreads:
    """A traced function does not hold the logger lock while it runs."""

    def test_worker_thread_can_log(self, tlog, buf):
        @traced(name="work", logger=tlog)
        def work():
            t = threading.Thread(target=lambda: tlog.info("from worker"))
            t.start()
            t.join(timeout=5)
            return t.is_alive()

        assert work() is False
        lines = buf.getvalue().splitlines()
        assert "[λ] from worker" in lines
        assert lines[-1] == "    └┄┄>> exiting"
        assert buf.getvalue().count("exiting") == 1
