"""
Hierarchical trace rendering, scope guard and function tracing decorator.

Trace output groups messages under the function that produced them:

    […] λ┄┄┄[parse_config]
        ┆
        └┄┄> reading config file
        └┄┄>> validating settings
    […] λ┄┄┄[validate_url]
        ┆
        └┄┄> checking connection

A new branch opens whenever the traced name differs from the previous
one. Names are whatever the caller passes in; the call stack is never
inspected, so callers must use consistent names.
"""

import functools
import inspect
from pathlib import Path
from typing import List, Optional

from rich.pretty import pretty_repr


INDENT = "    "
BRANCH_HEADER = "λ┄┄┄[{name}]"
BRANCH_CONNECTOR = INDENT + "┆"
FIRST_LEAF = INDENT + "└┄┄> {msg}"
CONTINUATION_LEAF = INDENT + "└┄┄>> {msg}"
LABELLED_LEAF = INDENT + "└┄┄[ {label} ] {msg}"

ENTER_MSG = "entering"
EXIT_MSG = "exiting"


class TraceCursor:
    """Remembers the last traced function name.

    ``last is None`` means idle: the next trace opens a branch whatever
    its name.
    """

    def __init__(self):
        self.last: Optional[str] = None

    def continues(self, name: str) -> bool:
        """True when ``name`` continues the currently open branch."""
        return self.last is not None and self.last == name

    def reset(self) -> None:
        self.last = None


def branch_lines(name: str, msg: str) -> List[str]:
    """Lines that open a new branch: header, connector, first leaf."""
    return [
        BRANCH_HEADER.format(name=name),
        BRANCH_CONNECTOR,
        FIRST_LEAF.format(msg=msg),
    ]


def continuation_line(msg: str) -> str:
    return CONTINUATION_LEAF.format(msg=msg)


def labelled_line(label: str, msg: str) -> str:
    return LABELLED_LEAF.format(label=label, msg=msg)


# =============================================================================
# Scope guard
# =============================================================================

class TraceScope:
    """Context manager that traces entry and guarantees one exit record.

    Whether tracing is on is read once, on entry. The exit record is
    written on every way out of the block (normal end, return, raise)
    if tracing was on at entry, even if it has been switched off since.

    While the block runs the scope holds the logger's lock, so no other
    thread can interleave output or move the trace cursor.

    Usage::

        with log.trace_scope("load_profile") as scope:
            scope.step("reading file")
            scope.step_debug("parsed", data)
    """

    def __init__(self, logger, name: str):
        self._logger = logger
        self.name = name
        self.enabled = False

    def __enter__(self) -> "TraceScope":
        self._logger._lock.acquire()
        try:
            self.enabled = self._logger.config.trace
            if self.enabled:
                self._logger.trace_fn(self.name, ENTER_MSG)
        except BaseException:
            self._logger._lock.release()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if self.enabled:
                self._logger._hierarchical_trace(self.name, EXIT_MSG)
        except OSError:
            # The block's own exception wins over a failed exit record.
            if exc_type is None:
                raise
        finally:
            self._logger._lock.release()
        return False

    def step(self, msg: str) -> None:
        """Trace a step inside this scope."""
        if self.enabled:
            self._logger.trace_fn(self.name, msg)

    def step_debug(self, msg: str, value) -> None:
        """Trace a step followed by a pretty-printed value."""
        if self.enabled:
            self._logger.trace_fn(self.name, f"{msg}: {pretty_repr(value)}")


# =============================================================================
# Decorator
# =============================================================================

def _format_value(value) -> str:
    if isinstance(value, Path):
        return f"Path('{value}')"
    if isinstance(value, str) and len(value) > 50:
        return f"'{value[:47]}...'"
    if isinstance(value, (list, tuple)) and len(value) > 3:
        return f"[...{len(value)} items...]"
    return repr(value)


def _format_args(func, args, kwargs) -> str:
    args_repr = []

    # Show bound methods as self/cls rather than the instance repr
    remaining_args = args
    params = list(inspect.signature(func).parameters)
    if args and params and params[0] in ('self', 'cls'):
        args_repr.append(params[0])
        remaining_args = args[1:]

    args_repr.extend(_format_value(arg) for arg in remaining_args)
    args_repr.extend(f"{key}={_format_value(value)}" for key, value in kwargs.items())
    return ', '.join(args_repr)


def _record(log, branch: str, msg: str) -> None:
    """Write one trace record under the logger's lock."""
    with log._lock:
        log._hierarchical_trace(branch, msg)


def traced(func=None, *, name: Optional[str] = None, logger=None):
    """Decorator that traces each call in the function's own branch.

    Traces entry and the arguments, then the return value (when not
    None) or the raised exception, then exactly one exit record.
    Whether tracing is on is read once per call; when it is off the
    function is simply called through.

    Unlike ``trace_scope`` the logger's lock is taken per record only,
    never while the function runs, so the function may start threads
    that log and wait for them.

    Args:
        name: Branch name. Defaults to the function's ``__qualname__``.
        logger: Logger to use. Defaults to the module singleton,
            looked up on every call.

    Usage::

        @traced
        def load(path): ...

        @traced(name="db.connect", logger=log)
        def connect(url): ...
    """
    def decorate(fn):
        branch = name or fn.__qualname__

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            # Lazy import to avoid circular dependency
            from .manager import get_logger

            log = logger if logger is not None else get_logger()
            if not log.config.trace:
                return fn(*args, **kwargs)

            _record(log, branch, ENTER_MSG)
            completed = False
            try:
                _record(log, branch, f"called with ({_format_args(fn, args, kwargs)})")
                try:
                    result = fn(*args, **kwargs)
                except Exception as e:
                    try:
                        _record(log, branch, f"raised {type(e).__name__}: {e}")
                    except OSError:
                        pass
                    raise
                if result is not None:
                    _record(log, branch, f"returned {_format_value(result)}")
                completed = True
                return result
            finally:
                try:
                    _record(log, branch, EXIT_MSG)
                except OSError:
                    if completed:
                        raise

        return wrapper

    if func is not None:
        return decorate(func)
    return decorate
