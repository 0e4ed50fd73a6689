"""
Logger — the stderrkit output coordinator.

Central object for leveled, colour-prefixed messages plus the layout,
trace, context and confirmation features built on top of them.

Gating:
    quiet          everything off except error() / fatal()
    debug          enables debug()
    dev            enables devlog()
    trace          enables trace(), trace_fn(), trace_scope(), trace_add() ...
    silly          enables magic() and silly()

Error contract:
    The leveled calls (error ... devlog, inspect()) never raise on a
    failed write (OSError, or ValueError from a closed or unencodable
    stream), so they can be dropped anywhere. Layout, trace and context
    calls let the sink's OSError propagate.

Threads:
    Every public call holds the logger's re-entrant lock for its whole
    write, so a multi-line render is never interleaved with another
    thread's. A TraceScope holds the lock for its whole block.
"""

import functools
import sys
import threading
from typing import Optional, Sequence, TextIO

from rich.pretty import pretty_repr

from stderrkit import colors
from stderrkit.config import LoggerConfig

from ..layout_lib.borders import BorderStyle
from ..layout_lib.layout import (
    banner_fill, bitmask_table, box_lines, column_lines, context_banner_text,
    list_lines, numbered_lines, table_lines,
)
from .confirm import ConfirmBuilder
from .context import ContextCursor
from .levels import GlyphSet, Level, LEVEL_SPECS, to_level
from .sink import ColorWriter, make_style
from .trace import TraceCursor, TraceScope, branch_lines, continuation_line, labelled_line


def _synchronized(method):
    """Run a Logger method while holding the logger's lock."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class Logger:
    """Leveled terminal logger with layout, trace and prompt helpers.

    All output goes to the configured file handle (default: stderr).

    Usage::

        log = Logger(label="build")
        log.info("Compiling")
        log.box_light("Done in 3.2s")
        with log.trace_scope("link") as scope:
            scope.step("resolving symbols")

    Args:
        config: Category switches. Defaults to LoggerConfig.from_env().
        file: Output stream. None follows sys.stderr.
        width: Fixed terminal width. None asks the terminal (80 fallback).
        color: Force (True) or disable (False) colour; None = auto.
        label: Optional tag shown before every glyph prefix.
        glyphs: Glyph set; a fresh default set when omitted.
        input_stream: Where confirm() reads answers. None = sys.stdin.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        *,
        file: Optional[TextIO] = None,
        width: Optional[int] = None,
        color: Optional[bool] = None,
        label: Optional[str] = None,
        glyphs: Optional[GlyphSet] = None,
        input_stream: Optional[TextIO] = None,
    ):
        self.config = config if config is not None else LoggerConfig.from_env()
        self.sink = ColorWriter(file=file, width=width, color=color)
        self.label = label
        self.glyphs = glyphs if glyphs is not None else GlyphSet()
        self.input_stream = input_stream
        self._trace = TraceCursor()
        self._context = ContextCursor()
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.sink.width

    @property
    def quiet(self) -> bool:
        return self.config.quiet

    def set_quiet(self, quiet: bool) -> None:
        self.config.quiet = quiet

    def set_dev(self, dev: bool) -> None:
        self.config.dev = dev

    def set_debug(self, debug: bool) -> None:
        self.config.debug = debug

    def set_trace(self, trace: bool) -> None:
        self.config.trace = trace

    def set_silly(self, silly: bool) -> None:
        self.config.silly = silly

    def check_flag(self, flag: str) -> bool:
        """Return the named config flag ('quiet', 'debug', ...)."""
        return getattr(self.config, flag)

    def set_label(self, label: str) -> None:
        self.label = label

    def clear_label(self) -> None:
        self.label = None

    def set_glyph(self, level, glyph: str) -> None:
        """Replace the prefix glyph used for ``level`` on this logger.

        debug and devlog share one glyph.
        """
        spec = LEVEL_SPECS[to_level(level)]
        setattr(self.glyphs, spec.glyph, glyph)

    # -------------------------------------------------------------------------
    # Low-level output
    # -------------------------------------------------------------------------

    def _prefix(self, glyph: str) -> str:
        if self.label:
            return f"[{self.label}][{glyph}]"
        return f"[{glyph}]"

    def _print_with_prefix(self, color: str, glyph: str, msg: str) -> None:
        self.sink.writeln(f"{self._prefix(glyph)} {msg}", style=make_style(color))

    @_synchronized
    def write(self, text: str, color: Optional[str] = None, bold: bool = False) -> None:
        """Write raw text (no newline, no prefix). Suppressed in quiet mode."""
        if self.config.quiet:
            return
        self.sink.write(text, style=make_style(color, bold=bold))

    @_synchronized
    def newline(self) -> None:
        if self.config.quiet:
            return
        self.sink.writeln()

    # -------------------------------------------------------------------------
    # Leveled logging
    # -------------------------------------------------------------------------

    @_synchronized
    def _emit(self, level: Level, msg: str) -> None:
        spec = LEVEL_SPECS[level]
        if spec.gate is not None and not getattr(self.config, spec.gate):
            return
        if self.config.quiet and level is not Level.ERROR:
            return
        try:
            self._print_with_prefix(spec.color, getattr(self.glyphs, spec.glyph), msg)
        except (OSError, ValueError):
            # Leveled calls never raise on a failed write (closed or
            # unencodable streams included).
            pass

    def log(self, level, msg: str) -> None:
        """Log ``msg`` at ``level`` (a Level or its name)."""
        self._emit(to_level(level), msg)

    def error(self, msg: str) -> None:
        """Always shown, quiet mode included."""
        self._emit(Level.ERROR, msg)

    def warn(self, msg: str) -> None:
        self._emit(Level.WARN, msg)

    def info(self, msg: str) -> None:
        self._emit(Level.INFO, msg)

    def okay(self, msg: str) -> None:
        self._emit(Level.OKAY, msg)

    def note(self, msg: str) -> None:
        self._emit(Level.NOTE, msg)

    def debug(self, msg: str) -> None:
        """Shown only in debug mode."""
        self._emit(Level.DEBUG, msg)

    def devlog(self, msg: str) -> None:
        """Shown only in dev mode."""
        self._emit(Level.DEVLOG, msg)

    def trace(self, msg: str) -> None:
        """Flat trace line; see trace_fn() for the hierarchical form."""
        self._emit(Level.TRACE, msg)

    def magic(self, msg: str) -> None:
        self._emit(Level.MAGIC, msg)

    def silly(self, msg: str) -> None:
        self._emit(Level.SILLY, msg)

    def fatal(self, msg: str, code: int = 1):
        """Log ``msg`` as an error and exit the process."""
        self.error(msg)
        sys.exit(code)

    def inspect(self) -> "DebugPrinter":
        """Pretty-print values at a level: ``log.inspect().warn(obj)``."""
        return DebugPrinter(self)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    @_synchronized
    def banner(self, text: str, fill_char: str = "=") -> None:
        """Centre ``text`` across the terminal between fill bars."""
        if self.config.quiet:
            return
        left, right = banner_fill(text, fill_char, self.width)
        self.sink.write(f"{left} ")
        self.sink.write(text, style=make_style(colors.BLUE, bold=True))
        self.sink.writeln(f" {right}")

    @_synchronized
    def boxed(self, text: str, style: BorderStyle = BorderStyle.LIGHT) -> None:
        """Draw ``text`` (one or more lines) inside a border."""
        if self.config.quiet:
            return
        box_style = make_style(colors.WHITE)
        for line in box_lines(text, style):
            self.sink.writeln(line, style=box_style)

    def box_light(self, text: str) -> None:
        self.boxed(text, BorderStyle.LIGHT)

    def box_heavy(self, text: str) -> None:
        self.boxed(text, BorderStyle.HEAVY)

    def box_double(self, text: str) -> None:
        self.boxed(text, BorderStyle.DOUBLE)

    def help(self, help_text: str) -> None:
        """Show help text in a light box."""
        self.boxed(help_text, BorderStyle.LIGHT)

    @_synchronized
    def simple_table(self, rows: Sequence[Sequence[object]]) -> None:
        """Print rows as an aligned table; the first row is the header."""
        if self.config.quiet:
            return
        lines = table_lines(rows)
        if not lines:
            return
        header, rule, *body = lines
        self.sink.writeln(header, style=make_style(colors.BLUE, bold=True))
        self.sink.writeln(rule, style=make_style(colors.GREY))
        for line in body:
            self.sink.writeln(line)

    def table(self, headers: Sequence[object], rows: Sequence[Sequence[object]]) -> None:
        """simple_table() with the header row passed separately."""
        self.simple_table([headers, *rows])

    @_synchronized
    def columns(self, items: Sequence[str], num_cols: int) -> None:
        """Flow ``items`` into ``num_cols`` fixed-width columns."""
        lines = column_lines(items, num_cols)
        if self.config.quiet:
            return
        for line in lines:
            self.sink.writeln(line)

    @_synchronized
    def list(self, items: Sequence[str], bullet: str = "-") -> None:
        if self.config.quiet:
            return
        for line in list_lines(items, bullet):
            self.sink.writeln(line)

    @_synchronized
    def numbered_list(self, items: Sequence[str]) -> None:
        if self.config.quiet:
            return
        for line in numbered_lines(items):
            self.sink.writeln(line)

    @_synchronized
    def print_flag_table(self, bitmask: int, labels: Sequence[str],
                         style: BorderStyle = BorderStyle.LIGHT,
                         bits: Optional[int] = None) -> None:
        """Print bitmask_table() sized to the current terminal width."""
        if self.config.quiet:
            return
        self.sink.write(bitmask_table(bitmask, labels, style, self.width, bits=bits))
        self.sink.flush()

    @_synchronized
    def print_color_grid(self, cols: int = 16) -> None:
        """Print the 256-colour palette, ``cols`` cells per line."""
        if self.config.quiet:
            return
        for i in range(256):
            self.sink.write(f" {i:<3} .", style=make_style(_grid_fg(i), bgcolor=f"color({i})"))
            if (i + 1) % cols == 0:
                self.sink.writeln()
        self.sink.writeln()

    # -------------------------------------------------------------------------
    # Hierarchical trace
    # -------------------------------------------------------------------------

    @_synchronized
    def trace_fn(self, func_name: str, msg: str) -> None:
        """Trace ``msg`` under ``func_name``, opening a branch on a new name."""
        if not self.config.trace:
            return
        self._hierarchical_trace(func_name, msg)

    def _hierarchical_trace(self, func_name: str, msg: str) -> None:
        if self.config.quiet:
            return
        style = make_style(colors.GREY)
        if self._trace.continues(func_name):
            self.sink.writeln(continuation_line(msg), style=style)
            return

        header, *rest = branch_lines(func_name, msg)
        self.sink.writeln(f"{self._prefix(self.glyphs.trace)} {header}", style=style)
        for line in rest:
            self.sink.writeln(line, style=style)
        self._trace.last = func_name

    def trace_scope(self, func_name: str) -> TraceScope:
        """Scope guard: ``with log.trace_scope(name) as scope: ...``."""
        return TraceScope(self, func_name)

    @_synchronized
    def reset_trace_state(self) -> None:
        """Forget the open branch; the next trace starts a new one."""
        self._trace.reset()

    def current_trace_func(self) -> Optional[str]:
        return self._trace.last

    def trace_enter(self, func_name: str) -> None:
        self.trace_fn(func_name, "→ entering")

    def trace_exit(self, func_name: str) -> None:
        self.trace_fn(func_name, "← exiting")

    def trace_exit_with(self, func_name: str, return_value) -> None:
        self.trace_fn(func_name, f"← exiting with: {pretty_repr(return_value)}")

    def trace_level(self, level: int, func_name: str, msg: str) -> None:
        """Flat trace line indented ``level`` steps; no branch tracking."""
        self.trace(f"{'  ' * level}└┄ [{func_name}] {msg}")

    @_synchronized
    def _trace_labelled(self, label: str, color: str, msg: str) -> None:
        if not self.config.trace or self.config.quiet:
            return
        self.sink.writeln(labelled_line(label, msg), style=make_style(color))

    def trace_add(self, msg: str) -> None:
        self._trace_labelled("+", colors.GREEN, msg)

    def trace_sub(self, msg: str) -> None:
        self._trace_labelled("-", colors.RED, msg)

    def trace_found(self, msg: str) -> None:
        self._trace_labelled("✻", colors.BLUE, msg)

    def trace_done(self, msg: str) -> None:
        self._trace_labelled("✔", colors.GREEN, msg)

    def trace_item(self, msg: str) -> None:
        self._trace_labelled("⟐", colors.PURPLE, msg)

    # -------------------------------------------------------------------------
    # Context
    # -------------------------------------------------------------------------

    @_synchronized
    def set_context(self, context: str) -> None:
        """Show a context banner, but only when the context changes."""
        if not self._context.changed(context):
            return
        if not self.config.quiet:
            self.sink.writeln(context_banner_text(context, self.width),
                              style=make_style(colors.BLUE))
        self._context.set(context)

    @_synchronized
    def clear_context(self) -> None:
        self._context.clear()

    @property
    def current_context(self) -> Optional[str]:
        return self._context.current

    # -------------------------------------------------------------------------
    # Confirmation
    # -------------------------------------------------------------------------

    def confirm_builder(self, prompt: str) -> ConfirmBuilder:
        return ConfirmBuilder(self, prompt)

    def confirm(self, prompt: str) -> Optional[bool]:
        """Ask a plain y/n/q question. See ConfirmBuilder.ask()."""
        return self.confirm_builder(prompt).ask()


def _grid_fg(i: int) -> str:
    """Black or white text, whichever reads better on colour ``i``."""
    if 16 <= i < 232:
        r = ((i - 16) // 36) * 51
        g = (((i - 16) % 36) // 6) * 51
        b = ((i - 16) % 6) * 51
        return "black" if r + g + b > 382 else "white"
    if i < 16:
        return "white" if i in (0, 8) else "black"
    return "black" if i > 243 else "white"


class DebugPrinter:
    """Pretty-prints values through a Logger's levels.

    Obtained via ``Logger.inspect()``; gating is the same as the plain
    level methods.
    """

    def __init__(self, logger: Logger):
        self._logger = logger

    def _show(self, level: Level, value) -> None:
        self._logger._emit(level, pretty_repr(value))

    def error(self, value): self._show(Level.ERROR, value)
    def warn(self, value): self._show(Level.WARN, value)
    def info(self, value): self._show(Level.INFO, value)
    def okay(self, value): self._show(Level.OKAY, value)
    def note(self, value): self._show(Level.NOTE, value)
    def debug(self, value): self._show(Level.DEBUG, value)
    def devlog(self, value): self._show(Level.DEVLOG, value)
    def trace(self, value): self._show(Level.TRACE, value)
    def magic(self, value): self._show(Level.MAGIC, value)
    def silly(self, value): self._show(Level.SILLY, value)


# =============================================================================
# Module-level singleton
# =============================================================================

_logger: Optional[Logger] = None
_logger_lock = threading.Lock()


def init_logger(config: Optional[LoggerConfig] = None, **kwargs) -> Logger:
    """Initialize the module-level Logger singleton.

    Call once at program startup. Keyword arguments are passed to Logger.

    Returns:
        The initialized Logger instance
    """
    global _logger
    with _logger_lock:
        _logger = Logger(config, **kwargs)
        return _logger


def get_logger() -> Logger:
    """Get the module-level Logger, creating one from the environment if needed."""
    global _logger
    with _logger_lock:
        if _logger is None:
            _logger = Logger()
        return _logger
