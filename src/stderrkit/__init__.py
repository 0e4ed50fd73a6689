"""stderrkit — leveled, boxed and traced terminal output for CLI tools.

Colour-prefixed log levels, bordered boxes and tables, bitmask grids,
hierarchical call traces and y/n/q prompts, all written to stderr.
"""

from stderrkit._version import __version__, __app_name__
from stderrkit.config import LoggerConfig
from stderrkit.errors import StderrKitError, NonInteractiveError
from stderrkit.lib.layout_lib import BorderStyle, BoxChars, box_chars, bitmask_table
from stderrkit.lib.log_lib import (
    Logger, init_logger, get_logger, Level, GlyphSet, TraceScope, traced,
    ConfirmBuilder,
)

__all__ = [
    "__version__", "__app_name__",
    "LoggerConfig", "StderrKitError", "NonInteractiveError",
    "BorderStyle", "BoxChars", "box_chars", "bitmask_table",
    "Logger", "init_logger", "get_logger", "Level", "GlyphSet", "TraceScope",
    "traced", "ConfirmBuilder",
]
