"""
Log level table and glyph set.

Each level has a colour, a glyph, and optionally a config flag that
must be on for it to print. Levels without a gate print unless the
logger is quiet; ERROR prints even then.

Level assignments:
    level   gate    glyph  colour
    error   -       ✕      red        (shown in quiet mode)
    warn    -       △      orange
    info    -       λ      blue
    okay    -       ✓      green
    note    -       →      blue
    debug   debug   ⌬      cyan
    devlog  dev     ⌬      red2
    trace   trace   …      grey
    magic   silly   ↯      purple
    silly   silly   φ      magenta
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Optional

from stderrkit import colors


class Level(Enum):
    """Message categories understood by Logger.log()."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    OKAY = "okay"
    NOTE = "note"
    DEBUG = "debug"
    DEVLOG = "devlog"
    TRACE = "trace"
    MAGIC = "magic"
    SILLY = "silly"


@dataclass
class GlyphSet:
    """Per-logger prefix glyphs. Each Logger gets its own copy."""
    info: str = "\u03BB"      # λ
    warn: str = "\u25B3"      # △
    error: str = "\u2715"     # ✕
    okay: str = "\u2713"      # ✓
    trace: str = "\u2026"     # …
    debug: str = "\u232C"     # ⌬
    magic: str = "\u21AF"     # ↯
    note: str = "\u2192"      # →
    silly: str = "\u03C6"     # φ


class LevelSpec(NamedTuple):
    color: str
    glyph: str               # GlyphSet attribute name
    gate: Optional[str]      # LoggerConfig flag, None = always on


LEVEL_SPECS: Dict[Level, LevelSpec] = {
    Level.ERROR: LevelSpec(colors.RED, 'error', None),
    Level.WARN: LevelSpec(colors.ORANGE, 'warn', None),
    Level.INFO: LevelSpec(colors.BLUE, 'info', None),
    Level.OKAY: LevelSpec(colors.GREEN, 'okay', None),
    Level.NOTE: LevelSpec(colors.BLUE, 'note', None),
    Level.DEBUG: LevelSpec(colors.CYAN, 'debug', 'debug'),
    Level.DEVLOG: LevelSpec(colors.RED2, 'debug', 'dev'),
    Level.TRACE: LevelSpec(colors.GREY, 'trace', 'trace'),
    Level.MAGIC: LevelSpec(colors.PURPLE, 'magic', 'silly'),
    Level.SILLY: LevelSpec(colors.MAGENTA, 'silly', 'silly'),
}


def to_level(level) -> Level:
    """Coerce a Level or its name (any case) to a Level.

    Raises:
        ValueError: For an unknown level name.
    """
    if isinstance(level, Level):
        return level
    try:
        return Level(str(level).lower())
    except ValueError:
        raise ValueError(f"Unknown log level: {level!r}") from None
