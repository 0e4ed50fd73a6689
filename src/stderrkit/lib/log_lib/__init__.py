"""
log_lib — leveled terminal logging with trace trees and prompts.

A reusable output library providing:
- Leveled, glyph-prefixed messages gated by quiet/debug/dev/trace/silly
- Hierarchical function tracing with a guaranteed-exit scope guard
- Change-only context banners
- y/n/q confirmation prompts

Public API:
    Logger           — central coordinator
    init_logger      — singleton initialization
    get_logger       — access singleton
    Level            — level names for Logger.log()
    GlyphSet         — per-logger prefix glyphs
    TraceScope       — scope guard returned by Logger.trace_scope()
    traced           — function tracing decorator
    ConfirmBuilder   — builder returned by Logger.confirm_builder()
"""

from .manager import Logger, DebugPrinter, init_logger, get_logger
from .levels import Level, GlyphSet, LEVEL_SPECS
from .sink import ColorWriter
from .trace import TraceScope, TraceCursor, traced
from .context import ContextCursor
from .confirm import ConfirmBuilder

__all__ = [
    'Logger', 'DebugPrinter', 'init_logger', 'get_logger',
    'Level', 'GlyphSet', 'LEVEL_SPECS',
    'ColorWriter',
    'TraceScope', 'TraceCursor', 'traced',
    'ContextCursor',
    'ConfirmBuilder',
]
