"""
layout_lib — width-aware text layout for terminal output.

Public API:
    BorderStyle      — light / heavy / double border weight
    BoxChars         — resolved 11-glyph border record
    box_chars        — style → BoxChars
    measure          — widest line in code points
    box_lines        — bordered box around text
    banner_text      — centred fill-bar banner
    bitmask_table    — bit index/value/label grid, splits when too wide
    table_lines      — aligned table with header rule
    column_lines     — items flowed into fixed-width columns
"""

from .borders import BorderStyle, BoxChars, box_chars
from .layout import (
    DEFAULT_WIDTH, measure, banner_fill, banner_text, context_banner_text,
    box_lines, bitmask_table, flag_table_width, column_widths, table_lines,
    column_lines, list_lines, numbered_lines,
)

__all__ = [
    'BorderStyle', 'BoxChars', 'box_chars',
    'DEFAULT_WIDTH', 'measure', 'banner_fill', 'banner_text', 'context_banner_text',
    'box_lines', 'bitmask_table', 'flag_table_width', 'column_widths', 'table_lines',
    'column_lines', 'list_lines', 'numbered_lines',
]
