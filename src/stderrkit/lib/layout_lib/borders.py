"""
Box-drawing glyph sets.

Each BorderStyle resolves to one immutable BoxChars record. The three
sets share a shape so any renderer can switch style without branching.

re: https://en.wikipedia.org/wiki/Box-drawing_characters
"""

from dataclasses import dataclass
from enum import Enum


class BorderStyle(Enum):
    """Border weight for boxes and flag tables."""
    LIGHT = "light"
    HEAVY = "heavy"
    DOUBLE = "double"


@dataclass(frozen=True)
class BoxChars:
    """The 11 glyphs needed to draw a bordered grid."""
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str
    horizontal: str
    vertical: str
    top_t: str
    bottom_t: str
    left_t: str
    right_t: str
    cross: str


_BOX_CHARS = {
    BorderStyle.LIGHT: BoxChars(
        top_left="\u250C",      # ┌
        top_right="\u2510",     # ┐
        bottom_left="\u2514",   # └
        bottom_right="\u2518",  # ┘
        horizontal="\u2500",    # ─
        vertical="\u2502",      # │
        top_t="\u252C",         # ┬
        bottom_t="\u2534",      # ┴
        left_t="\u251C",        # ├
        right_t="\u2524",       # ┤
        cross="\u253C",         # ┼
    ),
    BorderStyle.HEAVY: BoxChars(
        top_left="\u250F",      # ┏
        top_right="\u2513",     # ┓
        bottom_left="\u2517",   # ┗
        bottom_right="\u251B",  # ┛
        horizontal="\u2501",    # ━
        vertical="\u2503",      # ┃
        top_t="\u2533",         # ┳
        bottom_t="\u253B",      # ┻
        left_t="\u2523",        # ┣
        right_t="\u252B",       # ┫
        cross="\u254B",         # ╋
    ),
    BorderStyle.DOUBLE: BoxChars(
        top_left="\u2554",      # ╔
        top_right="\u2557",     # ╗
        bottom_left="\u255A",   # ╚
        bottom_right="\u255D",  # ╝
        horizontal="\u2550",    # ═
        vertical="\u2551",      # ║
        top_t="\u2566",         # ╦
        bottom_t="\u2569",      # ╩
        left_t="\u2560",        # ╠
        right_t="\u2563",       # ╣
        cross="\u256C",         # ╬
    ),
}


def box_chars(style: BorderStyle = BorderStyle.LIGHT) -> BoxChars:
    """Resolve a BorderStyle (or its string value) to its glyph set.

    Raises:
        ValueError: If ``style`` names no known style.
    """
    return _BOX_CHARS[BorderStyle(style)]
