"""
ColorWriter — the styled output sink every Logger writes through.

Text is handed to ``rich.console.Console`` as pre-built Segments: no
markup parsing, no highlighting, no tab expansion, no wrapping or
cropping. Text goes out exactly as laid out, one style per segment.
Colour is dropped automatically when the target is not a terminal
(files, pipes, StringIO in tests).
"""

import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.segment import Segment, Segments
from rich.style import Style


StyleType = Optional[Style]


def make_style(color: Optional[str] = None, bold: bool = False,
               bgcolor: Optional[str] = None) -> Style:
    """Build a rich Style from a palette colour and flags."""
    return Style(color=color, bgcolor=bgcolor, bold=bold or None)


class ColorWriter:
    """Styled, synchronous writer.

    Args:
        file: Target stream. None follows ``sys.stderr`` dynamically, so
            stream swaps (pytest's capsys, redirect_stderr) are honoured.
        width: Fixed width in columns. None asks the terminal and falls
            back to 80 when there is none.
        color: True forces ANSI styling, False disables colour, None
            decides from whether ``file`` is a terminal.
    """

    def __init__(self, file: Optional[TextIO] = None, width: Optional[int] = None,
                 color: Optional[bool] = None):
        self.console = Console(
            file=file,
            stderr=file is None,
            width=width,
            force_terminal=True if color else None,
            no_color=color is False,
            highlight=False,
            markup=False,
            emoji=False,
        )

    @property
    def file(self) -> TextIO:
        return self.console.file

    @property
    def width(self) -> int:
        """Current width in columns (always positive)."""
        return max(self.console.width, 1)

    @property
    def is_terminal(self) -> bool:
        return self.console.is_terminal

    def write(self, text: str, style: StyleType = None) -> None:
        """Write ``text`` without a trailing newline."""
        if text:
            self.console.print(Segments([Segment(text, style)]), end="", crop=False)

    def writeln(self, text: str = "", style: StyleType = None) -> None:
        """Write ``text`` followed by a newline."""
        self.console.print(Segments([Segment(text, style), Segment.line()]), end="", crop=False)

    def flush(self) -> None:
        self.file.flush()


def default_input() -> TextIO:
    """The stream confirm prompts read from when none was configured."""
    return sys.stdin
