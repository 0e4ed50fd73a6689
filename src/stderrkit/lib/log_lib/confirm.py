"""
Interactive y/n/q confirmation.

ConfirmBuilder is immutable: each option call returns a new builder, and
``ask()`` runs the prompt.

    answer = log.confirm_builder("Delete 3 files?").boxed().style(BorderStyle.HEAVY).ask()
    # True (y), False (n) or None (q)

Quiet mode answers yes without asking so unattended runs never block.
A non-interactive stdin is an error instead: the caller has to decide.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from stderrkit import colors
from stderrkit.errors import NonInteractiveError

from ..layout_lib.borders import BorderStyle
from .sink import default_input, make_style


CHOICES = {'y': True, 'n': False, 'q': None}
INVALID_INPUT_MSG = "Invalid input. Please try again."


def classify(line: str):
    """Map an input line to (matched, answer).

    Only the first non-whitespace character counts, case-insensitive.
    """
    key = line.strip()[:1].lower()
    if key in CHOICES:
        return True, CHOICES[key]
    return False, None


@dataclass(frozen=True)
class ConfirmBuilder:
    """Options for one confirmation prompt.

    Created via ``Logger.confirm_builder()``.
    """
    logger: object = field(repr=False, compare=False)
    prompt: str
    use_box: bool = False
    border: BorderStyle = BorderStyle.LIGHT
    color: Optional[str] = None

    def boxed(self, use_box: bool = True) -> "ConfirmBuilder":
        """Draw the prompt in a box above the choice line."""
        return replace(self, use_box=use_box)

    def style(self, style: BorderStyle) -> "ConfirmBuilder":
        """Border style for the box, if one is drawn."""
        return replace(self, border=BorderStyle(style))

    def prompt_color(self, color: str) -> "ConfirmBuilder":
        """Colour for the choice line (default bold white)."""
        return replace(self, color=color)

    def choice_line(self) -> str:
        if self.use_box:
            return "Your choice [y/n/q] -> "
        return f"{self.prompt} [y/n/q] > "

    def ask(self) -> Optional[bool]:
        """Ask until the user answers y, n or q.

        Returns:
            True for yes, False for no, None for quit. Always True in
            quiet mode, without reading input.

        Raises:
            NonInteractiveError: If the input stream is not a terminal.
            EOFError: If input ends before a valid answer.
            OSError: On any read or write failure.
        """
        log = self.logger
        with log._lock:
            if log.config.quiet:
                return True

            stream = log.input_stream if log.input_stream is not None else default_input()
            if not stream.isatty():
                raise NonInteractiveError()

            if self.use_box:
                log.boxed(self.prompt, self.border)

            style = make_style(self.color or colors.WHITE, bold=True)
            while True:
                log.sink.write(self.choice_line(), style=style)
                log.sink.flush()

                line = stream.readline()
                if not line:
                    raise EOFError("Input closed before a y/n/q answer was given.")

                matched, answer = classify(line)
                if matched:
                    return answer
                log.warn(INVALID_INPUT_MSG)
