"""Exception types raised by stderrkit."""


class StderrKitError(Exception):
    """Base class for all stderrkit errors."""


class NonInteractiveError(StderrKitError):
    """A confirmation prompt was requested but stdin is not a terminal.

    Scripted callers are expected to catch this and decide for themselves;
    the prompt never silently defaults when it cannot ask.
    """

    def __init__(self, message="Cannot ask for confirmation in a non-interactive terminal."):
        super().__init__(message)
