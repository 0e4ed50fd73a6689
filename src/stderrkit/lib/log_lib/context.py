"""
Context cursor — remembers which context banner was shown last.

Setting the same context again (e.g. inside a loop) must not print the
banner again; only a change does. Comparison is exact string equality.
"""

from typing import Optional


class ContextCursor:
    """Current context string, or None when no context is set."""

    def __init__(self):
        self.current: Optional[str] = None

    def changed(self, context: str) -> bool:
        """True when ``context`` differs from the stored one (None counts)."""
        return self.current != context

    def set(self, context: str) -> None:
        self.current = context

    def clear(self) -> None:
        self.current = None
