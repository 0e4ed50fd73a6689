"""Shared test fixtures for stderrkit test suite."""

import io

import pytest

from stderrkit.config import ENV_FLAGS, LoggerConfig
from stderrkit.lib.log_lib import Logger
from stderrkit.lib.log_lib import manager as _manager_mod


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded or otherwise slow tests")


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove *_MODE variables and reset the logger singleton around each test."""
    for var in (*ENV_FLAGS.values(), "FORCE_COLOR", "NO_COLOR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(_manager_mod, "_logger", None)
    yield


# ---------------------------------------------------------------------------
# Output capture
# ---------------------------------------------------------------------------
class TtyInput(io.StringIO):
    """StringIO that claims to be an interactive terminal."""

    def isatty(self):
        return True


@pytest.fixture
def buf():
    """A StringIO buffer for capturing output."""
    return io.StringIO()


@pytest.fixture
def log(buf):
    """A Logger with every category off, writing 80 columns to ``buf``."""
    return Logger(LoggerConfig(), file=buf, width=80)


@pytest.fixture
def make_log(buf):
    """Factory for Loggers writing to ``buf`` with chosen flags."""
    def _make(width=80, **flags):
        return Logger(LoggerConfig(**flags), file=buf, width=width)
    return _make


@pytest.fixture
def tty():
    """Factory for terminal-like input streams pre-filled with ``text``."""
    def _tty(text=""):
        return TtyInput(text)
    return _tty
