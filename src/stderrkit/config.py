"""Configuration for stderrkit loggers.

Two-layer resolution (highest priority wins):
  1. Explicit overrides — constructor arguments or CLI flags
  2. Environment — presence-based *_MODE variables, read once

An environment flag is "on" when the variable exists at all, whatever
its value. ``QUIET_MODE=`` (empty) still turns quiet mode on.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional


# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------
ENV_FLAGS = {
    "quiet": "QUIET_MODE",
    "debug": "DEBUG_MODE",
    "dev": "DEV_MODE",
    "trace": "TRACE_MODE",
    "silly": "SILLY_MODE",
}


@dataclass
class LoggerConfig:
    """Category switches for a Logger.

    Attributes:
        quiet: Suppress everything except error/fatal.
        dev: Show devlog() output.
        debug: Show debug() output.
        trace: Show trace(), trace_fn() and the labelled trace helpers.
        silly: Show magic() and silly() output.
    """
    quiet: bool = False
    dev: bool = False
    debug: bool = False
    trace: bool = False
    silly: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LoggerConfig":
        """Build a config from the *_MODE environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests).
        """
        env = os.environ if environ is None else environ
        return cls(**{name: var in env for name, var in ENV_FLAGS.items()})

    def with_overrides(self, **flags: Optional[bool]) -> "LoggerConfig":
        """Return a copy with explicit flags applied.

        ``None`` values are ignored so argparse defaults can be passed
        through untouched.

        Raises:
            ValueError: If a flag name is not a config field.
        """
        known = {f.name for f in fields(self)}
        unknown = set(flags) - known
        if unknown:
            raise ValueError(f"Unknown config flag(s): {', '.join(sorted(unknown))}")
        changes = {k: bool(v) for k, v in flags.items() if v is not None}
        return replace(self, **changes)


def resolve_config(args=None, environ=None):
    """Resolve a LoggerConfig from the environment plus parsed CLI args.

    For each flag, a truthy attribute on ``args`` wins; otherwise the
    environment decides.
    """
    config = LoggerConfig.from_env(environ)
    if args is None:
        return config
    overrides = {}
    for name in ENV_FLAGS:
        value = getattr(args, name, None)
        if value:
            overrides[name] = True
    return config.with_overrides(**overrides)
