"""
Version information for stderrkit.

This file is the canonical source for version numbers.

Format: MAJOR.MINOR.PATCH[-PHASE]
Example: 0.3.0-alpha
"""

# Version components - edit these for version bumps
MAJOR = 0
MINOR = 3
PATCH = 0
PHASE = "alpha"  # None, "alpha", "beta", "rc1", etc.

__version__ = "0.3.0-alpha"
__app_name__ = "stderrkit"


def get_version():
    """Return the full version string."""
    return __version__


def get_base_version():
    """Return the semantic version string (MAJOR.MINOR.PATCH[-PHASE])."""
    base = f"{MAJOR}.{MINOR}.{PATCH}"
    if PHASE:
        base = f"{base}-{PHASE}"
    return base


def get_pip_version():
    """
    Return PEP 440 compliant version for pip/setuptools.

    Converts our version format to PEP 440:
    - 0.3.0-alpha -> 0.3.0a0
    - 0.3.0-rc1   -> 0.3.0rc1
    """
    base = f"{MAJOR}.{MINOR}.{PATCH}"

    # Map phase to PEP 440 pre-release segment
    phase_map = {"alpha": "a0", "beta": "b0"}
    if PHASE:
        base += phase_map.get(PHASE, PHASE)
    return base


# For convenience in imports
VERSION = get_version()
BASE_VERSION = get_base_version()
PIP_VERSION = get_pip_version()
