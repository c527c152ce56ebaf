"""Configuration defaults for prsync.

This module provides the defaults the CLI falls back to when a flag
is not given.
"""

from __future__ import annotations

import os


DEFAULT_STAGING_DIR = "staging"
DEFAULT_EXCLUDE_FILE = "exclude.txt"
DEFAULT_DETECTOR = "rsync"


def default_cores() -> int:
    """Return the number of CPUs on this host, or 1 if it cannot be determined.

    Example:
        >>> from prsync.config import default_cores
        >>> default_cores() >= 1
        True
    """
    return os.cpu_count() or 1
