"""Configuration defaults for refsync.

Every setting can be overridden through the environment; the getters
read it on each call so tests and long-lived processes see changes.
"""

from __future__ import annotations

import os
from pathlib import Path


def _env_int(key: str, default: int) -> int:
    """Read an integer from an environment variable, returning default on parse failure."""
    try:
        return int(os.environ.get(key, str(default)))
    except (ValueError, TypeError):
        return default


# ============================================================================
# Directory & Path Constants
# ============================================================================


def get_refsync_home() -> Path:
    """Get the base directory for refsync state.

    Respects REFSYNC_HOME environment variable override.
    Defaults to ~/.refsync if not set.

    Returns:
        Path to refsync home directory
    """
    home_str = os.environ.get("REFSYNC_HOME")
    if home_str:
        return Path(home_str).expanduser()
    return Path.home() / ".refsync"


def get_cache_dir() -> Path:
    """Get the directory holding shared bare mirrors.

    Respects REFSYNC_CACHE_DIR, otherwise ``$REFSYNC_HOME/cache``.

    Returns:
        Path to the cache directory
    """
    cache_str = os.environ.get("REFSYNC_CACHE_DIR")
    if cache_str:
        return Path(cache_str).expanduser()
    return get_refsync_home() / "cache"


# ============================================================================
# Git Constants
# ============================================================================

CACHE_REMOTE_NAME: str = "cache"
"""Name of the remote every working directory keeps pointed at its cache."""

GIT_MARKER_DIR: str = ".git"
"""Directory whose presence marks a path as an existing clone."""

LOCK_TIMEOUT_SECONDS: int = 300
"""Seconds to wait for another process to finish refreshing a cache."""

# ============================================================================
# Subprocess Timeout Constants (seconds)
# ============================================================================

TIMEOUT_GIT_QUERY: int = 30
"""Timeout for local git queries (rev-parse, for-each-ref, remote)."""


def get_git_transfer_timeout() -> int:
    """Timeout for git clone/fetch/reset, overridable via REFSYNC_GIT_TIMEOUT."""
    return _env_int("REFSYNC_GIT_TIMEOUT", 600)
