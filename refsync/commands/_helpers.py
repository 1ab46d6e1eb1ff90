"""Shared helper functions for refsync commands."""

from __future__ import annotations

import sys
from typing import NoReturn

from refsync.errors import RefsyncError, ResetError, ResolveError
from refsync.models import SyncOptions
from refsync.utils import log_error


def sync_options(no_update_cache: bool) -> SyncOptions:
    """Build sync options from the shared ``--no-update-cache`` flag."""
    return SyncOptions(update_cache=not no_update_cache)


def exit_with_error(exc: RefsyncError) -> NoReturn:
    """Report *exc* and its underlying cause on stderr, then exit 1."""
    # WorkingDir already logged these with their context.
    if not isinstance(exc, (ResolveError, ResetError)):
        log_error(str(exc))
    cause = exc.__cause__
    if cause is not None:
        print(f"  caused by: {cause}", file=sys.stderr)
    sys.exit(1)
