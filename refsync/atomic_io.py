"""Cross-process coordination for cache refreshes, and atomic report writes.

Two refsync processes deploying from the same remote share one bare
mirror. :func:`mirror_lock` serializes their ``clone --mirror`` and
``fetch --prune`` runs through an advisory ``fcntl.flock()`` on a
``<mirror>.lock`` file that sits beside the mirror (never inside it, so
the lock exists before the mirror does).

``flock()`` is advisory and unreliable on NFS; keep ``REFSYNC_CACHE_DIR``
on local disk.
"""

from __future__ import annotations

import contextlib
import fcntl
import os
import tempfile
import time
from collections.abc import Iterator
from pathlib import Path

from refsync.constants import LOCK_TIMEOUT_SECONDS

_POLL_INTERVAL = 0.1


def mirror_lock_path(mirror: Path) -> Path:
    """Return the lock file guarding *mirror*."""
    return mirror.parent / f"{mirror.name}.lock"


@contextlib.contextmanager
def mirror_lock(mirror: Path, *, timeout: float | None = None) -> Iterator[None]:
    """Hold the exclusive refresh lock of a cache mirror.

    Polls with non-blocking ``flock()`` until the lock is free or
    *timeout* seconds (default ``LOCK_TIMEOUT_SECONDS``) have passed.

    Raises:
        OSError: Another process kept the mirror locked past the timeout.
    """
    if timeout is None:
        timeout = LOCK_TIMEOUT_SECONDS
    lock_path = mirror_lock_path(mirror)
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(str(lock_path), os.O_CREAT | os.O_RDWR, 0o600)
    try:
        deadline = time.monotonic() + timeout
        while not _try_flock(fd):
            if time.monotonic() >= deadline:
                raise OSError(
                    f"Timed out after {timeout}s waiting for another refsync process "
                    f"to finish refreshing {mirror}; remove {lock_path} if none is running"
                )
            time.sleep(_POLL_INTERVAL)
        try:
            yield
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
    finally:
        os.close(fd)


def _try_flock(fd: int) -> bool:
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError:
        return False
    return True


def atomic_write(path: Path, content: str) -> None:
    """Replace *path* with *content* via a same-directory temp file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise
