"""Shared bare-mirror object caches.

Each remote gets exactly one bare mirror under the cache directory.
Working directories clone with ``--reference`` to the mirror so their
object stores borrow from it instead of duplicating history, and they
fetch from it instead of the network.

Instances are memoized per remote through :meth:`GitCache.generate`, so
however many working directories are synced against the same remote in
one process, its mirror is refreshed at most once.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import ClassVar

from refsync.atomic_io import mirror_lock
from refsync.errors import CacheError, ValidationError
from refsync.execution import GitRunner, run_git
from refsync.paths import ensure_dir, remote_key, remote_to_cache_path
from refsync.utils import log_step
from refsync.validate import validate_remote


class GitCache:
    """A bare mirror of one remote, shared by every working directory of it."""

    _instances: ClassVar[dict[str, GitCache]] = {}
    _registry_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def generate(cls, remote: str) -> GitCache:
        """Return the process-wide cache for *remote*, creating it on first use."""
        key = remote_key(remote)
        with cls._registry_lock:
            cache = cls._instances.get(key)
            if cache is None:
                cache = cls(remote)
                cls._instances[key] = cache
            return cache

    @classmethod
    def reset_registry(cls) -> None:
        """Forget all memoized caches."""
        with cls._registry_lock:
            cls._instances.clear()

    def __init__(
        self,
        remote: str,
        *,
        cache_dir: str | Path | None = None,
        run: GitRunner = run_git,
    ) -> None:
        ok, msg = validate_remote(remote)
        if not ok:
            raise ValidationError(msg)
        self.remote = remote
        self._cache_dir = cache_dir
        self._run = run
        self._sync_lock = threading.Lock()
        self.synced = False

    def __repr__(self) -> str:
        return f"GitCache(remote={self.remote!r}, path={str(self.path)!r})"

    @property
    def path(self) -> Path:
        """Filesystem location of the bare mirror."""
        return remote_to_cache_path(self.remote, self._cache_dir)

    def cached(self) -> bool:
        """Return True if the mirror exists on disk."""
        return self.path.is_dir()

    def sync(self) -> None:
        """Refresh the mirror unless this instance already did so."""
        with self._sync_lock:
            if not self.synced:
                self._refresh()
                self.synced = True

    def sync_now(self) -> None:
        """Refresh the mirror unconditionally."""
        with self._sync_lock:
            self.synced = False
            self._refresh()
            self.synced = True

    def _refresh(self) -> None:
        path = self.path
        try:
            ensure_dir(path.parent)
            with mirror_lock(path):
                if path.is_dir():
                    log_step(f"Fetching {self.remote} into cache...")
                    self._run(["fetch", "--prune"], git_dir=path)
                else:
                    log_step(f"Creating cache for {self.remote}...")
                    self._run(["clone", "--mirror", self.remote, str(path)])
        except OSError as exc:
            raise CacheError(str(path), exc.strerror or str(exc)) from exc

    def branches(self) -> list[str]:
        """List branch names known to the mirror."""
        return self._list_refs("refs/heads")

    def tags(self) -> list[str]:
        """List tag names known to the mirror."""
        return self._list_refs("refs/tags")

    def _list_refs(self, prefix: str) -> list[str]:
        if not self.cached():
            return []
        output = self._run(
            ["for-each-ref", "--format=%(refname:short)", prefix],
            git_dir=self.path,
        )
        return [line.strip() for line in output.splitlines() if line.strip()]
