"""Working directories backed by a shared object cache.

A :class:`WorkingDir` materializes one remote at a requested ref in any
number of local directories:

  - The first sync of a path clones the remote with ``--reference`` to
    the remote's :class:`~refsync.cache.GitCache`, so objects already in
    the cache are borrowed rather than copied, and adds a ``cache``
    remote pointing at the mirror.
  - Later syncs re-point the ``cache`` remote and fetch from it.
  - Every sync then hard-resets the tree to the commit the ref resolves
    to in the cache, discarding tracked local modifications.

Refs are always resolved against the cache, never the working copy, so
two directories synced to the same ref end up on the same commit.

Failures are never retried. Resolution and reset failures are logged
with their context and re-raised as :class:`~refsync.errors.ResolveError`
or :class:`~refsync.errors.ResetError`, chained to the underlying
:class:`~refsync.errors.ExecutionFailure`; everything else propagates
unchanged.
"""

from __future__ import annotations

from pathlib import Path

from refsync.cache import GitCache
from refsync.constants import CACHE_REMOTE_NAME, GIT_MARKER_DIR
from refsync.errors import ExecutionFailure, ResetError, ResolveError, ValidationError
from refsync.execution import GitRunner, run_git
from refsync.models import SyncOptions
from refsync.paths import normalize_path
from refsync.utils import log_error, log_step
from refsync.validate import validate_ref, validate_remote


def _require_valid_ref(ref: str) -> None:
    ok, msg = validate_ref(ref)
    if not ok:
        raise ValidationError(msg)


class WorkingDir:
    """Synchronizes local working directories of one remote."""

    def __init__(
        self,
        remote: str,
        *,
        cache: GitCache | None = None,
        run: GitRunner = run_git,
    ) -> None:
        """Create a synchronizer for *remote*.

        Args:
            remote: Remote URL or path.
            cache: Cache to borrow objects from. Defaults to the shared
                instance for *remote* from ``GitCache.generate``.
            run: Git command runner.
        """
        ok, msg = validate_remote(remote)
        if not ok:
            raise ValidationError(msg)
        self._remote = remote
        self._cache = cache if cache is not None else GitCache.generate(remote)
        self._run = run

    def __repr__(self) -> str:
        return f"WorkingDir(remote={self._remote!r})"

    @property
    def remote(self) -> str:
        return self._remote

    @property
    def cache(self) -> GitCache:
        return self._cache

    def sync(
        self,
        path: str | Path,
        ref: str,
        options: SyncOptions | None = None,
    ) -> str:
        """Bring the working directory at *path* to *ref*.

        Args:
            path: Destination directory; created by the clone if absent.
            ref: Branch, tag or commit to check out.
            options: Sync options; refreshes the cache by default.

        Returns:
            The commit the working tree was reset to.

        Raises:
            ValidationError: If *ref* is malformed.
            ExecutionFailure: If refreshing the cache, cloning or fetching fails.
            ResolveError: If *ref* does not exist in the cache.
            ResetError: If the resolved commit cannot be checked out.
        """
        if options is None:
            options = SyncOptions()
        _require_valid_ref(ref)

        target = normalize_path(path)
        if options.update_cache:
            self._cache.sync()

        if self.cloned_at(target):
            self._fetch(target)
        else:
            self._clone(target)
        return self._reset(target, ref)

    def cloned_at(self, path: str | Path) -> bool:
        """Return True if *path* already holds a clone."""
        return (normalize_path(path) / GIT_MARKER_DIR).is_dir()

    def head(self, path: str | Path) -> str | None:
        """Return the commit checked out at *path*, or None if it is not cloned."""
        target = normalize_path(path)
        if not self.cloned_at(target):
            return None
        return self._run(["rev-parse", "HEAD"], path=target).strip()

    def resolve_commit(self, ref: str) -> str:
        """Resolve *ref* to a commit id using the cache's object store.

        Raises:
            ValidationError: If *ref* is malformed.
            ResolveError: If the cache does not know *ref*.
        """
        _require_valid_ref(ref)
        cache_path = self._cache.path
        try:
            output = self._run(
                ["rev-parse", "--verify", f"{ref}^{{commit}}"],
                git_dir=cache_path,
            )
        except ExecutionFailure as exc:
            err = ResolveError(ref, str(cache_path))
            log_error(str(err))
            raise err from exc
        return output.strip()

    def _clone(self, path: Path) -> None:
        cache_path = str(self._cache.path)
        log_step(f"Cloning {self._remote} into {path}...")
        # Clone from the remote itself so that a plain pull in the
        # directory keeps working; the cache is only an object source.
        self._run(["clone", "--reference", cache_path, self._remote, str(path)])
        self._run(["remote", "add", CACHE_REMOTE_NAME, cache_path], path=path)

    def _fetch(self, path: Path) -> None:
        cache_path = str(self._cache.path)
        log_step(f"Fetching {path} from cache...")
        self._run(["remote", "set-url", CACHE_REMOTE_NAME, cache_path], path=path)
        self._run(["fetch", "--prune", CACHE_REMOTE_NAME], path=path)

    def _reset(self, path: Path, ref: str) -> str:
        commit = self.resolve_commit(ref)
        try:
            self._run(["reset", "--hard", commit], path=path)
        except ExecutionFailure as exc:
            err = ResetError(commit, str(path))
            log_error(str(err))
            raise err from exc
        log_step(f"{path} is at {commit[:12]} ({ref})")
        return commit
