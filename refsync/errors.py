"""Exception hierarchy for refsync.

Provides a structured exception tree so callers can catch broad
categories (``RefsyncError``) or specific failure modes.

This module is a base-layer module: it must NOT import from any
other ``refsync`` submodule.
"""

from __future__ import annotations

import shlex


class RefsyncError(Exception):
    """Base exception for all refsync errors."""


class ValidationError(RefsyncError):
    """Input validation failures (bad refs, remotes, manifests, etc.)."""


class GitError(RefsyncError):
    """Failures while driving git."""


class ExecutionFailure(GitError):
    """A git command exited non-zero, timed out, or could not be started."""

    def __init__(
        self,
        command: list[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(command, returncode, stderr)

    def __str__(self) -> str:
        if self.returncode is None:
            status = "did not complete"
        else:
            status = f"exited with status {self.returncode}"
        msg = f"Command '{shlex.join(self.command)}' {status}"
        detail = self.stderr.strip()
        if detail:
            msg += f"\n{detail}"
        return msg


class ResolveError(GitError):
    """A ref could not be resolved to a commit in the shared cache."""

    def __init__(self, ref: str, cache_path: str) -> None:
        self.ref = ref
        self.cache_path = cache_path
        super().__init__(ref, cache_path)

    def __str__(self) -> str:
        return f"Could not resolve ref '{self.ref}' for git cache {self.cache_path}"


class ResetError(GitError):
    """A working directory could not be reset to a resolved commit."""

    def __init__(self, commit: str, path: str) -> None:
        self.commit = commit
        self.path = path
        super().__init__(commit, path)

    def __str__(self) -> str:
        return f"Unable to locate commit object {self.commit} in git repo {self.path}"


class CacheError(RefsyncError):
    """The cache directory could not be prepared or locked for a refresh."""

    def __init__(self, cache_path: str, reason: str) -> None:
        self.cache_path = cache_path
        self.reason = reason
        super().__init__(cache_path, reason)

    def __str__(self) -> str:
        return f"Cannot refresh git cache {self.cache_path}: {self.reason}"
