"""Git command execution.

Every git invocation in refsync goes through :func:`run_git`, which
builds the argument list, runs it without a shell, and turns any
non-zero exit into an :class:`~refsync.errors.ExecutionFailure` that
carries the command line and git's stderr.

No retries are attempted; transient network failures are reported to
the caller, who decides whether to try again.
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from refsync.constants import get_git_transfer_timeout
from refsync.errors import ExecutionFailure
from refsync.utils import log_debug


class GitRunner(Protocol):
    """Anything that can run a git command line and return its stdout."""

    def __call__(
        self,
        args: list[str],
        *,
        path: str | Path | None = None,
        git_dir: str | Path | None = None,
    ) -> str: ...


def build_git_command(
    args: list[str],
    *,
    path: str | Path | None = None,
    git_dir: str | Path | None = None,
) -> list[str]:
    """Build the full argv for a git invocation.

    Args:
        args: Git sub-command and arguments (e.g. ``["fetch", "--prune", "cache"]``).
        path: Working directory to run in (``git -C``).
        git_dir: Repository directory to operate on (``git --git-dir``).

    Returns:
        The argument list starting with ``git``.
    """
    cmd = ["git"]
    if git_dir is not None:
        cmd.append(f"--git-dir={git_dir}")
    if path is not None:
        cmd.extend(["-C", str(path)])
    cmd.extend(args)
    return cmd


def run_git(
    args: list[str],
    *,
    path: str | Path | None = None,
    git_dir: str | Path | None = None,
    timeout: int | None = None,
) -> str:
    """Run a git command and return its captured stdout.

    Args:
        args: Git sub-command and arguments.
        path: Working directory to run in.
        git_dir: Repository directory to operate on.
        timeout: Seconds before the command is killed. Defaults to the
            transfer timeout (``REFSYNC_GIT_TIMEOUT``).

    Returns:
        The command's stdout.

    Raises:
        ExecutionFailure: If git exits non-zero, times out, or cannot be started.
    """
    cmd = build_git_command(args, path=path, git_dir=git_dir)
    if timeout is None:
        timeout = get_git_transfer_timeout()

    log_debug(f"Running: {shlex.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ExecutionFailure(cmd, None, f"timed out after {timeout}s") from None
    except OSError as exc:
        raise ExecutionFailure(cmd, None, str(exc)) from exc

    if result.returncode != 0:
        raise ExecutionFailure(cmd, result.returncode, result.stderr or "")
    return result.stdout
