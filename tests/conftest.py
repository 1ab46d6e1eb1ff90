"""
Top-level pytest conftest.py -- shared fixtures for the test suite.

Provides:
    isolated_home - autouse; points REFSYNC_HOME at a temp dir and clears
                    the cache registry around every test
    has_git       - session-scoped check for git availability
    requires_git  - skips the test when git is missing
    local_repo    - temporary git repo with two tagged commits
"""

import os
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest

from refsync.cache import GitCache

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
}


def git(repo, *args):
    """Run git in *repo* and return stripped stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        env={**os.environ, **GIT_ENV},
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@dataclass
class LocalRepo:
    path: Path
    first: str
    second: str

    def commit_file(self, name, content, message):
        (self.path / name).write_text(content)
        git(self.path, "add", name)
        git(self.path, "commit", "-m", message)
        return git(self.path, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep caches and settings of every test inside its own temp dir."""
    home = tmp_path / "refsync-home"
    monkeypatch.setenv("REFSYNC_HOME", str(home))
    monkeypatch.delenv("REFSYNC_CACHE_DIR", raising=False)
    monkeypatch.delenv("REFSYNC_GIT_TIMEOUT", raising=False)
    monkeypatch.delenv("REFSYNC_DEBUG", raising=False)
    GitCache.reset_registry()
    yield home
    GitCache.reset_registry()


@pytest.fixture(scope="session")
def has_git():
    """Return True if the ``git`` command is on PATH."""
    return shutil.which("git") is not None


@pytest.fixture
def requires_git(has_git):
    """Skip the test when git is not installed."""
    if not has_git:
        pytest.skip("git is not available")


@pytest.fixture
def local_repo(tmp_path, requires_git):
    """Create a deterministic git repo to act as the remote.

    ``main`` has two commits:

    * first  - adds README.md and old.txt, tagged ``v1.0`` (annotated)
    * second - removes old.txt, adds new.txt, tagged ``v2.0`` (annotated)
    """
    repo = tmp_path / "remote"
    repo.mkdir()

    git(repo, "init", "-b", "main")
    (repo / "README.md").write_text("# Test Repository\n")
    (repo / "old.txt").write_text("old\n")
    git(repo, "add", "README.md", "old.txt")
    git(repo, "commit", "-m", "Initial commit")
    git(repo, "tag", "-a", "v1.0", "-m", "Release 1.0")
    first = git(repo, "rev-parse", "HEAD")

    git(repo, "rm", "old.txt")
    (repo / "new.txt").write_text("new\n")
    git(repo, "add", "new.txt")
    git(repo, "commit", "-m", "Replace old.txt with new.txt")
    git(repo, "tag", "-a", "v2.0", "-m", "Release 2.0")
    second = git(repo, "rev-parse", "HEAD")

    yield LocalRepo(path=repo, first=first, second=second)
