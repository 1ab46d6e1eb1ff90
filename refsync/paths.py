"""Path utilities for refsync.

Provides:
  - Working directory path normalization
  - Remote URL -> cache mirror path conversion
  - Directory creation
"""

from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path
from urllib.parse import urlparse

from refsync.constants import get_cache_dir

_UNSAFE_COMPONENT_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_DIGEST_LENGTH = 12


def normalize_path(path: str | Path) -> Path:
    """Expand ``~`` and make *path* absolute without resolving symlinks."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def ensure_dir(path: str | Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Equivalent to `mkdir -p`. Creates all parent directories as needed.

    Args:
        path: Directory path (string or Path)

    Returns:
        Path object of the directory
    """
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _sanitize_component(part: str) -> str:
    cleaned = _UNSAFE_COMPONENT_CHARS.sub("_", part).strip("._")
    return cleaned or "_"


def remote_key(remote: str) -> str:
    """Return the identity used to share caches between working directories.

    Local paths are normalized to absolute form so ``./repo`` and
    ``/abs/repo`` refer to the same cache; URLs are used verbatim.
    """
    if "://" in remote or re.match(r"^(?:[A-Za-z0-9._-]+@)?[^:/]+:", remote):
        return remote
    return str(normalize_path(remote))


def remote_to_cache_path(remote: str, cache_dir: str | Path | None = None) -> Path:
    """Convert a remote to its bare-mirror path under the cache directory.

    Handles https://, http://, ssh://, git://, file://, scp-style
    ``user@host:path`` remotes and local filesystem paths. The directory
    layout follows host and path, and the final component
    carries a digest of :func:`remote_key` so two remotes never share a
    mirror, even when they differ only by port or by characters that
    sanitize to the same name.

    Args:
        remote: Remote URL or local path.
        cache_dir: Base directory for mirrors (defaults to ``get_cache_dir()``).

    Returns:
        Absolute path of the bare mirror, ending in ``-<digest>.git``.
    """
    base = normalize_path(cache_dir) if cache_dir is not None else normalize_path(get_cache_dir())

    if not remote:
        return base / "unknown.git"

    key = remote_key(remote)
    if "://" in key:
        parsed = urlparse(key)
        if parsed.scheme == "file":
            parts = ["local", *parsed.path.split("/")]
        else:
            # netloc keeps the port; userinfo is not part of the identity
            host = parsed.netloc.rpartition("@")[2]
            parts = [host or "unknown", *parsed.path.split("/")]
    elif key.startswith("/"):
        parts = ["local", *key.split("/")]
    else:
        host, _, path = key.partition(":")
        host = host.rpartition("@")[2]
        parts = [host, *path.split("/")]

    parts = [_sanitize_component(p) for p in parts if p and p not in (".", "..")]
    if parts and parts[-1].endswith(".git"):
        parts[-1] = parts[-1][:-4] or "_"
    if not parts:
        parts = ["unknown"]

    digest = hashlib.sha256(key.encode()).hexdigest()[:_DIGEST_LENGTH]
    parts[-1] = f"{parts[-1]}-{digest}.git"
    return base.joinpath(*parts)
