"""Input validation for refsync.

Convention:
- Functions validating user input return (is_valid: bool, error_msg: str).
  An empty error_msg indicates success.
- Callers that cannot continue raise ValidationError with the message.
"""

from __future__ import annotations

import re
import shutil
from urllib.parse import urlparse

_SSH_HOST_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*$")
_SCP_URL_PATTERN = re.compile(r"^(?:[A-Za-z0-9._-]+@)?([^:/]+):(.+)$")
_FORBIDDEN_REF_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def validate_ref(ref: str) -> tuple[bool, str]:
    """Validate a ref before it is handed to git.

    Accepts branch names, tag names, commit ids and rev expressions.
    Rejects empty refs, refs that git would parse as an option, and refs
    containing whitespace or control characters.

    Args:
        ref: The ref to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not ref:
        return False, "Ref required"
    if ref.startswith("-"):
        return False, f"Ref must not start with '-': {ref!r}"
    if _FORBIDDEN_REF_CHARS.search(ref):
        return False, f"Ref must not contain whitespace or control characters: {ref!r}"
    return True, ""


def validate_remote(url: str) -> tuple[bool, str]:
    """Validate a git remote URL or path.

    Accepts http(s), ssh, git and file URLs, scp-style ``user@host:path``
    remotes, and local filesystem paths. Rejects values git would parse
    as an option and http(s) URLs with embedded credentials.

    Args:
        url: Remote URL or local path to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not url:
        return False, "Remote required"
    if url.startswith("-"):
        return False, f"Remote must not start with '-': {url!r}"
    if _CONTROL_CHARS.search(url) or url != url.strip():
        return False, f"Invalid remote (control characters or surrounding whitespace): {url!r}"

    if url.startswith(("https://", "http://")):
        parsed = urlparse(url)
        if not parsed.hostname:
            return False, f"Invalid remote URL (missing host): {url}"
        if not parsed.path or parsed.path == "/":
            return False, f"Invalid remote URL (missing path): {url}"
        if parsed.username or parsed.password:
            return False, f"Invalid remote URL (embedded credentials not allowed): {url}"
        return True, ""

    if url.startswith(("ssh://", "git://")):
        parsed = urlparse(url)
        if not parsed.hostname:
            return False, f"Invalid remote URL (missing host): {url}"
        return True, ""

    if url.startswith("file://"):
        if not urlparse(url).path:
            return False, f"Invalid remote URL (missing path): {url}"
        return True, ""

    # Local filesystem paths (absolute or relative)
    if url.startswith(("/", "./", "../", "~")) or url in (".", ".."):
        return True, ""

    # scp-like syntax: [user@]host:path
    match = _SCP_URL_PATTERN.match(url)
    if match:
        if not _SSH_HOST_PATTERN.match(match.group(1)):
            return False, f"Invalid remote (invalid host): {url}"
        return True, ""

    # Anything else is treated as a relative path by git
    return True, ""


def require_git() -> tuple[bool, str]:
    """Check that git is available on the system.

    Returns:
        Tuple of (is_available, error_message).
    """
    if shutil.which("git") is None:
        return False, "Missing required command: git"
    return True, ""
