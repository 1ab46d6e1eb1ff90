"""Status command: show the state of a working directory."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import click

from refsync.constants import CACHE_REMOTE_NAME, GIT_MARKER_DIR, TIMEOUT_GIT_QUERY
from refsync.paths import normalize_path
from refsync.utils import format_kv


def _git_query(path: Path, *args: str) -> str:
    try:
        result = subprocess.run(
            ["git", "-C", str(path), *args],
            capture_output=True, text=True, check=False,
            timeout=TIMEOUT_GIT_QUERY,
        )
    except (OSError, subprocess.TimeoutExpired):
        return ""
    if result.returncode != 0:
        return ""
    return result.stdout.strip()


def _collect_status(path: Path) -> dict[str, Any]:
    cloned = (path / GIT_MARKER_DIR).is_dir()
    info: dict[str, Any] = {
        "path": str(path),
        "exists": path.is_dir(),
        "cloned": cloned,
        "head": "",
        "origin": "",
        "cache": "",
        "alternates": [],
    }
    if not cloned:
        return info

    info["head"] = _git_query(path, "rev-parse", "HEAD")
    info["origin"] = _git_query(path, "remote", "get-url", "origin")
    info["cache"] = _git_query(path, "remote", "get-url", CACHE_REMOTE_NAME)

    alternates_file = path / GIT_MARKER_DIR / "objects" / "info" / "alternates"
    if alternates_file.is_file():
        info["alternates"] = [
            line.strip()
            for line in alternates_file.read_text().splitlines()
            if line.strip()
        ]
    return info


@click.command()
@click.argument("path", type=click.Path(file_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def status(path: str, json_output: bool) -> None:
    """Show whether PATH is cloned and where it points."""
    info = _collect_status(normalize_path(path))

    if json_output:
        click.echo(json.dumps(info))
        return

    click.echo(format_kv("path", info["path"]))
    click.echo(format_kv("cloned", "yes" if info["cloned"] else "no"))
    if info["cloned"]:
        click.echo(format_kv("head", info["head"] or "(unknown)"))
        click.echo(format_kv("origin", info["origin"] or "(none)"))
        click.echo(format_kv("cache", info["cache"] or "(none)"))
        for alternate in info["alternates"]:
            click.echo(format_kv("alternate", alternate))
