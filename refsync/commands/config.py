"""Config command: show effective refsync settings."""

from __future__ import annotations

import json
import shutil

import click

from refsync.constants import get_cache_dir, get_git_transfer_timeout, get_refsync_home
from refsync.utils import BOLD, RESET, debug_enabled, format_kv
from refsync.validate import require_git


@click.command()
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def config(json_output: bool) -> None:
    """Show refsync configuration and system checks."""
    data = {
        "refsync_home": str(get_refsync_home()),
        "cache_dir": str(get_cache_dir()),
        "git_timeout": get_git_transfer_timeout(),
        "debug": debug_enabled(),
        "git": shutil.which("git") or "",
    }

    if json_output:
        click.echo(json.dumps(data))
        return

    click.echo(f"{BOLD}Settings{RESET}")
    click.echo(format_kv("REFSYNC_HOME", data["refsync_home"]))
    click.echo(format_kv("REFSYNC_CACHE_DIR", data["cache_dir"]))
    click.echo(format_kv("REFSYNC_GIT_TIMEOUT", str(data["git_timeout"])))
    click.echo(format_kv("REFSYNC_DEBUG", "1" if data["debug"] else "0"))
    click.echo()
    click.echo(f"{BOLD}Checks{RESET}")
    ok, msg = require_git()
    click.echo(format_kv("git", data["git"] if ok else msg))
