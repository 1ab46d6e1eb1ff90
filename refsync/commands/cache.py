"""Cache commands: inspect and refresh the shared mirror of a remote."""

from __future__ import annotations

import click

from refsync.cache import GitCache
from refsync.commands._helpers import exit_with_error
from refsync.errors import RefsyncError


def _cache_for(remote: str) -> GitCache:
    try:
        return GitCache.generate(remote)
    except RefsyncError as exc:
        exit_with_error(exc)


@click.group()
def cache() -> None:
    """Manage shared caches."""


@cache.command("sync")
@click.argument("remote")
def cache_sync(remote: str) -> None:
    """Create or refresh the cache of REMOTE."""
    git_cache = _cache_for(remote)
    try:
        git_cache.sync_now()
    except RefsyncError as exc:
        exit_with_error(exc)
    click.echo(str(git_cache.path))


@cache.command("path")
@click.argument("remote")
def cache_path(remote: str) -> None:
    """Print where the cache of REMOTE lives."""
    click.echo(str(_cache_for(remote).path))


@cache.command("branches")
@click.argument("remote")
@click.option("--tags", "show_tags", is_flag=True, help="List tags instead of branches")
def cache_branches(remote: str, show_tags: bool) -> None:
    """List the branches (or tags) known to the cache of REMOTE."""
    git_cache = _cache_for(remote)
    try:
        names = git_cache.tags() if show_tags else git_cache.branches()
    except RefsyncError as exc:
        exit_with_error(exc)
    for name in names:
        click.echo(name)
