"""Resolve command: print the commit a ref points at in the cache."""

from __future__ import annotations

import click

from refsync.commands._helpers import exit_with_error
from refsync.errors import RefsyncError
from refsync.working_dir import WorkingDir


@click.command()
@click.argument("remote")
@click.argument("ref")
@click.option(
    "--no-update-cache",
    is_flag=True,
    help="Resolve against the cache as it is on disk",
)
def resolve(remote: str, ref: str, no_update_cache: bool) -> None:
    """Print the commit REF of REMOTE resolves to."""
    try:
        working_dir = WorkingDir(remote)
        if not no_update_cache:
            working_dir.cache.sync()
        commit = working_dir.resolve_commit(ref)
    except RefsyncError as exc:
        exit_with_error(exc)
    click.echo(commit)
