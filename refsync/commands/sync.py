"""Sync command: bring one working directory to a ref."""

from __future__ import annotations

import click

from refsync.commands._helpers import exit_with_error, sync_options
from refsync.errors import RefsyncError
from refsync.working_dir import WorkingDir


@click.command()
@click.argument("remote")
@click.argument("ref")
@click.argument("path", type=click.Path(file_okay=False))
@click.option(
    "--no-update-cache",
    is_flag=True,
    help="Use the cache as it is on disk instead of refreshing it first",
)
def sync(remote: str, ref: str, path: str, no_update_cache: bool) -> None:
    """Sync PATH to REF of REMOTE, cloning it if needed."""
    try:
        commit = WorkingDir(remote).sync(path, ref, sync_options(no_update_cache))
    except RefsyncError as exc:
        exit_with_error(exc)
    click.echo(commit)
