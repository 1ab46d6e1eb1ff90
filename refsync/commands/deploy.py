"""Deploy command: sync every working directory listed in a manifest.

Entries are processed in manifest order. Working directories of the same
remote share one cache, so each remote's cache is refreshed at most once
per run no matter how many entries use it.

Flags:
  --keep-going: Continue after a failed entry and report all failures
  --report FILE: Write a JSON summary of every entry to FILE
"""

from __future__ import annotations

import sys
from typing import Any

import click

from refsync.commands._helpers import exit_with_error
from refsync.config import load_manifest, write_json
from refsync.errors import RefsyncError
from refsync.models import DeployManifest, Deployment
from refsync.utils import log_error, log_info, log_section
from refsync.working_dir import WorkingDir


def _deploy_one(manifest: DeployManifest, entry: Deployment, record: dict[str, Any]) -> None:
    """Sync *entry*, filling *record* as each step succeeds."""
    working_dir = WorkingDir(entry.remote)
    record["previous"] = working_dir.head(entry.path)
    record["commit"] = working_dir.sync(entry.path, entry.ref, manifest.options_for(entry))


@click.command()
@click.argument("manifest_path", metavar="MANIFEST", type=click.Path(dir_okay=False))
@click.option("--keep-going", is_flag=True, help="Continue after a failed entry")
@click.option(
    "--report",
    "report_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a JSON summary to this file",
)
def deploy(manifest_path: str, keep_going: bool, report_path: str | None) -> None:
    """Sync every working directory listed in MANIFEST."""
    try:
        manifest = load_manifest(manifest_path)
    except RefsyncError as exc:
        exit_with_error(exc)

    results: list[dict[str, Any]] = []
    failures = 0

    for entry in manifest.deployments:
        log_section(f"{entry.path} <- {entry.remote} @ {entry.ref}")
        record: dict[str, Any] = {
            "remote": entry.remote,
            "ref": entry.ref,
            "path": entry.path,
            "previous": None,
            "commit": None,
            "error": None,
        }
        results.append(record)
        try:
            _deploy_one(manifest, entry, record)
        except RefsyncError as exc:
            failures += 1
            record["error"] = str(exc)
            if not keep_going:
                if report_path:
                    write_json(report_path, {"deployments": results})
                exit_with_error(exc)
            log_error(f"Failed to deploy {entry.path}: {exc}")

    if report_path:
        write_json(report_path, {"deployments": results})

    deployed = len(results) - failures
    log_info(f"\nDeployed {deployed}/{len(results)} working directories")
    if failures:
        sys.exit(1)
