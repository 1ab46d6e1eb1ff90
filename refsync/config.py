"""JSON configuration file operations.

Provides atomic writing of JSON reports and parsing of deploy
manifests into validated models.

A deploy manifest looks like::

    {
      "update_cache": true,
      "deployments": [
        {"remote": "https://example.com/app.git", "ref": "main", "path": "/srv/app"},
        {"remote": "https://example.com/lib.git", "ref": "v2.0", "path": "/srv/lib",
         "update_cache": false}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from refsync.atomic_io import atomic_write
from refsync.errors import ValidationError
from refsync.models import DeployManifest


def write_json(path: str | Path, data: dict[str, Any]) -> None:
    """Write JSON data to a file atomically, creating parent directories as needed."""
    atomic_write(Path(path), json.dumps(data, indent=2) + "\n")


def load_manifest(path: str | Path) -> DeployManifest:
    """Load and validate a deploy manifest.

    Args:
        path: Path to the manifest JSON file.

    Returns:
        The validated manifest.

    Raises:
        ValidationError: If the file is missing, is not a JSON object, or
            does not describe a valid manifest.
    """
    p = Path(path)
    try:
        text = p.read_text()
    except OSError as exc:
        raise ValidationError(f"Cannot read manifest {p}: {exc.strerror or exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Manifest {p} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError(f"Manifest {p} must contain a JSON object")

    try:
        return DeployManifest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid manifest {p}:\n{exc}") from exc
