from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from refsync.validate import validate_ref, validate_remote


class SyncOptions(BaseModel):
    """Options accepted by ``WorkingDir.sync``."""

    model_config = ConfigDict(frozen=True)

    update_cache: bool = True
    """Refresh the shared cache before cloning or fetching."""


class Deployment(BaseModel):
    """One working directory to materialize at a ref of a remote.

    Entries come from deploy manifests; all fields validate on construction.
    """

    remote: str
    """Remote URL or path (required)."""

    ref: str
    """Branch, tag or commit to check out (required)."""

    path: str
    """Destination working directory (required)."""

    update_cache: bool | None = None
    """Per-entry override of the manifest-wide ``update_cache``."""

    @field_validator("remote")
    @classmethod
    def _check_remote(cls, value: str) -> str:
        ok, msg = validate_remote(value)
        if not ok:
            raise ValueError(msg)
        return value

    @field_validator("ref")
    @classmethod
    def _check_ref(cls, value: str) -> str:
        ok, msg = validate_ref(value)
        if not ok:
            raise ValueError(msg)
        return value

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Path required")
        return value


class DeployManifest(BaseModel):
    """A set of deployments synced together by ``refsync deploy``."""

    deployments: list[Deployment] = Field(default_factory=list)
    """Working directories to sync, in order."""

    update_cache: bool = True
    """Default cache refresh behaviour for entries without an override."""

    def options_for(self, deployment: Deployment) -> SyncOptions:
        """Return the sync options for *deployment*, honouring its override."""
        if deployment.update_cache is None:
            return SyncOptions(update_cache=self.update_cache)
        return SyncOptions(update_cache=deployment.update_cache)
