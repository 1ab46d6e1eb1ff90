"""Unit tests for refsync/config.py and refsync/constants.py."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from refsync.config import load_manifest, write_json
from refsync.constants import get_cache_dir, get_git_transfer_timeout, get_refsync_home
from refsync.errors import ValidationError


class TestConstants:

    def test_home_from_env(self, isolated_home):
        assert get_refsync_home() == isolated_home

    def test_home_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("REFSYNC_HOME")
        monkeypatch.setenv("HOME", str(tmp_path))
        assert get_refsync_home() == tmp_path / ".refsync"

    def test_cache_dir_under_home(self, isolated_home):
        assert get_cache_dir() == isolated_home / "cache"

    def test_cache_dir_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REFSYNC_CACHE_DIR", str(tmp_path / "mirrors"))
        assert get_cache_dir() == tmp_path / "mirrors"

    def test_git_timeout(self, monkeypatch):
        assert get_git_transfer_timeout() == 600
        monkeypatch.setenv("REFSYNC_GIT_TIMEOUT", "30")
        assert get_git_transfer_timeout() == 30


class TestWriteJson:

    def test_writes_indented_json(self, tmp_path):
        p = tmp_path / "nested" / "out.json"
        write_json(p, {"a": 1})
        assert json.loads(p.read_text()) == {"a": 1}
        assert p.read_text().endswith("\n")
        assert not list(p.parent.glob("*.tmp"))

    def test_overwrites_existing(self, tmp_path):
        p = tmp_path / "out.json"
        p.write_text("stale")
        write_json(str(p), {"deployments": []})
        assert json.loads(p.read_text()) == {"deployments": []}


class TestLoadManifest:

    def _write(self, tmp_path: Path, data) -> Path:
        p = tmp_path / "manifest.json"
        p.write_text(json.dumps(data))
        return p

    def test_valid(self, tmp_path):
        p = self._write(tmp_path, {
            "update_cache": False,
            "deployments": [
                {"remote": "https://example.com/app.git", "ref": "main", "path": "/srv/app"},
            ],
        })
        manifest = load_manifest(p)
        assert manifest.update_cache is False
        assert manifest.deployments[0].path == "/srv/app"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="Cannot read manifest"):
            load_manifest(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        p = tmp_path / "manifest.json"
        p.write_text("{oops")
        with pytest.raises(ValidationError, match="not valid JSON"):
            load_manifest(p)

    def test_not_an_object(self, tmp_path):
        p = self._write(tmp_path, ["a"])
        with pytest.raises(ValidationError, match="JSON object"):
            load_manifest(p)

    def test_invalid_entry(self, tmp_path):
        p = self._write(tmp_path, {"deployments": [{"remote": "x", "ref": "-bad", "path": "/p"}]})
        with pytest.raises(ValidationError, match="Invalid manifest") as exc_info:
            load_manifest(p)
        assert exc_info.value.__cause__ is not None
