"""Unit tests for refsync/paths.py."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from refsync.paths import ensure_dir, normalize_path, remote_key, remote_to_cache_path


class TestNormalizePath:

    def test_absolute_path_unchanged(self, tmp_path):
        assert normalize_path(tmp_path / "a") == tmp_path / "a"

    def test_relative_path_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert normalize_path("a/b") == tmp_path / "a" / "b"

    def test_home_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert normalize_path("~/deploy") == tmp_path / "deploy"

    def test_dot_segments_collapsed(self, tmp_path):
        assert normalize_path(f"{tmp_path}/a/../b") == tmp_path / "b"


class TestRemoteKey:

    @pytest.mark.parametrize("remote", [
        "https://github.com/user/repo.git",
        "ssh://git@host/repo.git",
        "git@github.com:user/repo.git",
        "host:repo",
    ])
    def test_urls_are_verbatim(self, remote):
        assert remote_key(remote) == remote

    def test_local_paths_are_normalized(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert remote_key("./repo") == str(tmp_path / "repo")


class TestRemoteToCachePath:

    @pytest.mark.parametrize("remote,directory,stem", [
        ("https://github.com/user/repo.git", "github.com/user", "repo"),
        ("https://github.com/user/repo", "github.com/user", "repo"),
        ("http://example.com/a/b/c.git", "example.com/a/b", "c"),
        ("git@github.com:user/repo.git", "github.com/user", "repo"),
        ("ssh://git@example.com:2222/team/app.git", "example.com_2222/team", "app"),
        ("git://example.com/app", "example.com", "app"),
        ("file:///srv/git/app.git", "local/srv/git", "app"),
        ("/srv/git/app", "local/srv/git", "app"),
    ])
    def test_layout(self, tmp_path, remote, directory, stem):
        path = remote_to_cache_path(remote, tmp_path)
        assert path.parent == tmp_path / directory
        assert re.fullmatch(rf"{stem}-[0-9a-f]{{12}}\.git", path.name)

    def test_stable_for_same_remote(self, tmp_path):
        remote = "https://github.com/user/repo.git"
        assert remote_to_cache_path(remote, tmp_path) == remote_to_cache_path(remote, tmp_path)

    def test_relative_and_absolute_local_paths_share_mirror(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert remote_to_cache_path("./repo", tmp_path) == remote_to_cache_path(str(tmp_path / "repo"), tmp_path)

    def test_port_distinguishes_mirrors(self, tmp_path):
        with_port = remote_to_cache_path("https://git.example.com:8443/org/app.git", tmp_path)
        without_port = remote_to_cache_path("https://git.example.com/org/app.git", tmp_path)
        assert with_port != without_port
        assert with_port.parent == tmp_path / "git.example.com_8443" / "org"

    def test_credentials_not_in_path(self, tmp_path):
        path = remote_to_cache_path("ssh://deploy@example.com/app.git", tmp_path)
        assert "deploy" not in str(path.relative_to(tmp_path))

    @pytest.mark.parametrize("first,second", [
        ("/srv/git/a b", "/srv/git/a_b"),
        ("https://example.com/we ird/repo.git", "https://example.com/we$ird/repo.git"),
        ("https://example.com/app.git", "https://example.com/app"),
    ])
    def test_names_that_sanitize_alike_get_distinct_mirrors(self, tmp_path, first, second):
        assert remote_to_cache_path(first, tmp_path) != remote_to_cache_path(second, tmp_path)

    def test_unsafe_characters_sanitized(self, tmp_path):
        path = remote_to_cache_path("https://example.com/we ird/re$po.git", tmp_path)
        assert path.parent == tmp_path / "example.com" / "we_ird"
        assert path.name.startswith("re_po-")

    def test_traversal_segments_dropped(self, tmp_path):
        path = remote_to_cache_path("https://example.com/../../etc/passwd", tmp_path)
        assert tmp_path in path.parents

    def test_empty_remote(self, tmp_path):
        assert remote_to_cache_path("", tmp_path) == tmp_path / "unknown.git"

    def test_defaults_to_configured_cache_dir(self, isolated_home):
        path = remote_to_cache_path("https://github.com/user/repo.git")
        assert path.parent == isolated_home / "cache" / "github.com" / "user"


class TestEnsureDir:

    def test_creates_nested_dirs(self, tmp_path):
        target = tmp_path / "a" / "b"
        assert ensure_dir(target) == target
        assert target.is_dir()

    def test_existing_dir_ok(self, tmp_path):
        assert ensure_dir(str(tmp_path)) == Path(tmp_path)
