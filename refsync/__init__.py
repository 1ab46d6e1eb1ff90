"""refsync - sync working directories to git refs through a shared object cache."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("refsync")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for editable installs / dev
