"""Library version and build information."""

from __future__ import annotations

import platform
from dataclasses import dataclass

VERSION = "0.1.0"

# Replaced by the release process; "unknown" when not set.
_GIT_COMMIT = "unknown"
_BUILD_TIME = "unknown"
_PYTHON_VERSION = "unknown"


@dataclass(frozen=True)
class VersionInfo:
    """Version of the library together with build details."""

    version: str
    git_commit: str
    build_time: str
    python_version: str


def get_version() -> str:
    """Return the semantic version string."""
    return VERSION


def get_version_info() -> VersionInfo:
    """Return version and build details; the interpreter version is taken
    from the running Python when not recorded at build time."""
    python_version = _PYTHON_VERSION
    if python_version == "unknown":
        python_version = platform.python_version()
    return VersionInfo(
        version=VERSION,
        git_commit=_GIT_COMMIT,
        build_time=_BUILD_TIME,
        python_version=python_version,
    )