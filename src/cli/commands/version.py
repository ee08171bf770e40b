"""Version command for the config-snapshot CLI."""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from incremental.gate import FEATURE_FLAG_PROPERTY
from incremental.types import HINT_NAMES
from serde_msgspec import dumps_json

DISTRIBUTION_NAME = "config-snapshot"
DEV_VERSION = "0.0.0-dev"


def _installed_version(distribution: str) -> str | None:
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def get_version() -> str:
    """Return the installed package version.

    Returns:
    -------
    str
        Distribution version, or ``0.0.0-dev`` when running from a checkout.
    """
    return _installed_version(DISTRIBUTION_NAME) or DEV_VERSION


def version_command() -> int:
    """Print package, runtime and snapshot format information as JSON.

    Returns:
    -------
    int
        Exit status code.
    """
    payload = {
        "version": get_version(),
        "python": platform.python_version(),
        "platform": platform.platform(),
        "feature_flag": FEATURE_FLAG_PROPERTY,
        "snapshots": list(HINT_NAMES),
        "dependencies": {name: _installed_version(name) for name in ("cyclopts", "msgspec")},
    }
    sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")
    return 0


__all__ = ["get_version", "version_command"]
