"""Configuration management commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import msgspec
from cyclopts import Parameter

from cli.config_loader import CONFIG_FILENAME, resolve_settings
from cli.context import RunContext
from cli.groups import admin_group
from serde_msgspec import dumps_json

_TEMPLATE = """# config-snapshot.toml

# Build property read from the host's global options as
# build_property.<property_name>; snapshots are produced only when it is "true".
property_name = "PodNetEnableAnalyzerConfigSnapshot"

# Directory receiving the rendered snapshot artifacts.
out_dir = "build/config-snapshot"

# Suffix appended to each hint name to form the artifact file name.
artifact_suffix = ".cs"

# Remove artifacts for snapshots that a pass did not produce.
clean = false
"""


def show_config(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective settings payload.

    Returns
    -------
    int
        Exit status code.
    """
    if run_context is None:
        resolution = resolve_settings(None)
        settings, location = resolution.settings, resolution.location
    else:
        settings, location = run_context.settings, run_context.config_location
    payload = {
        "settings": msgspec.structs.asdict(settings),
        "fingerprint": settings.fingerprint(),
        "source": location,
    }
    sys.stdout.write(dumps_json(payload, pretty=True).decode("utf-8") + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
            group=admin_group,
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Returns
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        Raised when the target path exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
