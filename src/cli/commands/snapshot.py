"""Snapshot rendering commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Literal

import msgspec
from cyclopts import Parameter

from cli.config_loader import load_settings
from cli.context import RunContext
from cli.groups import gate_group, output_group
from host_model.state import HostState, load_host_state
from incremental.gate import build_property_key
from incremental.generator import ConfigSnapshotGenerator
from incremental.host import PassReport, SnapshotHost
from incremental.sink import ArtifactSink, DirectoryArtifactSink, InMemoryArtifactSink
from serde_msgspec import dumps_json

logger = logging.getLogger(__name__)

HintName = Literal[
    "_AnalyzerConfigOptions.GlobalOptions",
    "_AdditionalTexts",
    "_ParseOptions",
    "_SyntaxTrees",
    "_Compilation",
]


def enable_feature(state: HostState, property_name: str) -> HostState:
    """Return ``state`` with the feature flag build property set to ``true``.

    Returns
    -------
    HostState
        Updated host state.
    """
    global_options = dict(state.global_options)
    global_options[build_property_key(property_name)] = "true"
    return msgspec.structs.replace(state, global_options=global_options)


def run_snapshot_pass(
    state_path: Path,
    sink: ArtifactSink,
    *,
    property_name: str,
    enable: bool = False,
) -> PassReport:
    """Load a host state file and run one snapshot pass into ``sink``.

    Returns
    -------
    PassReport
        Pass outcome.
    """
    state = load_host_state(state_path)
    if enable:
        state = enable_feature(state, property_name)
    host = SnapshotHost(ConfigSnapshotGenerator(property_name))
    host.apply(state)
    report = host.run_pass(sink)
    if not report.registered:
        logger.warning(
            "No snapshots produced; set %s=true to enable them.",
            build_property_key(property_name),
        )
    return report


def render_command(
    state: Path,
    *,
    out_dir: Annotated[
        Path | None,
        Parameter(
            name=["--out-dir", "-o"],
            help="Directory receiving snapshot artifacts.",
            group=output_group,
        ),
    ] = None,
    clean: Annotated[
        bool | None,
        Parameter(
            name="--clean",
            help="Remove artifacts for snapshots not produced by this pass.",
            group=output_group,
        ),
    ] = None,
    property_name: Annotated[
        str | None,
        Parameter(
            name="--property",
            help="Build property that enables snapshots.",
            group=gate_group,
        ),
    ] = None,
    enable: Annotated[
        bool,
        Parameter(
            name="--enable",
            help="Force the feature flag on for this run.",
            group=gate_group,
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Render snapshots for a host state file into a directory.

    Parameters
    ----------
    state
        Host state description (``.json`` or ``.toml``).

    Returns
    -------
    int
        Exit status code.
    """
    overrides = {
        "out_dir": str(out_dir) if out_dir is not None else None,
        "clean": clean,
        "property_name": property_name,
    }
    settings = msgspec.structs.replace(
        run_context.settings if run_context is not None else load_settings(),
        **{key: value for key, value in overrides.items() if value is not None},
    )
    sink = DirectoryArtifactSink(Path(settings.out_dir), suffix=settings.artifact_suffix)
    report = run_snapshot_pass(
        state,
        sink,
        property_name=settings.property_name,
        enable=enable,
    )
    removed = sink.remove_stale() if settings.clean else []
    summary = {
        "out_dir": settings.out_dir,
        "registered": list(report.registered),
        "skipped": list(report.skipped),
        "files": {hint: str(path) for hint, path in sink.written.items()},
        "removed": [str(path) for path in removed],
    }
    sys.stdout.write(dumps_json(summary, pretty=True).decode("utf-8") + "\n")
    return 0


def show_command(
    state: Path,
    *,
    hint: Annotated[
        HintName | None,
        Parameter(name="--hint", help="Print only this snapshot."),
    ] = None,
    property_name: Annotated[
        str | None,
        Parameter(
            name="--property",
            help="Build property that enables snapshots.",
            group=gate_group,
        ),
    ] = None,
    enable: Annotated[
        bool,
        Parameter(
            name="--enable",
            help="Force the feature flag on for this run.",
            group=gate_group,
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Print snapshots for a host state file to stdout.

    Parameters
    ----------
    state
        Host state description (``.json`` or ``.toml``).

    Returns
    -------
    int
        Exit status code.
    """
    settings = run_context.settings if run_context is not None else load_settings()
    sink = InMemoryArtifactSink()
    run_snapshot_pass(
        state,
        sink,
        property_name=property_name or settings.property_name,
        enable=enable,
    )
    if hint is not None:
        sys.stdout.write(sink.artifacts.get(hint, ""))
        return 0
    for name, text in sink.artifacts.items():
        sys.stdout.write(f"==> {name} <==\n{text}")
    return 0


__all__ = ["enable_feature", "render_command", "run_snapshot_pass", "show_command"]
