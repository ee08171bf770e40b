"""Shared help-panel groups for the config-snapshot CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

output_group = Group(
    "Output",
    help="Configure where snapshot artifacts are written.",
    sort_key=1,
)

gate_group = Group(
    "Feature Gate",
    help="Control the build property that enables snapshots.",
    sort_key=2,
)

admin_group = Group(
    "Admin",
    help="Administrative commands and help.",
    sort_key=99,
)

__all__ = [
    "admin_group",
    "gate_group",
    "output_group",
    "session_group",
]
