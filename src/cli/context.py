"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass

from cli.config_models import SnapshotSettings


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    settings
        Effective settings resolved from config files and environment.
    config_location
        Location the settings file was read from, when one was found.
    """

    log_level: str
    settings: SnapshotSettings
    config_location: str | None = None


__all__ = ["RunContext"]
