"""Main application setup for the config-snapshot CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.config_loader import SettingsError, resolve_settings
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import admin_group, session_group
from cli.result_action import cli_result_action
from host_model.state import HostStateError
from incremental.sink import DuplicateArtifactError

logger = logging.getLogger(__name__)

_HELP_EPILOGUE = """
Examples:
  config-snapshot show host.json                 Print every snapshot
  config-snapshot show host.json --hint _ParseOptions
  config-snapshot render host.toml -o ./out      Write snapshot artifacts
  config-snapshot config show                    Show effective settings

Environment Variables:
  CONFIG_SNAPSHOT_LOG_LEVEL   Default log level (DEBUG, INFO, WARNING, ERROR)
  CONFIG_SNAPSHOT_OUT_DIR     Default output directory
  CONFIG_SNAPSHOT_PROPERTY    Build property that enables snapshots
  CONFIG_SNAPSHOT_SUFFIX      Artifact file suffix
  CONFIG_SNAPSHOT_CLEAN       Remove artifacts not produced by a pass
"""

app = App(
    name="config-snapshot",
    help="Render deterministic text snapshots of build configuration state.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to a settings file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="CONFIG_SNAPSHOT_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for settings resolution and context injection.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    logging.basicConfig(level=session.log_level.upper())
    try:
        resolution = resolve_settings(session.config_file)
    except SettingsError as exc:
        logger.error("%s", exc)
        return ExitCode.CONFIG_ERROR

    run_context = RunContext(
        log_level=session.log_level,
        settings=resolution.settings,
        config_location=resolution.location,
    )
    command, bound, ignored = app.parse_args(tokens)
    if "run_context" in ignored:
        bound.arguments["run_context"] = run_context
    try:
        return command(*bound.args, **bound.kwargs)
    except (HostStateError, SettingsError, DuplicateArtifactError, OSError) as exc:
        logger.error("%s", exc)
        return ExitCode.from_exception(exc)


app.command("cli.commands.snapshot:render_command", name="render", alias="r")
app.command("cli.commands.snapshot:show_command", name="show", alias="s")

_config_app = App(name="config", help="Settings management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v", group=admin_group)


def main() -> None:
    """Run the config-snapshot CLI."""
    sys.exit(app.meta())


__all__ = ["app", "main"]
