"""Cyclopts result action mapping command return values to exit codes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from cyclopts import App

logger = logging.getLogger(__name__)


def cli_result_action(app: App, cmd: object, result: object) -> int:
    """Return the process exit code for a command's return value.

    ``None`` counts as success and integers pass through; anything else is a
    programming error in the command and exits with ``GENERAL_ERROR``.

    Returns
    -------
    int
        Exit code for the process.
    """
    del app
    if result is None:
        return ExitCode.SUCCESS
    if isinstance(result, int):
        return int(result)
    logger.error("Command %r returned %s instead of an exit code", cmd, type(result).__name__)
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
