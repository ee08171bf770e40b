"""Process exit codes for the config-snapshot CLI."""

from __future__ import annotations

from enum import IntEnum

from cli.config_loader import SettingsError
from host_model.state import HostStateError
from incremental.cancellation import OperationCancelledError
from incremental.sink import DuplicateArtifactError


class ExitCode(IntEnum):
    """Exit codes reported by CLI commands.

    1-9 cover invocation and input problems; 13 marks a failed snapshot pass.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    EXECUTION_ERROR = 13

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Classify an exception raised while running a command.

        Returns
        -------
        ExitCode
            Matching exit code; ``GENERAL_ERROR`` when nothing matches.
        """
        for error_types, code in _CLASSIFICATION:
            if isinstance(exc, error_types):
                return code
        return cls.GENERAL_ERROR


type _ErrorTypes = type[BaseException] | tuple[type[BaseException], ...]

# First match wins, so domain errors precede their builtin bases.
_CLASSIFICATION: tuple[tuple[_ErrorTypes, ExitCode], ...] = (
    (SettingsError, ExitCode.CONFIG_ERROR),
    ((DuplicateArtifactError, OperationCancelledError), ExitCode.EXECUTION_ERROR),
    ((HostStateError, ValueError, TypeError), ExitCode.VALIDATION_ERROR),
    ((FileNotFoundError, PermissionError), ExitCode.CONFIG_ERROR),
    (OSError, ExitCode.EXECUTION_ERROR),
)


__all__ = ["ExitCode"]
