"""On-disk host state descriptions and their conversion to host data contracts."""

from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from core_types import PathLike
from host_model.models import (
    AdditionalText,
    CompilationMetadata,
    ConfigurationTable,
    HostOptions,
    ParseSettings,
)
from serde_msgspec import StructBaseStrict, loads_json, validation_error_payload

logger = logging.getLogger(__name__)


class HostStateError(ValueError):
    """Raised when a host state description cannot be loaded."""

    def __init__(
        self,
        message: str,
        *,
        location: str,
        payload: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.location = location
        self.payload = dict(payload or {})


class HostState(StructBaseStrict, frozen=True):
    """Complete description of what a host hands to the snapshot generator.

    Option tables are plain mappings here so that state files stay readable;
    ``host_options`` converts them into ``ConfigurationTable`` values.
    """

    global_options: dict[str, str | None] = msgspec.field(default_factory=dict)
    file_options: dict[str, dict[str, str | None]] = msgspec.field(default_factory=dict)
    additional_texts: tuple[AdditionalText, ...] = ()
    parse_options: ParseSettings = ParseSettings()
    compilation: CompilationMetadata = CompilationMetadata()

    def host_options(self) -> HostOptions:
        """Return the options provider value for this state.

        Returns
        -------
        HostOptions
            Global and per-path option tables.
        """
        return HostOptions(
            global_options=ConfigurationTable(values=dict(self.global_options)),
            file_options={
                path: ConfigurationTable(values=dict(values))
                for path, values in self.file_options.items()
            },
        )


def load_host_state(path: PathLike) -> HostState:
    """Load a host state description from a JSON or TOML file.

    Parameters
    ----------
    path
        Path to a ``.json`` or ``.toml`` file.

    Returns
    -------
    HostState
        Decoded host state.

    Raises
    ------
    HostStateError
        Raised when the file is missing, malformed, or fails validation.
    """
    location = str(path)
    resolved = Path(path)
    if not resolved.is_file():
        msg = f"Host state file not found: {location!r}."
        raise HostStateError(msg, location=location)
    raw = resolved.read_bytes()
    try:
        if resolved.suffix.lower() == ".toml":
            state = msgspec.toml.decode(raw, type=HostState, strict=True)
        else:
            state = loads_json(raw, target_type=HostState)
    except msgspec.ValidationError as exc:
        payload = validation_error_payload(exc)
        msg = f"Invalid host state in {location}: {payload.get('summary', exc)}"
        raise HostStateError(msg, location=location, payload=payload) from exc
    except (msgspec.DecodeError, UnicodeDecodeError) as exc:
        msg = f"Malformed host state file {location}: {exc}"
        raise HostStateError(msg, location=location) from exc
    logger.debug(
        "Loaded host state from %s (%d additional texts, %d syntax trees)",
        location,
        len(state.additional_texts),
        len(state.compilation.syntax_trees),
    )
    return state


__all__ = ["HostState", "HostStateError", "load_host_state"]
