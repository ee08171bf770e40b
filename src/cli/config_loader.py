"""Settings loading and layering for the CLI.

Precedence, lowest first: defaults, ``config-snapshot.toml`` (or
``[tool.config-snapshot]`` in ``pyproject.toml``) found by walking up from the
working directory or named explicitly, environment variables, then explicit
command-line overrides.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import msgspec

from cli.config_models import SettingsFileSpec, SnapshotSettings
from core_types import JsonValue
from serde_msgspec import convert, validation_error_payload
from utils.env_utils import env_bool, env_text

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config-snapshot.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_KEY = "config-snapshot"

ENV_OUT_DIR = "CONFIG_SNAPSHOT_OUT_DIR"
ENV_PROPERTY = "CONFIG_SNAPSHOT_PROPERTY"
ENV_SUFFIX = "CONFIG_SNAPSHOT_SUFFIX"
ENV_CLEAN = "CONFIG_SNAPSHOT_CLEAN"


class SettingsError(ValueError):
    """Raised when a settings file is missing, malformed, or invalid."""


@dataclass(frozen=True)
class SettingsResolution:
    """Effective settings plus where the file layer came from."""

    settings: SnapshotSettings
    location: str | None = None


def resolve_settings(
    config_file: str | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
) -> SettingsResolution:
    """Resolve effective settings from files, environment and overrides.

    Parameters
    ----------
    config_file
        Optional explicit settings file (TOML); disables the parent search.
    overrides
        Explicit values; ``None`` entries are ignored.

    Returns
    -------
    SettingsResolution
        Effective settings and the file location used, if any.

    Raises
    ------
    SettingsError
        Raised when the settings file is missing, malformed, or invalid.
    """
    payload: dict[str, object] = {}
    file_spec, location = _load_file_layer(config_file)
    if file_spec is not None:
        payload.update(_non_null(msgspec.structs.asdict(file_spec)))
    payload.update(_non_null(_env_layer()))
    payload.update(_non_null(dict(overrides or {})))
    try:
        settings = convert(payload, target_type=SnapshotSettings)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Settings validation failed: {details}"
        raise SettingsError(msg) from exc
    logger.debug("Resolved settings %s (file: %s)", settings.fingerprint()[:12], location)
    return SettingsResolution(settings=settings, location=location)


def load_settings(
    config_file: str | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
) -> SnapshotSettings:
    """Return effective settings.

    Returns
    -------
    SnapshotSettings
        Effective settings.
    """
    return resolve_settings(config_file, overrides=overrides).settings


def _non_null(values: Mapping[str, object]) -> dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


def _env_layer() -> dict[str, object]:
    return {
        "out_dir": env_text(ENV_OUT_DIR),
        "property_name": env_text(ENV_PROPERTY),
        "artifact_suffix": env_text(ENV_SUFFIX, allow_empty=True, strip=False),
        "clean": env_bool(ENV_CLEAN),
    }


def _load_file_layer(config_file: str | None) -> tuple[SettingsFileSpec | None, str | None]:
    if config_file:
        path = Path(config_file)
        if not path.is_file():
            msg = f"Config file not found: {config_file!r}."
            raise SettingsError(msg)
        raw, location = _resolve_explicit_payload(path)
        return _decode_settings(raw, location=location), location

    config_path = _find_in_parents(CONFIG_FILENAME)
    if config_path is not None:
        raw = _read_toml(config_path)
        return _decode_settings(raw, location=str(config_path)), str(config_path)

    pyproject_path = _find_in_parents(PYPROJECT_FILENAME)
    if pyproject_path is not None:
        nested = _extract_tool_config(_read_toml(pyproject_path))
        if nested is not None:
            location = f"{pyproject_path}:tool.{TOOL_KEY}"
            return _decode_settings(nested, location=location), location
    return None, None


def _find_in_parents(filename: str) -> Path | None:
    """Walk parents from cwd to find a filename.

    Returns:
    -------
    Path | None
        Path to the first matching file in the current directory or parents.
    """
    path = Path.cwd()
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _read_toml(path: Path) -> dict[str, JsonValue]:
    try:
        payload = msgspec.toml.decode(path.read_bytes(), type=object, strict=True)
    except msgspec.DecodeError as exc:
        msg = f"Malformed TOML in {path}: {exc}"
        raise SettingsError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Expected TOML mapping in {path}, got {type(payload).__name__}."
        raise SettingsError(msg)
    return cast("dict[str, JsonValue]", payload)


def _resolve_explicit_payload(path: Path) -> tuple[Mapping[str, JsonValue], str]:
    raw = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        nested = _extract_tool_config(raw)
        if nested is None:
            msg = f"Config validation failed for {path}: missing [tool.{TOOL_KEY}] section."
            raise SettingsError(msg)
        return nested, f"{path}:tool.{TOOL_KEY}"
    return raw, str(path)


def _extract_tool_config(raw: Mapping[str, JsonValue]) -> dict[str, JsonValue] | None:
    tool_section = raw.get("tool")
    if not isinstance(tool_section, dict):
        return None
    nested = tool_section.get(TOOL_KEY)
    if not isinstance(nested, dict):
        return None
    return cast("dict[str, JsonValue]", nested)


def _decode_settings(raw: Mapping[str, JsonValue], *, location: str) -> SettingsFileSpec:
    try:
        return convert(raw, target_type=SettingsFileSpec)
    except msgspec.ValidationError as exc:
        details = validation_error_payload(exc)
        msg = f"Config validation failed for {location}: {details}"
        raise SettingsError(msg) from exc


__all__ = [
    "CONFIG_FILENAME",
    "ENV_CLEAN",
    "ENV_OUT_DIR",
    "ENV_PROPERTY",
    "ENV_SUFFIX",
    "SettingsError",
    "SettingsResolution",
    "load_settings",
    "resolve_settings",
]
