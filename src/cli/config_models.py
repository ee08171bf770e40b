"""Typed configuration models for config-snapshot."""

from __future__ import annotations

from collections.abc import Mapping

from core.config_base import config_fingerprint
from incremental.gate import FEATURE_FLAG_PROPERTY
from incremental.sink import DEFAULT_ARTIFACT_SUFFIX
from serde_msgspec import StructBaseStrict

DEFAULT_OUT_DIR = "build/config-snapshot"


class SnapshotSettings(StructBaseStrict, frozen=True):
    """Effective settings for snapshot commands."""

    property_name: str = FEATURE_FLAG_PROPERTY
    out_dir: str = DEFAULT_OUT_DIR
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX
    clean: bool = False

    def fingerprint_payload(self) -> Mapping[str, object]:
        """Return canonical payload for settings fingerprinting.

        Returns
        -------
        Mapping[str, object]
            Payload used for settings fingerprinting.
        """
        return {
            "version": 1,
            "property_name": self.property_name,
            "out_dir": self.out_dir,
            "artifact_suffix": self.artifact_suffix,
            "clean": self.clean,
        }

    def fingerprint(self) -> str:
        """Return a stable fingerprint for the settings.

        Returns
        -------
        str
            Stable fingerprint for settings.
        """
        return config_fingerprint(self.fingerprint_payload())


class SettingsFileSpec(StructBaseStrict, frozen=True):
    """Settings as they may appear in a config file; unset keys keep defaults."""

    property_name: str | None = None
    out_dir: str | None = None
    artifact_suffix: str | None = None
    clean: bool | None = None


__all__ = ["DEFAULT_OUT_DIR", "SettingsFileSpec", "SnapshotSettings"]
