"""Tests for host state file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from host_model.models import KEY_NOT_FOUND, TextMetadata
from host_model.state import HostState, HostStateError, load_host_state

_TOML_STATE = """
[global_options]
"build_property.PodNetEnableAnalyzerConfigSnapshot" = "true"
"build_property.RootNamespace" = "Demo"

[file_options."/src/a.txt"]
kind = "a"

[[additional_texts]]
path = "/src/a.txt"

[additional_texts.text]
encoding = "utf-8"
length = 3

[parse_options]
preprocessor_symbol_names = ["DEBUG"]

[compilation]
assembly_name = "Demo"

[[compilation.external_references]]
display = "/ref/System.Runtime.dll"
aliases = ["global"]
"""


def test_load_json_state(tmp_path: Path) -> None:
    """Ensure JSON state files decode with null option values preserved."""
    path = tmp_path / "state.json"
    path.write_text(
        '{"global_options": {"b": "1", "a": null}, "additional_texts": [{"path": "x"}]}',
        encoding="utf-8",
    )
    state = load_host_state(path)
    assert list(state.global_options) == ["b", "a"]
    options = state.host_options()
    assert options.global_options.lookup("a") is None
    assert options.global_options.lookup("missing") is KEY_NOT_FOUND
    assert state.additional_texts[0].text is None


def test_load_toml_state(tmp_path: Path) -> None:
    """Ensure TOML state files decode into the same contracts."""
    path = tmp_path / "state.toml"
    path.write_text(_TOML_STATE, encoding="utf-8")
    state = load_host_state(path)
    assert state.additional_texts[0].text == TextMetadata(encoding="utf-8", length=3)
    assert state.host_options().options_for("/src/a.txt").get("kind") == "a"
    assert state.compilation.external_references[0].aliases == ("global",)
    assert state.parse_options.preprocessor_symbol_names == ("DEBUG",)


def test_empty_state_uses_defaults(tmp_path: Path) -> None:
    """Ensure omitted sections fall back to empty defaults."""
    path = tmp_path / "state.json"
    path.write_text("{}", encoding="utf-8")
    assert load_host_state(path) == HostState()


def test_missing_file(tmp_path: Path) -> None:
    """Ensure a missing file raises a host state error."""
    with pytest.raises(HostStateError, match="not found") as excinfo:
        load_host_state(tmp_path / "absent.json")
    assert excinfo.value.location.endswith("absent.json")


def test_malformed_file(tmp_path: Path) -> None:
    """Ensure malformed JSON raises a host state error."""
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(HostStateError, match="Malformed"):
        load_host_state(path)


def test_unknown_field_is_rejected(tmp_path: Path) -> None:
    """Ensure unknown keys fail validation with a structured payload."""
    path = tmp_path / "state.json"
    path.write_text('{"globals": {}}', encoding="utf-8")
    with pytest.raises(HostStateError, match="Invalid host state") as excinfo:
        load_host_state(path)
    assert excinfo.value.payload["type"] == "ValidationError"


def test_negative_length_is_rejected(tmp_path: Path) -> None:
    """Ensure text lengths must be non-negative."""
    path = tmp_path / "state.json"
    path.write_text(
        '{"additional_texts": [{"path": "x", "text": {"length": -1}}]}',
        encoding="utf-8",
    )
    with pytest.raises(HostStateError) as excinfo:
        load_host_state(path)
    assert "additional_texts" in excinfo.value.payload.get("path", "")
