"""Tests for snapshot artifact sinks."""

from __future__ import annotations

from pathlib import Path

import pytest

from incremental.sink import (
    ArtifactSink,
    DirectoryArtifactSink,
    DuplicateArtifactError,
    InMemoryArtifactSink,
    artifact_file_name,
    register_output,
)
from incremental.types import COMPILATION_HINT, PARSE_OPTIONS_HINT, PipelineResult


def test_artifact_file_name() -> None:
    """Ensure the suffix is appended once."""
    assert artifact_file_name("_ParseOptions") == "_ParseOptions.cs"
    assert artifact_file_name("_ParseOptions.cs") == "_ParseOptions.cs"
    assert artifact_file_name("_ParseOptions", ".txt") == "_ParseOptions.txt"


def test_register_output_skips_absent_results() -> None:
    """Ensure absent results register nothing."""
    sink = InMemoryArtifactSink()
    assert register_output(PipelineResult.absent("_X"), sink) is False
    assert register_output(PipelineResult.of("_Y", "text\n"), sink) is True
    assert sink.artifacts == {"_Y": "text\n"}


def test_in_memory_sink_rejects_duplicates() -> None:
    """Ensure a hint name can only be registered once per sink."""
    sink = InMemoryArtifactSink()
    assert isinstance(sink, ArtifactSink)
    sink.add_source("_X", "a")
    with pytest.raises(DuplicateArtifactError, match="_X"):
        sink.add_source("_X", "b")


def test_directory_sink_writes_exact_text(tmp_path: Path) -> None:
    """Ensure files are written byte-for-byte without newline translation."""
    out_dir = tmp_path / "out"
    sink = DirectoryArtifactSink(out_dir)
    sink.add_source(PARSE_OPTIONS_HINT, "// a\n// b\n")
    target = out_dir / "_ParseOptions.cs"
    assert target.read_bytes() == b"// a\n// b\n"
    assert sink.written == {PARSE_OPTIONS_HINT: target}
    with pytest.raises(DuplicateArtifactError):
        sink.add_source(PARSE_OPTIONS_HINT, "")


def test_directory_sink_removes_stale_artifacts(tmp_path: Path) -> None:
    """Ensure stale artifacts of known hints are removed and others are kept."""
    stale = tmp_path / "_Compilation.cs"
    stale.write_text("old", encoding="utf-8")
    unrelated = tmp_path / "notes.cs"
    unrelated.write_text("keep", encoding="utf-8")
    sink = DirectoryArtifactSink(tmp_path)
    sink.add_source(PARSE_OPTIONS_HINT, "new")
    removed = sink.remove_stale()
    assert removed == [tmp_path / f"{COMPILATION_HINT}.cs"]
    assert not stale.exists()
    assert unrelated.exists()
    assert (tmp_path / "_ParseOptions.cs").exists()
