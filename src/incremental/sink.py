"""Artifact sinks receiving registered snapshot text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from incremental.types import HINT_NAMES, PipelineResult

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACT_SUFFIX = ".cs"


class DuplicateArtifactError(ValueError):
    """Raised when a hint name is registered twice in one pass."""


@runtime_checkable
class ArtifactSink(Protocol):
    """Destination for generated snapshot text; one instance per pass."""

    def add_source(self, hint_name: str, text: str) -> None:
        """Register ``text`` under ``hint_name``."""
        ...


def artifact_file_name(hint_name: str, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> str:
    """Return the file name an artifact is stored under.

    Returns
    -------
    str
        ``hint_name`` with ``suffix`` appended unless already present.
    """
    if suffix and hint_name.endswith(suffix):
        return hint_name
    return f"{hint_name}{suffix}"


def register_output(result: PipelineResult, sink: ArtifactSink) -> bool:
    """Register a present result with ``sink``; absent results register nothing.

    Returns
    -------
    bool
        Whether an artifact was registered.
    """
    if result.snapshot is None:
        return False
    sink.add_source(result.hint_name, result.snapshot.text)
    return True


class InMemoryArtifactSink:
    """Sink collecting artifacts in registration order."""

    def __init__(self) -> None:
        self.artifacts: dict[str, str] = {}

    def add_source(self, hint_name: str, text: str) -> None:
        """Store ``text`` under ``hint_name``.

        Raises
        ------
        DuplicateArtifactError
            Raised when ``hint_name`` was already registered.
        """
        if hint_name in self.artifacts:
            msg = f"Artifact {hint_name!r} already registered in this pass."
            raise DuplicateArtifactError(msg)
        self.artifacts[hint_name] = text


class DirectoryArtifactSink:
    """Sink writing each artifact to ``<out_dir>/<hint_name><suffix>``.

    Text is written as UTF-8 without newline translation so files compare
    byte-for-byte with the rendered snapshots.
    """

    def __init__(self, out_dir: Path, *, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> None:
        self.out_dir = out_dir
        self.suffix = suffix
        self.written: dict[str, Path] = {}

    def add_source(self, hint_name: str, text: str) -> None:
        """Write ``text`` to the artifact file for ``hint_name``.

        Raises
        ------
        DuplicateArtifactError
            Raised when ``hint_name`` was already written by this sink.
        """
        if hint_name in self.written:
            msg = f"Artifact {hint_name!r} already registered in this pass."
            raise DuplicateArtifactError(msg)
        self.out_dir.mkdir(parents=True, exist_ok=True)
        target = self.out_dir / artifact_file_name(hint_name, self.suffix)
        target.write_text(text, encoding="utf-8", newline="")
        self.written[hint_name] = target
        logger.debug("Wrote %s (%d chars)", target, len(text))

    def remove_stale(self, hint_names: tuple[str, ...] = HINT_NAMES) -> list[Path]:
        """Delete artifact files for known hints that were not written.

        Returns
        -------
        list[Path]
            Removed files.
        """
        removed: list[Path] = []
        for hint_name in hint_names:
            if hint_name in self.written:
                continue
            target = self.out_dir / artifact_file_name(hint_name, self.suffix)
            if target.is_file():
                target.unlink()
                removed.append(target)
        if removed:
            logger.info("Removed %d stale snapshot artifact(s) from %s", len(removed), self.out_dir)
        return removed


__all__ = [
    "DEFAULT_ARTIFACT_SUFFIX",
    "ArtifactSink",
    "DirectoryArtifactSink",
    "DuplicateArtifactError",
    "InMemoryArtifactSink",
    "artifact_file_name",
    "register_output",
]
