"""Incremental configuration snapshot pipeline."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from incremental.cancellation import CancellationToken, OperationCancelledError
    from incremental.gate import FEATURE_FLAG_PROPERTY, feature_gate, read_feature_flag
    from incremental.generator import ConfigSnapshotGenerator, GeneratorContext
    from incremental.host import PassReport, SnapshotHost
    from incremental.providers import InputProvider, ValueProvider
    from incremental.sink import (
        DirectoryArtifactSink,
        DuplicateArtifactError,
        InMemoryArtifactSink,
        register_output,
    )
    from incremental.stage import PipelineStage
    from incremental.types import HINT_NAMES, PipelineResult, Snapshot

__all__ = [
    "FEATURE_FLAG_PROPERTY",
    "HINT_NAMES",
    "CancellationToken",
    "ConfigSnapshotGenerator",
    "DirectoryArtifactSink",
    "DuplicateArtifactError",
    "GeneratorContext",
    "InMemoryArtifactSink",
    "InputProvider",
    "OperationCancelledError",
    "PassReport",
    "PipelineResult",
    "PipelineStage",
    "Snapshot",
    "SnapshotHost",
    "ValueProvider",
    "feature_gate",
    "read_feature_flag",
    "register_output",
]

_LAZY_IMPORTS: dict[str, str] = {
    "CancellationToken": "incremental.cancellation",
    "OperationCancelledError": "incremental.cancellation",
    "FEATURE_FLAG_PROPERTY": "incremental.gate",
    "feature_gate": "incremental.gate",
    "read_feature_flag": "incremental.gate",
    "ConfigSnapshotGenerator": "incremental.generator",
    "GeneratorContext": "incremental.generator",
    "PassReport": "incremental.host",
    "SnapshotHost": "incremental.host",
    "InputProvider": "incremental.providers",
    "ValueProvider": "incremental.providers",
    "DirectoryArtifactSink": "incremental.sink",
    "DuplicateArtifactError": "incremental.sink",
    "InMemoryArtifactSink": "incremental.sink",
    "register_output": "incremental.sink",
    "PipelineStage": "incremental.stage",
    "HINT_NAMES": "incremental.types",
    "PipelineResult": "incremental.types",
    "Snapshot": "incremental.types",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_IMPORTS.get(name)
    if module_path is None:
        msg = f"module 'incremental' has no attribute {name!r}"
        raise AttributeError(msg)
    module = import_module(module_path)
    value = getattr(module, name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
