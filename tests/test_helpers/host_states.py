"""Host state builders shared across tests."""

from __future__ import annotations

import msgspec

from host_model.models import (
    AdditionalText,
    CompilationMetadata,
    MetadataReference,
    ParseSettings,
    SyntaxTreeInfo,
    TextMetadata,
)
from host_model.state import HostState
from incremental.gate import FEATURE_FLAG_PROPERTY, build_property_key

FLAG_KEY = build_property_key(FEATURE_FLAG_PROPERTY)


def sample_state() -> HostState:
    """Return a populated host state without the feature flag.

    Returns
    -------
    HostState
        Sample state; file B is listed before file A on purpose.
    """
    return HostState(
        global_options={
            "build_property.RootNamespace": "Demo",
            "build_property.TargetFramework": "net8.0",
        },
        file_options={
            "/src/fileB.txt": {"kind": "b"},
            "/src/fileA.txt": {"kind": "a"},
            "/src/Program.cs": {"dotnet_diagnostic.CA1000.severity": "warning"},
        },
        additional_texts=(
            AdditionalText(
                path="/src/fileB.txt",
                text=TextMetadata(encoding="utf-8", length=4, line_count=1),
            ),
            AdditionalText(path="/src/fileA.txt"),
        ),
        parse_options=ParseSettings(
            preprocessor_symbol_names=("DEBUG",),
            features={"InterceptorsNamespaces": "Demo"},
        ),
        compilation=CompilationMetadata(
            assembly_name="Demo",
            referenced_assembly_names=("System.Runtime",),
            directive_references=(
                MetadataReference(display="lib/Extra.dll", aliases=("zeta", "alpha")),
            ),
            external_references=(
                MetadataReference(display="/ref/Interop.dll", embed_interop_types=True),
                MetadataReference(display="/ref/Native.netmodule", kind="Module"),
            ),
            syntax_trees=(
                SyntaxTreeInfo(path="/src/Program.cs", text=TextMetadata(length=10)),
            ),
        ),
    )


def with_flag(state: HostState, value: str | None) -> HostState:
    """Return ``state`` with the feature flag property set to ``value``.

    Returns
    -------
    HostState
        Updated state.
    """
    global_options = dict(state.global_options)
    global_options[FLAG_KEY] = value
    return msgspec.structs.replace(state, global_options=global_options)


def enabled_state() -> HostState:
    """Return the sample state with the feature flag set to ``true``.

    Returns
    -------
    HostState
        Enabled sample state.
    """
    return with_flag(sample_state(), "true")
