"""Host-supplied configuration shapes."""

from host_model.models import (
    EMPTY_TABLE,
    KEY_NOT_FOUND,
    AdditionalText,
    AdditionalTextUnit,
    CompilationMetadata,
    ConfigurationTable,
    HostOptions,
    LookupResult,
    MetadataReference,
    ParseSettings,
    SyntaxTreeInfo,
    SyntaxUnit,
    TextMetadata,
)
from host_model.state import HostState, HostStateError, load_host_state

__all__ = [
    "EMPTY_TABLE",
    "KEY_NOT_FOUND",
    "AdditionalText",
    "AdditionalTextUnit",
    "CompilationMetadata",
    "ConfigurationTable",
    "HostOptions",
    "HostState",
    "HostStateError",
    "LookupResult",
    "MetadataReference",
    "ParseSettings",
    "SyntaxTreeInfo",
    "SyntaxUnit",
    "TextMetadata",
    "load_host_state",
]
