"""Read-only host data contracts consumed by the snapshot formatters.

Every shape here is an immutable msgspec struct. Structural equality is what the
incremental providers fingerprint, so field order and mapping insertion order
are part of a value's identity.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

import msgspec

from core_types import NonNegativeInt
from serde_msgspec import StructBaseStrict

type LookupResult = str | None | msgspec.UnsetType

KEY_NOT_FOUND = msgspec.UNSET

type ReferenceKind = Literal["Assembly", "Module"]


class ConfigurationTable(StructBaseStrict, frozen=True):
    """Ordered mapping of option keys to optional string values.

    Keys iterate in the order the host supplied them. A key mapped to ``None``
    is present with a null value, which is distinct from an absent key.
    """

    values: dict[str, str | None] = msgspec.field(default_factory=dict)

    def keys(self) -> Iterator[str]:
        """Yield keys in host order.

        Yields
        ------
        str
            Option key.
        """
        yield from self.values

    def lookup(self, key: str) -> LookupResult:
        """Return the stored value, or ``KEY_NOT_FOUND`` when the key is absent.

        Returns
        -------
        LookupResult
            Stored value or the not-found sentinel.
        """
        return self.values.get(key, KEY_NOT_FOUND)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the stored value, or ``default`` when the key is absent.

        Returns
        -------
        str | None
            Stored value or default.
        """
        return self.values.get(key, default)

    def __len__(self) -> int:
        return len(self.values)


EMPTY_TABLE = ConfigurationTable()


class HostOptions(StructBaseStrict, frozen=True):
    """Global options plus per-path options, as exposed by the host."""

    global_options: ConfigurationTable = EMPTY_TABLE
    file_options: dict[str, ConfigurationTable] = msgspec.field(default_factory=dict)

    def options_for(self, path: str) -> ConfigurationTable:
        """Return the options table scoped to ``path``.

        Returns
        -------
        ConfigurationTable
            Options for the path, or an empty table when the host has none.
        """
        return self.file_options.get(path, EMPTY_TABLE)


class TextMetadata(StructBaseStrict, frozen=True):
    """Metadata describing the text content of a file."""

    can_be_embedded: bool = True
    checksum_algorithm: str = "Sha1"
    encoding: str | None = None
    length: NonNegativeInt = 0
    line_count: NonNegativeInt = 1


class AdditionalText(StructBaseStrict, frozen=True):
    """Non-source file handed to the build as an additional input."""

    path: str
    text: TextMetadata | None = None


class AdditionalTextUnit(StructBaseStrict, frozen=True):
    """Additional text paired with the options scoped to its path."""

    path: str
    text: TextMetadata | None = None
    options: ConfigurationTable = EMPTY_TABLE


class ParseSettings(StructBaseStrict, frozen=True):
    """Parser configuration for the build's source files."""

    documentation_mode: str = "Parse"
    kind: str = "Regular"
    language: str = "C#"
    preprocessor_symbol_names: tuple[str, ...] = ()
    specified_kind: tuple[str, ...] = ("Regular",)
    errors: tuple[str, ...] = ()
    features: dict[str, str] = msgspec.field(default_factory=dict)


class SyntaxTreeInfo(StructBaseStrict, frozen=True):
    """Source file known to the compilation."""

    path: str
    text: TextMetadata | None = None
    has_compilation_unit_root: bool = True


class SyntaxUnit(StructBaseStrict, frozen=True):
    """Source file paired with the options scoped to its path."""

    path: str
    text: TextMetadata | None = None
    has_compilation_unit_root: bool = True
    options: ConfigurationTable = EMPTY_TABLE


class MetadataReference(StructBaseStrict, frozen=True):
    """Reference passed to the compilation."""

    display: str
    kind: ReferenceKind = "Assembly"
    embed_interop_types: bool = False
    aliases: tuple[str, ...] = ()


class CompilationMetadata(StructBaseStrict, frozen=True):
    """Compilation-level metadata and references."""

    assembly_name: str | None = None
    is_case_sensitive: bool = True
    language: str = "C#"
    referenced_assembly_names: tuple[str, ...] = ()
    directive_references: tuple[MetadataReference, ...] = ()
    external_references: tuple[MetadataReference, ...] = ()
    syntax_trees: tuple[SyntaxTreeInfo, ...] = ()


__all__ = [
    "EMPTY_TABLE",
    "KEY_NOT_FOUND",
    "AdditionalText",
    "AdditionalTextUnit",
    "CompilationMetadata",
    "ConfigurationTable",
    "HostOptions",
    "LookupResult",
    "MetadataReference",
    "ParseSettings",
    "ReferenceKind",
    "SyntaxTreeInfo",
    "SyntaxUnit",
    "TextMetadata",
]
