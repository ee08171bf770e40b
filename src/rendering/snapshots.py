"""Snapshot text builders, one per host configuration source.

Every builder is pure: it reads its input, accumulates lines locally and only
returns once the whole text exists. Cancellation is checked between
independent units (files, references, list sections), so an aborted build
never yields partial text.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from host_model.models import (
    AdditionalTextUnit,
    CompilationMetadata,
    ConfigurationTable,
    HostOptions,
    MetadataReference,
    ParseSettings,
    SyntaxUnit,
    TextMetadata,
)
from incremental.cancellation import CancellationToken, check_cancelled
from rendering.values import NEWLINE, NULL_MARKER, format_table

HEADER_WIDTH = len("[PreprocessorSymbolNames]:")
UNIT_HEADER_WIDTH = len("[ChecksumAlgorithm]:")
UNIT_PREFIX = "//   | "
UNIT_TABLE_PREFIX = "//   |> "
ALIAS_PREFIX = "//     > "
EMBED_INTEROP_SUFFIX = "(EmbedInteropTypes)"
DIRECTIVE_TAG = "#r"
EXTERNAL_TAG = "ex"


def render_scalar(value: object) -> str:
    """Render a scalar header value.

    Returns
    -------
    str
        ``True``/``False`` for booleans, empty for ``None``, ``str()`` otherwise.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def header_line(name: str, value: object) -> str:
    """Return a top-level ``// [Name]: value`` line.

    Returns
    -------
    str
        Aligned header line.
    """
    return f"// {f'[{name}]:'.ljust(HEADER_WIDTH)} {render_scalar(value)}"


def _unit_header(name: str, value: object) -> str:
    return f"{UNIT_PREFIX}{f'[{name}]:'.ljust(UNIT_HEADER_WIDTH)} {render_scalar(value)}"


def _list_section(name: str, items: Iterable[str]) -> list[str]:
    return [f"// <{name}>:", *(f"{UNIT_PREFIX}{item}" for item in items)]


def _join_lines(lines: Sequence[str]) -> str:
    return "".join(f"{line}{NEWLINE}" for line in lines)


def _text_metadata_lines(text: TextMetadata | None) -> list[str]:
    lines = [f"{UNIT_PREFIX}GetText():"]
    if text is None:
        lines.append(f"{UNIT_PREFIX}{NULL_MARKER}")
        return lines
    lines.extend(
        (
            _unit_header("CanBeEmbedded", text.can_be_embedded),
            _unit_header("ChecksumAlgorithm", text.checksum_algorithm),
            _unit_header("Encoding", text.encoding),
            _unit_header("Length", text.length),
            _unit_header("Lines.Count", text.line_count),
        )
    )
    return lines


def _text_unit_block(
    path: str,
    text: TextMetadata | None,
    options: ConfigurationTable,
    *,
    has_compilation_unit_root: bool | None = None,
) -> list[str]:
    lines = [f"// [{path}]:"]
    if has_compilation_unit_root is not None:
        root = render_scalar(has_compilation_unit_root)
        lines.append(f"{UNIT_PREFIX}[HasCompilationUnitRoot]: {root}")
    lines.extend(_text_metadata_lines(text))
    table = format_table(options, UNIT_TABLE_PREFIX)
    if table:
        lines.append(table)
    lines.append("")
    return lines


def global_options_snapshot(
    options: HostOptions,
    cancellation: CancellationToken | None = None,
) -> str:
    """Render the global options table.

    Returns
    -------
    str
        One row per global option, or the empty string for an empty table.
    """
    check_cancelled(cancellation)
    table = format_table(options.global_options)
    return f"{table}{NEWLINE}" if table else ""


def additional_texts_snapshot(
    units: Sequence[AdditionalTextUnit],
    cancellation: CancellationToken | None = None,
) -> str:
    """Render one block per additional text, in input order.

    Returns
    -------
    str
        Concatenated blocks, each terminated by a blank line.
    """
    lines: list[str] = []
    for unit in units:
        check_cancelled(cancellation)
        lines.extend(_text_unit_block(unit.path, unit.text, unit.options))
    return _join_lines(lines)


def parse_options_snapshot(
    settings: ParseSettings,
    cancellation: CancellationToken | None = None,
) -> str:
    """Render parser settings, errors and feature flags.

    Returns
    -------
    str
        Parse settings snapshot text.
    """
    lines = [
        header_line("DocumentationMode", settings.documentation_mode),
        header_line("Kind", settings.kind),
        header_line("Language", settings.language),
        header_line("PreprocessorSymbolNames", ", ".join(settings.preprocessor_symbol_names)),
        header_line("SpecifiedKind", ", ".join(settings.specified_kind)),
    ]
    check_cancelled(cancellation)
    lines.extend(_list_section("Errors", settings.errors))
    check_cancelled(cancellation)
    features = (f"[{key}] = {value}" for key, value in settings.features.items())
    lines.extend(_list_section("Features", features))
    return _join_lines(lines)


def syntax_units_snapshot(
    units: Sequence[SyntaxUnit],
    cancellation: CancellationToken | None = None,
) -> str:
    """Render one block per syntax unit, in compilation order.

    Returns
    -------
    str
        Concatenated blocks, each terminated by a blank line.
    """
    lines: list[str] = []
    for unit in units:
        check_cancelled(cancellation)
        lines.extend(
            _text_unit_block(
                unit.path,
                unit.text,
                unit.options,
                has_compilation_unit_root=unit.has_compilation_unit_root,
            )
        )
    return _join_lines(lines)


def reference_lines(reference: MetadataReference, tag: str) -> list[str]:
    """Render a reference row followed by its alias rows.

    Returns
    -------
    list[str]
        Reference line and one line per alias, in the given alias order.
    """
    parts = [f"'{reference.display}'", tag, reference.kind]
    if reference.embed_interop_types:
        parts.append(EMBED_INTEROP_SUFFIX)
    lines = [f"{UNIT_PREFIX}{' '.join(parts)}"]
    lines.extend(f"{ALIAS_PREFIX}[Alias]: {alias}" for alias in reference.aliases)
    return lines


def compilation_snapshot(
    compilation: CompilationMetadata,
    cancellation: CancellationToken | None = None,
) -> str:
    """Render compilation metadata and its references.

    Directive references (``#r``) are listed before externally supplied ones
    (``ex``); neither group is reordered.

    Returns
    -------
    str
        Compilation snapshot text.
    """
    lines = [
        header_line("AssemblyName", compilation.assembly_name),
        header_line("IsCaseSensitive", compilation.is_case_sensitive),
        header_line("Language", compilation.language),
        *_list_section("ReferencedAssemblyNames", compilation.referenced_assembly_names),
        "",
        "// <References>:",
    ]
    tagged = [
        *((reference, DIRECTIVE_TAG) for reference in compilation.directive_references),
        *((reference, EXTERNAL_TAG) for reference in compilation.external_references),
    ]
    for reference, tag in tagged:
        check_cancelled(cancellation)
        lines.extend(reference_lines(reference, tag))
    return _join_lines(lines)


__all__ = [
    "DIRECTIVE_TAG",
    "EMBED_INTEROP_SUFFIX",
    "EXTERNAL_TAG",
    "additional_texts_snapshot",
    "compilation_snapshot",
    "global_options_snapshot",
    "header_line",
    "parse_options_snapshot",
    "reference_lines",
    "render_scalar",
    "syntax_units_snapshot",
]
