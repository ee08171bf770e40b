"""Value and key/value table rendering."""

from __future__ import annotations

import msgspec

from host_model.models import ConfigurationTable, LookupResult

NEWLINE = "\n"
TABLE_PREFIX = "// "

KEY_NOT_FOUND_MARKER = "<- key not found ->"
NULL_MARKER = "<- null ->"
EMPTY_MARKER = "<- empty ->"
WHITESPACE_MARKER = "<- whitespace ->"


def format_value(value: LookupResult) -> str:
    """Render one option lookup result.

    The checks run in a fixed order: absence, null, empty, whitespace-only,
    then the quoted value verbatim (no escaping).

    Parameters
    ----------
    value
        Stored value, or ``KEY_NOT_FOUND`` for a missing key.

    Returns
    -------
    str
        Canonical marker or quoted value.
    """
    if value is msgspec.UNSET:
        return KEY_NOT_FOUND_MARKER
    if value is None:
        return NULL_MARKER
    if not value:
        return EMPTY_MARKER
    if value.isspace():
        return WHITESPACE_MARKER
    return f'"{value}"'


def format_option(table: ConfigurationTable, key: str) -> str:
    """Render the value stored under ``key`` in ``table``.

    Returns
    -------
    str
        Rendered value.
    """
    return format_value(table.lookup(key))


def format_table(
    table: ConfigurationTable,
    prefix: str = TABLE_PREFIX,
    separator: str = NEWLINE,
) -> str:
    """Render every entry of ``table`` as an aligned ``[key] = value`` row.

    Column width is the longest ``[key]`` in this table plus two. An empty
    table renders as the empty string.

    Parameters
    ----------
    table
        Options to render, in host order.
    prefix
        Text placed before each row.
    separator
        Text joining rows; no trailing separator is emitted.

    Returns
    -------
    str
        Joined rows.
    """
    labels = [(key, f"[{key}]") for key in table.keys()]
    if not labels:
        return ""
    width = max(len(label) for _, label in labels) + 2
    return separator.join(
        f"{prefix}{label.ljust(width)}= {format_option(table, key)}" for key, label in labels
    )


__all__ = [
    "EMPTY_MARKER",
    "KEY_NOT_FOUND_MARKER",
    "NEWLINE",
    "NULL_MARKER",
    "TABLE_PREFIX",
    "WHITESPACE_MARKER",
    "format_option",
    "format_table",
    "format_value",
]
