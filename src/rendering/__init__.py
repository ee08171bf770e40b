"""Text rendering for configuration snapshots."""

from rendering.snapshots import (
    additional_texts_snapshot,
    compilation_snapshot,
    global_options_snapshot,
    parse_options_snapshot,
    syntax_units_snapshot,
)
from rendering.values import format_option, format_table, format_value

__all__ = [
    "additional_texts_snapshot",
    "compilation_snapshot",
    "format_option",
    "format_table",
    "format_value",
    "global_options_snapshot",
    "parse_options_snapshot",
    "syntax_units_snapshot",
]
