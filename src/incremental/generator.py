"""Configuration snapshot generator wiring.

Five independent stages share one feature gate. Each stage pairs the gate
with one host source, renders it with its snapshot builder and registers the
text under a fixed hint name.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from host_model.models import (
    AdditionalText,
    AdditionalTextUnit,
    CompilationMetadata,
    HostOptions,
    ParseSettings,
    SyntaxTreeInfo,
    SyntaxUnit,
)
from incremental.cancellation import CancellationToken, check_cancelled
from incremental.gate import FEATURE_FLAG_PROPERTY, feature_gate
from incremental.providers import ValueProvider
from incremental.sink import ArtifactSink, register_output
from incremental.stage import PipelineStage, SnapshotFormatter
from incremental.types import (
    ADDITIONAL_TEXTS_HINT,
    COMPILATION_HINT,
    GLOBAL_OPTIONS_HINT,
    PARSE_OPTIONS_HINT,
    SYNTAX_TREES_HINT,
    PipelineResult,
)
from rendering.snapshots import (
    additional_texts_snapshot,
    compilation_snapshot,
    global_options_snapshot,
    parse_options_snapshot,
    syntax_units_snapshot,
)

logger = logging.getLogger(__name__)


class GeneratorContext:
    """Host providers plus the stages registered against them."""

    def __init__(
        self,
        *,
        options: ValueProvider[HostOptions],
        additional_texts: ValueProvider[tuple[AdditionalText, ...]],
        parse_options: ValueProvider[ParseSettings],
        compilation: ValueProvider[CompilationMetadata],
    ) -> None:
        self.options = options
        self.additional_texts = additional_texts
        self.parse_options = parse_options
        self.compilation = compilation
        self.stages: list[PipelineStage[Any]] = []

    def register_source_output[T](self, stage: PipelineStage[T]) -> None:
        """Register a stage whose results feed the artifact sink.

        Raises
        ------
        ValueError
            Raised when a stage with the same hint name is already registered.
        """
        if any(existing.hint_name == stage.hint_name for existing in self.stages):
            msg = f"Hint name {stage.hint_name!r} is already registered."
            raise ValueError(msg)
        self.stages.append(stage)

    def run_outputs(
        self,
        sink: ArtifactSink,
        cancellation: CancellationToken | None = None,
    ) -> list[PipelineResult]:
        """Evaluate every stage and register present results with ``sink``.

        Returns
        -------
        list[PipelineResult]
            Stage results in registration order.
        """
        results: list[PipelineResult] = []
        for stage in self.stages:
            result = stage.evaluate(cancellation)
            register_output(result, sink)
            results.append(result)
        return results


def additional_text_units(
    pair: tuple[tuple[AdditionalText, ...], HostOptions],
    cancellation: CancellationToken | None = None,
) -> tuple[AdditionalTextUnit, ...]:
    """Pair each additional text with the options scoped to its path.

    Returns
    -------
    tuple[AdditionalTextUnit, ...]
        Units in host order.
    """
    texts, options = pair
    check_cancelled(cancellation)
    return tuple(
        AdditionalTextUnit(path=text.path, text=text.text, options=options.options_for(text.path))
        for text in texts
    )


def syntax_tree_infos(
    compilation: CompilationMetadata,
    _cancellation: CancellationToken | None = None,
) -> tuple[SyntaxTreeInfo, ...]:
    """Return the compilation's syntax trees.

    Returns
    -------
    tuple[SyntaxTreeInfo, ...]
        Syntax trees in compilation order.
    """
    return compilation.syntax_trees


def syntax_units(
    pair: tuple[Sequence[SyntaxTreeInfo], HostOptions],
    cancellation: CancellationToken | None = None,
) -> tuple[SyntaxUnit, ...]:
    """Pair each syntax tree with the options scoped to its path.

    Returns
    -------
    tuple[SyntaxUnit, ...]
        Units in compilation order.
    """
    trees, options = pair
    check_cancelled(cancellation)
    return tuple(
        SyntaxUnit(
            path=tree.path,
            text=tree.text,
            has_compilation_unit_root=tree.has_compilation_unit_root,
            options=options.options_for(tree.path),
        )
        for tree in trees
    )


class ConfigSnapshotGenerator:
    """Registers the five configuration snapshot stages."""

    def __init__(self, property_name: str = FEATURE_FLAG_PROPERTY) -> None:
        self.property_name = property_name

    def initialize(self, context: GeneratorContext) -> None:
        """Build the shared gate and register one stage per snapshot kind."""
        enabled = feature_gate(context.options, self.property_name)
        _generate(context, enabled, context.options, global_options_snapshot, GLOBAL_OPTIONS_HINT)
        _generate(
            context,
            enabled,
            context.additional_texts.combine(context.options).select(
                additional_text_units, name="additional_text_units"
            ),
            additional_texts_snapshot,
            ADDITIONAL_TEXTS_HINT,
        )
        _generate(
            context, enabled, context.parse_options, parse_options_snapshot, PARSE_OPTIONS_HINT
        )
        _generate(
            context,
            enabled,
            context.compilation.select(syntax_tree_infos, name="syntax_trees")
            .combine(context.options)
            .select(syntax_units, name="syntax_units"),
            syntax_units_snapshot,
            SYNTAX_TREES_HINT,
        )
        _generate(context, enabled, context.compilation, compilation_snapshot, COMPILATION_HINT)
        logger.debug(
            "Registered %d snapshot stages gated on %s",
            len(context.stages),
            self.property_name,
        )


def _generate[T](
    context: GeneratorContext,
    enabled: ValueProvider[bool],
    source: ValueProvider[T],
    formatter: SnapshotFormatter[T],
    hint_name: str,
) -> None:
    context.register_source_output(PipelineStage(enabled, source, formatter, hint_name))


__all__ = [
    "ConfigSnapshotGenerator",
    "GeneratorContext",
    "additional_text_units",
    "syntax_tree_infos",
    "syntax_units",
]
