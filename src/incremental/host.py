"""In-process host driving snapshot build passes."""

from __future__ import annotations

import logging
import time

import msgspec

from host_model.models import CompilationMetadata, HostOptions, ParseSettings
from host_model.state import HostState
from incremental.cancellation import CancellationToken
from incremental.generator import ConfigSnapshotGenerator, GeneratorContext
from incremental.providers import InputProvider
from incremental.sink import ArtifactSink
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)


class PassReport(StructBaseStrict, frozen=True):
    """Outcome of one build pass."""

    registered: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    changed_inputs: tuple[str, ...] = ()
    stage_stats: dict[str, dict[str, int]] = msgspec.field(default_factory=dict)
    elapsed_ms: float = 0.0


class SnapshotHost:
    """Own the host input providers and run build passes against them.

    Inputs persist between passes, so repeated passes over unchanged inputs
    reuse every stage's previous result.
    """

    def __init__(self, generator: ConfigSnapshotGenerator | None = None) -> None:
        self.options = InputProvider("options", HostOptions())
        self.additional_texts = InputProvider("additional_texts", ())
        self.parse_options = InputProvider("parse_options", ParseSettings())
        self.compilation = InputProvider("compilation", CompilationMetadata())
        self.context = GeneratorContext(
            options=self.options,
            additional_texts=self.additional_texts,
            parse_options=self.parse_options,
            compilation=self.compilation,
        )
        (generator or ConfigSnapshotGenerator()).initialize(self.context)
        self._pending_changes: list[str] = []

    def apply(self, state: HostState) -> tuple[str, ...]:
        """Feed a host state into the input providers.

        Returns
        -------
        tuple[str, ...]
            Names of inputs whose value changed.
        """
        updates = (
            (self.options, state.host_options()),
            (self.additional_texts, state.additional_texts),
            (self.parse_options, state.parse_options),
            (self.compilation, state.compilation),
        )
        changed = tuple(provider.name for provider, value in updates if provider.set(value))
        self._pending_changes.extend(name for name in changed if name not in self._pending_changes)
        return changed

    def run_pass(
        self,
        sink: ArtifactSink,
        cancellation: CancellationToken | None = None,
    ) -> PassReport:
        """Evaluate every stage and register present snapshots with ``sink``.

        Returns
        -------
        PassReport
            Registered and skipped hint names plus per-stage counters.
        """
        start = time.perf_counter()
        results = self.context.run_outputs(sink, cancellation)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        report = PassReport(
            registered=tuple(result.hint_name for result in results if result.present),
            skipped=tuple(result.hint_name for result in results if not result.present),
            changed_inputs=tuple(self._pending_changes),
            stage_stats={stage.hint_name: stage.stats.as_dict() for stage in self.context.stages},
            elapsed_ms=round(elapsed_ms, 3),
        )
        self._pending_changes.clear()
        logger.info(
            "Snapshot pass registered %d of %d artifacts in %.1fms",
            len(report.registered),
            len(results),
            elapsed_ms,
        )
        return report


__all__ = ["PassReport", "SnapshotHost"]
