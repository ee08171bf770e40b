"""Gated snapshot pipeline stage."""

from __future__ import annotations

import logging
from collections.abc import Callable

from incremental.cancellation import CancellationToken, OperationCancelledError, check_cancelled
from incremental.providers import ValueProvider
from incremental.types import PipelineResult, StageStats

logger = logging.getLogger(__name__)

type SnapshotFormatter[T] = Callable[[T, CancellationToken | None], str]


class PipelineStage[T]:
    """Pair the feature gate with one source and a formatter.

    With the gate off the result is absent and neither the source nor the
    formatter is touched. With the gate on the formatter runs only when the
    gate or source version differs from the last completed evaluation.
    Cancellation yields an absent result for the pass and leaves the memo as
    it was, so the next pass recomputes.
    """

    def __init__(
        self,
        gate: ValueProvider[bool],
        source: ValueProvider[T],
        formatter: SnapshotFormatter[T],
        hint_name: str,
    ) -> None:
        self.gate = gate
        self.source = source
        self.formatter = formatter
        self.hint_name = hint_name
        self.stats = StageStats()
        self._memo: tuple[tuple[str, str | None], PipelineResult] | None = None

    def evaluate(self, cancellation: CancellationToken | None = None) -> PipelineResult:
        """Return the stage result for the current inputs.

        Returns
        -------
        PipelineResult
            Present snapshot, or absent when gated off or cancelled.
        """
        self.stats.evaluations += 1
        try:
            key, result = self._compute(cancellation)
        except OperationCancelledError:
            self.stats.cancellations += 1
            logger.debug("Stage %s cancelled; no output this pass", self.hint_name)
            return PipelineResult.absent(self.hint_name)
        self._memo = (key, result)
        return result

    def _compute(
        self,
        cancellation: CancellationToken | None,
    ) -> tuple[tuple[str, str | None], PipelineResult]:
        gate = self.gate.current(cancellation)
        if not gate.value:
            key: tuple[str, str | None] = (gate.version, None)
            cached = self._cached(key)
            if cached is not None:
                return key, cached
            self.stats.gate_skips += 1
            logger.debug("Stage %s gated off", self.hint_name)
            return key, PipelineResult.absent(self.hint_name)
        source = self.source.current(cancellation)
        key = (gate.version, source.version)
        cached = self._cached(key)
        if cached is not None:
            return key, cached
        check_cancelled(cancellation)
        text = self.formatter(source.value, cancellation)
        self.stats.formatter_calls += 1
        logger.debug("Stage %s recomputed (%d chars)", self.hint_name, len(text))
        return key, PipelineResult.of(self.hint_name, text)

    def _cached(self, key: tuple[str, str | None]) -> PipelineResult | None:
        memo = self._memo
        if memo is None or memo[0] != key:
            return None
        self.stats.cache_hits += 1
        logger.debug("Stage %s unchanged", self.hint_name)
        return memo[1]

    def __repr__(self) -> str:
        return f"PipelineStage({self.hint_name!r})"


__all__ = ["PipelineStage", "SnapshotFormatter"]
