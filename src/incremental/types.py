"""Incremental snapshot pipeline types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from serde_msgspec import StructBaseHotPath

GLOBAL_OPTIONS_HINT: Final = "_AnalyzerConfigOptions.GlobalOptions"
ADDITIONAL_TEXTS_HINT: Final = "_AdditionalTexts"
PARSE_OPTIONS_HINT: Final = "_ParseOptions"
SYNTAX_TREES_HINT: Final = "_SyntaxTrees"
COMPILATION_HINT: Final = "_Compilation"

HINT_NAMES: Final[tuple[str, ...]] = (
    GLOBAL_OPTIONS_HINT,
    ADDITIONAL_TEXTS_HINT,
    PARSE_OPTIONS_HINT,
    SYNTAX_TREES_HINT,
    COMPILATION_HINT,
)


@dataclass(frozen=True)
class Versioned[T]:
    """Provider value paired with an opaque version token.

    Two values with equal tokens are interchangeable; consumers compare tokens
    to decide whether to recompute.
    """

    value: T
    version: str


class Snapshot(StructBaseHotPath, frozen=True):
    """Rendered text for one configuration source."""

    hint_name: str
    text: str


class PipelineResult(StructBaseHotPath, frozen=True):
    """Present snapshot, or absent when the feature gate is off."""

    hint_name: str
    snapshot: Snapshot | None = None

    @property
    def present(self) -> bool:
        """Return whether a snapshot was produced."""
        return self.snapshot is not None

    @classmethod
    def absent(cls, hint_name: str) -> PipelineResult:
        """Return an absent result for ``hint_name``.

        Returns
        -------
        PipelineResult
            Result without a snapshot.
        """
        return cls(hint_name=hint_name)

    @classmethod
    def of(cls, hint_name: str, text: str) -> PipelineResult:
        """Return a present result wrapping ``text``.

        Returns
        -------
        PipelineResult
            Result carrying a snapshot.
        """
        return cls(hint_name=hint_name, snapshot=Snapshot(hint_name=hint_name, text=text))


@dataclass
class StageStats:
    """Evaluation counters for one pipeline stage."""

    evaluations: int = 0
    formatter_calls: int = 0
    cache_hits: int = 0
    gate_skips: int = 0
    cancellations: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return counters as a plain mapping.

        Returns
        -------
        dict[str, int]
            Counter values by name.
        """
        return {
            "evaluations": self.evaluations,
            "formatter_calls": self.formatter_calls,
            "cache_hits": self.cache_hits,
            "gate_skips": self.gate_skips,
            "cancellations": self.cancellations,
        }


__all__ = [
    "ADDITIONAL_TEXTS_HINT",
    "COMPILATION_HINT",
    "GLOBAL_OPTIONS_HINT",
    "HINT_NAMES",
    "PARSE_OPTIONS_HINT",
    "SYNTAX_TREES_HINT",
    "PipelineResult",
    "Snapshot",
    "StageStats",
    "Versioned",
]
