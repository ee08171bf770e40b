"""Type aliases shared by host contracts and settings loading."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Annotated

from msgspec import Meta

type PathLike = str | Path

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]

NonNegativeInt = Annotated[int, Meta(ge=0)]

__all__ = [
    "JsonPrimitive",
    "JsonValue",
    "NonNegativeInt",
    "PathLike",
]
