"""Change-tracked value providers.

A provider hands out its current value together with an opaque version token.
Derived providers remember the upstream tokens they were computed from and only
rerun their transform when one of those tokens changes. Version tokens of
computed values are fingerprints of the values themselves, so a recomputation
that yields an equal value leaves downstream consumers untouched.

Provider values must be msgspec-encodable (structs, tuples, mappings, scalars).
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

from incremental.cancellation import CancellationToken, check_cancelled
from incremental.types import Versioned
from utils.hashing import CacheKeyBuilder, hash_msgpack_ordered

logger = logging.getLogger(__name__)

type Transform[T, U] = Callable[[T, CancellationToken | None], U]


def value_version(value: object) -> str:
    """Return the structural version token for ``value``.

    Mapping insertion order is part of the token, because host order is
    reflected in rendered output.

    Returns
    -------
    str
        SHA-256 hexdigest of the order-preserving msgpack encoding.
    """
    return hash_msgpack_ordered(value)


class ValueProvider[T](ABC):
    """Source of a single change-tracked value."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def current(self, cancellation: CancellationToken | None = None) -> Versioned[T]:
        """Return the current value and its version token."""
        ...

    def select[U](
        self,
        transform: Transform[T, U],
        *,
        name: str | None = None,
    ) -> SelectProvider[T, U]:
        """Return a provider that maps this provider's value through ``transform``.

        Returns
        -------
        SelectProvider
            Derived provider.
        """
        return SelectProvider(self, transform, name=name or f"{self.name}.select")

    def combine[U](
        self,
        other: ValueProvider[U],
        *,
        name: str | None = None,
    ) -> CombineProvider[T, U]:
        """Return a provider pairing this provider's value with ``other``'s.

        Returns
        -------
        CombineProvider
            Derived provider yielding ``(left, right)`` tuples.
        """
        return CombineProvider(self, other, name=name or f"{self.name}+{other.name}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class InputProvider[T](ValueProvider[T]):
    """Host-fed leaf provider."""

    def __init__(self, name: str, initial: T) -> None:
        super().__init__(name)
        self._lock = threading.Lock()
        self._state = Versioned(initial, value_version(initial))

    def set(self, value: T) -> bool:
        """Replace the current value.

        Returns
        -------
        bool
            ``True`` when the new value is structurally different.
        """
        version = value_version(value)
        with self._lock:
            if version == self._state.version:
                return False
            self._state = Versioned(value, version)
        logger.debug("Input %s changed (version %s)", self.name, version[:12])
        return True

    def current(self, cancellation: CancellationToken | None = None) -> Versioned[T]:
        """Return the current value and its version token.

        Returns
        -------
        Versioned[T]
            Current value.
        """
        return self._state


class SelectProvider[T, U](ValueProvider[U]):
    """Provider mapping an upstream value through a pure transform."""

    def __init__(
        self,
        upstream: ValueProvider[T],
        transform: Transform[T, U],
        *,
        name: str,
    ) -> None:
        super().__init__(name)
        self._upstream = upstream
        self._transform = transform
        self._memo: tuple[str, Versioned[U]] | None = None
        self.recomputations = 0

    def current(self, cancellation: CancellationToken | None = None) -> Versioned[U]:
        """Return the mapped value, recomputing only on upstream change.

        Returns
        -------
        Versioned[U]
            Mapped value and its fingerprint.
        """
        upstream = self._upstream.current(cancellation)
        memo = self._memo
        if memo is not None and memo[0] == upstream.version:
            return memo[1]
        check_cancelled(cancellation)
        value = self._transform(upstream.value, cancellation)
        result = Versioned(value, value_version(value))
        self._memo = (upstream.version, result)
        self.recomputations += 1
        return result


class CombineProvider[T, U](ValueProvider[tuple[T, U]]):
    """Provider pairing two upstream values."""

    def __init__(self, left: ValueProvider[T], right: ValueProvider[U], *, name: str) -> None:
        super().__init__(name)
        self._left = left
        self._right = right
        self._memo: Versioned[tuple[T, U]] | None = None

    def current(self, cancellation: CancellationToken | None = None) -> Versioned[tuple[T, U]]:
        """Return both upstream values with a composite version token.

        Returns
        -------
        Versioned[tuple[T, U]]
            Paired values.
        """
        left = self._left.current(cancellation)
        right = self._right.current(cancellation)
        version = (
            CacheKeyBuilder(prefix="combine")
            .add("left", left.version)
            .add("right", right.version)
            .build()
        )
        memo = self._memo
        if memo is not None and memo.version == version:
            return memo
        result = Versioned((left.value, right.value), version)
        self._memo = result
        return result


__all__ = [
    "CombineProvider",
    "InputProvider",
    "SelectProvider",
    "Transform",
    "ValueProvider",
    "value_version",
]
