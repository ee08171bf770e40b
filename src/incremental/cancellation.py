"""Cooperative cancellation for pipeline evaluation."""

from __future__ import annotations

import threading


class OperationCancelledError(RuntimeError):
    """Raised when a cancellation token is observed mid-evaluation."""


class CancellationToken:
    """Thread-safe cancellation flag checked between units of work."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Return whether cancellation was requested."""
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise when cancellation was requested.

        Raises
        ------
        OperationCancelledError
            Raised when the token has been cancelled.
        """
        if self._event.is_set():
            msg = "Operation was cancelled."
            raise OperationCancelledError(msg)


def check_cancelled(cancellation: CancellationToken | None) -> None:
    """Raise when ``cancellation`` is set; ``None`` means never cancelled.

    Raises
    ------
    OperationCancelledError
        Raised when the token has been cancelled.
    """
    if cancellation is not None:
        cancellation.raise_if_cancelled()


__all__ = [
    "CancellationToken",
    "OperationCancelledError",
    "check_cancelled",
]
