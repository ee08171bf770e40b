"""Environment variable readers for settings layering."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger(__name__)

_BOOL_WORDS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


def env_text(name: str, *, strip: bool = True, allow_empty: bool = False) -> str | None:
    """Return the value of ``name``, or ``None`` when unset.

    Parameters
    ----------
    name
        Environment variable name.
    strip
        Remove surrounding whitespace first.
    allow_empty
        Return ``""`` for an empty value instead of ``None``.

    Returns
    -------
    str | None
        Variable value.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip() if strip else raw
    if not value and not allow_empty:
        return None
    return value


def env_bool(name: str) -> bool | None:
    """Return the boolean value of ``name``.

    Unset and unrecognised values yield ``None``; unrecognised ones are logged.

    Returns
    -------
    bool | None
        Parsed flag.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    parsed = _BOOL_WORDS.get(raw.strip().lower())
    if parsed is None:
        _LOGGER.warning("Ignoring %s=%r: expected a boolean", name, raw)
    return parsed


__all__ = ["env_bool", "env_text"]
