"""Feature gate derived from host build properties."""

from __future__ import annotations

from host_model.models import ConfigurationTable, HostOptions
from incremental.providers import ValueProvider

FEATURE_FLAG_PROPERTY = "PodNetEnableAnalyzerConfigSnapshot"
BUILD_PROPERTY_PREFIX = "build_property."


def build_property_key(property_name: str) -> str:
    """Return the global option key under which a build property is exposed.

    Returns
    -------
    str
        ``build_property.<property_name>``.
    """
    return f"{BUILD_PROPERTY_PREFIX}{property_name}"


def is_truthy_flag(value: str | None) -> bool:
    """Return whether ``value`` is the literal ``true``, ignoring case.

    Returns
    -------
    bool
        ``True`` only for case variants of ``"true"``.
    """
    return value is not None and value.lower() == "true"


def read_feature_flag(
    global_options: ConfigurationTable,
    property_name: str = FEATURE_FLAG_PROPERTY,
) -> bool:
    """Return the feature flag value from the global options table.

    A missing key is a normal ``False``.

    Returns
    -------
    bool
        Whether snapshots are enabled.
    """
    return is_truthy_flag(global_options.get(build_property_key(property_name)))


def feature_gate(
    options: ValueProvider[HostOptions],
    property_name: str = FEATURE_FLAG_PROPERTY,
) -> ValueProvider[bool]:
    """Return a provider of the feature flag, recomputed when options change.

    Returns
    -------
    ValueProvider[bool]
        Gate provider shared by every snapshot stage.
    """
    return options.select(
        lambda value, _cancellation: read_feature_flag(value.global_options, property_name),
        name="feature_gate",
    )


__all__ = [
    "BUILD_PROPERTY_PREFIX",
    "FEATURE_FLAG_PROPERTY",
    "build_property_key",
    "feature_gate",
    "is_truthy_flag",
    "read_feature_flag",
]
