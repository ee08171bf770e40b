"""Shared pytest configuration and host state fixtures."""

from __future__ import annotations

import pytest

from host_model.state import HostState
from tests.test_helpers.host_states import enabled_state, sample_state


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add --update-golden option for regenerating golden files."""
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Update golden snapshot files with current output",
    )


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CONFIG_SNAPSHOT_OUT_DIR",
        "CONFIG_SNAPSHOT_PROPERTY",
        "CONFIG_SNAPSHOT_SUFFIX",
        "CONFIG_SNAPSHOT_CLEAN",
        "CONFIG_SNAPSHOT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def host_state() -> HostState:
    """Return a host state with the feature flag enabled.

    Returns
    -------
    HostState
        Enabled sample state.
    """
    return enabled_state()


@pytest.fixture
def disabled_host_state() -> HostState:
    """Return the sample host state without the feature flag.

    Returns
    -------
    HostState
        Disabled sample state.
    """
    return sample_state()
