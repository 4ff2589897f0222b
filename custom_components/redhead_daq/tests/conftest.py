"""Global fixtures for Redhead DAQ integration."""

import copy
from typing import Any

import pytest

from .const import MOCK_STATE

pytest_plugins = "pytest_homeassistant_custom_component"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> None:  # noqa: D103
    return


@pytest.fixture
def mock_state() -> dict[str, Any]:
    """Return a fresh copy of the sample device payload."""
    return copy.deepcopy(MOCK_STATE)


@pytest.fixture
def published() -> list[tuple[str, dict[str, Any]]]:
    """Collect (plugin_id, delta) pairs handed to the host."""
    return []
