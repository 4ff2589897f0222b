"""Test the Redhead DAQ config flow."""

from unittest.mock import patch

import pytest

from custom_components.redhead_daq.api import (
    RedheadDaqConnectionError,
    RedheadDaqStatusError,
    RedheadDaqTranslationError,
)
from custom_components.redhead_daq.const import (
    CONF_ADDRESS,
    CONF_REFRESH_RATE,
    DEFAULT_REFRESH_RATE,
    DOMAIN,
)
from homeassistant.config_entries import SOURCE_USER
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResultType
from pytest_homeassistant_custom_component.common import MockConfigEntry

from .const import MOCK_ADDRESS, MOCK_CONFIG, STATE_URL

VALIDATE_CONN = (
    "custom_components.redhead_daq.api.RedheadDaqApiClient.async_validate_connection"
)


@pytest.fixture(autouse=True)
def bypass_setup_fixture():
    """Prevent setup."""
    with patch(
        "custom_components.redhead_daq.async_setup_entry",
        return_value=True,
    ):
        yield


async def test_form(hass: HomeAssistant) -> None:
    """Test we get the form."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    assert result["handler"] == DOMAIN
    assert result.get("type") is FlowResultType.FORM
    assert result.get("step_id") == "user"
    assert result.get("errors") == {}
    data_schema = result.get("data_schema")
    assert data_schema is not None
    assert isinstance(data_schema.schema[CONF_ADDRESS], type)


async def test_flow_success(hass: HomeAssistant) -> None:
    """Test that we can configure with valid mock config."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(VALIDATE_CONN, return_value=True):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert result.get("title") == f"Redhead DAQ ({MOCK_ADDRESS})"
    assert result.get("data") == MOCK_CONFIG
    assert result.get("result")


async def test_flow_default_refresh_rate(hass: HomeAssistant) -> None:
    """Test the refresh rate defaults to five seconds."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(VALIDATE_CONN, return_value=True):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input={CONF_ADDRESS: MOCK_ADDRESS}
        )
    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert result.get("data") == {
        CONF_ADDRESS: MOCK_ADDRESS,
        CONF_REFRESH_RATE: DEFAULT_REFRESH_RATE,
    }


async def test_flow_failure(hass: HomeAssistant) -> None:
    """Test that a validation exception fails the config flow."""

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(VALIDATE_CONN, side_effect=RedheadDaqConnectionError("refused")):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("type") == FlowResultType.FORM
    assert result.get("step_id") == "user"
    assert result.get("errors") == {"base": "cannot_connect"}

    status_error = RedheadDaqStatusError(STATE_URL, 500)
    with patch(VALIDATE_CONN, side_effect=status_error):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("errors") == {"base": "cannot_connect"}

    with patch(VALIDATE_CONN, side_effect=RedheadDaqTranslationError):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("errors") == {"base": "invalid_response"}

    with patch(VALIDATE_CONN, side_effect=Exception):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("errors") == {"base": "unknown"}


async def test_flow_already_configured(hass: HomeAssistant) -> None:
    """Test a module can only be added once."""
    MockConfigEntry(domain=DOMAIN, data=MOCK_CONFIG, unique_id=MOCK_ADDRESS).add_to_hass(
        hass
    )

    result = await hass.config_entries.flow.async_init(
        DOMAIN, context={"source": SOURCE_USER}
    )
    with patch(VALIDATE_CONN, return_value=True):
        result = await hass.config_entries.flow.async_configure(  # type: ignore[call-arg]
            result["flow_id"], user_input=MOCK_CONFIG
        )
    assert result.get("type") == FlowResultType.ABORT
    assert result.get("reason") == "already_configured"


async def test_options_flow(hass: HomeAssistant) -> None:
    """Test the refresh rate can be changed."""
    entry = MockConfigEntry(domain=DOMAIN, data=MOCK_CONFIG, unique_id=MOCK_ADDRESS)
    entry.add_to_hass(hass)

    result = await hass.config_entries.options.async_init(entry.entry_id)
    assert result.get("type") is FlowResultType.FORM
    assert result.get("step_id") == "init"

    result = await hass.config_entries.options.async_configure(
        result["flow_id"], user_input={CONF_REFRESH_RATE: 30}
    )
    assert result.get("type") == FlowResultType.CREATE_ENTRY
    assert entry.options == {CONF_REFRESH_RATE: 30.0}
