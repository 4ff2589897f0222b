"""Config flow for Redhead DAQ integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.core import callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import RedheadDaqApiClient, RedheadDaqFetchError, RedheadDaqTranslationError
from .const import CONF_ADDRESS, CONF_REFRESH_RATE, DEFAULT_REFRESH_RATE, DOMAIN

_LOGGER = logging.getLogger(__name__)

REFRESH_RATE_VALIDATOR = vol.All(vol.Coerce(float), vol.Range(min=1))

STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ADDRESS): str,
        vol.Optional(
            CONF_REFRESH_RATE, default=DEFAULT_REFRESH_RATE
        ): REFRESH_RATE_VALIDATOR,
    }
)


class RedheadDaqConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Redhead DAQ."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> OptionsFlow:
        """Return the options flow handler."""
        return RedheadDaqOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        if user_input is not None:
            address = user_input[CONF_ADDRESS]

            # Check if already configured
            await self.async_set_unique_id(address)
            self._abort_if_unique_id_configured()

            api = RedheadDaqApiClient(address, async_get_clientsession(self.hass))
            try:
                await api.async_validate_connection()

                # Create entry
                return self.async_create_entry(
                    title=f"Redhead DAQ ({address})",
                    data=user_input,
                )
            except RedheadDaqFetchError:
                errors["base"] = "cannot_connect"
            except RedheadDaqTranslationError:
                errors["base"] = "invalid_response"
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Unexpected exception")
                errors["base"] = "unknown"

        return self.async_show_form(
            step_id="user",
            data_schema=STEP_USER_DATA_SCHEMA,
            errors=errors,
        )


class RedheadDaqOptionsFlow(OptionsFlow):
    """Handle Redhead DAQ options."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Manage the refresh rate."""
        if user_input is not None:
            return self.async_create_entry(data=user_input)

        current = self.config_entry.options.get(
            CONF_REFRESH_RATE,
            self.config_entry.data.get(CONF_REFRESH_RATE, DEFAULT_REFRESH_RATE),
        )
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Optional(
                        CONF_REFRESH_RATE, default=current
                    ): REFRESH_RATE_VALIDATOR,
                }
            ),
        )
