"""Integration for Redhead DAQ modules."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import RedheadDaqApiClient
from .const import CONF_ADDRESS, CONF_REFRESH_RATE, DEFAULT_REFRESH_RATE, DOMAIN, PLATFORMS
from .delta import hass_bus_handler
from .models import DeviceEndpoint
from .poller import RedheadDaqPoller

_LOGGER = logging.getLogger(__name__)


def endpoint_from_entry(entry: ConfigEntry) -> DeviceEndpoint:
    """Build the polling endpoint from entry data, preferring options."""
    refresh_rate = entry.options.get(
        CONF_REFRESH_RATE, entry.data.get(CONF_REFRESH_RATE, DEFAULT_REFRESH_RATE)
    )
    return DeviceEndpoint(address=entry.data[CONF_ADDRESS], refresh_rate=refresh_rate)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Redhead DAQ from a config entry."""
    endpoint = endpoint_from_entry(entry)
    api = RedheadDaqApiClient(endpoint.address, async_get_clientsession(hass))

    # An unreachable module is reported through the alarm, not a setup retry
    poller = RedheadDaqPoller(hass, api, endpoint, hass_bus_handler(hass))
    await poller.async_start()

    # Store poller for platforms to access
    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = poller

    # Set up platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    # Reload when the refresh rate is changed in the options
    entry.async_on_unload(entry.add_update_listener(update_listener))

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        poller: RedheadDaqPoller = hass.data[DOMAIN].pop(entry.entry_id)
        await poller.async_stop()

        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)

    return unload_ok


async def update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update."""
    await hass.config_entries.async_reload(entry.entry_id)
