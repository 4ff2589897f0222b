"""Connection status sensor for Redhead DAQ modules."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddConfigEntryEntitiesCallback

from .const import DOMAIN
from .poller import RedheadDaqPoller

_LOGGER = logging.getLogger(__name__)

# Home Assistant rejects states longer than this
MAX_STATE_LENGTH = 255


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddConfigEntryEntitiesCallback,
) -> None:
    """Set up the Redhead DAQ status sensor."""
    poller: RedheadDaqPoller = hass.data[DOMAIN][entry.entry_id]
    async_add_entities([RedheadDaqStatusSensor(poller, entry)])


class RedheadDaqStatusSensor(SensorEntity):
    """Human-readable connection status of a Redhead DAQ module."""

    _attr_has_entity_name = True
    _attr_name = "Connection status"
    _attr_icon = "mdi:lan-connect"
    _attr_entity_category = EntityCategory.DIAGNOSTIC
    _attr_should_poll = False

    def __init__(self, poller: RedheadDaqPoller, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        self._poller = poller
        self._attr_unique_id = f"{entry.entry_id}_status"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry.entry_id)},
            name=entry.title,
            manufacturer="Redhead",
            model="DAQ module",
            configuration_url=poller.api.base_url,
        )

    @property
    def native_value(self) -> str | None:  # type: ignore[override]
        """Return the last connection status."""
        message = self._poller.status_message
        if message is None:
            return None
        return message[:MAX_STATE_LENGTH]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:  # type: ignore[override]
        """Return whether the unavailable alarm is outstanding."""
        return {"unavailable_alarm_sent": self._poller.unavailable_alarm_sent}

    async def async_added_to_hass(self) -> None:
        """Refresh whenever the poller reports a new status."""
        await super().async_added_to_hass()
        self.async_on_remove(self._poller.async_add_listener(self.async_write_ha_state))
