"""Delta payloads handed to the host."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from homeassistant.core import HomeAssistant, callback

from .const import EVENT_DELTA
from .models import Observation

# handle_message(plugin_id, delta)
DeltaHandler = Callable[[str, dict[str, Any]], None]


def build_delta(observations: Iterable[Observation]) -> dict[str, Any]:
    """Wrap observations in a single-update delta."""
    return {
        "updates": [
            {
                "values": [observation.as_dict() for observation in observations],
            }
        ]
    }


def hass_bus_handler(hass: HomeAssistant) -> DeltaHandler:
    """Return a handler that fires each delta as a Home Assistant event."""

    @callback
    def _handle_message(plugin_id: str, delta: dict[str, Any]) -> None:
        hass.bus.async_fire(EVENT_DELTA, {"plugin_id": plugin_id, **delta})

    return _handle_message
