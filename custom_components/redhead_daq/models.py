"""Data models for Redhead DAQ integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .const import DEFAULT_REFRESH_RATE


@dataclass(frozen=True)
class DeviceEndpoint:
    """Where and how often to poll the DAQ module."""

    address: str
    refresh_rate: float = DEFAULT_REFRESH_RATE


@dataclass
class DeviceRecord:
    """Local model for one light or group reported by the DAQ module."""

    key: str
    entity_kind: str
    display_name: str
    on: bool
    brightness: int
    model_id: str | None = None
    color_mode: str | None = None
    hue: int | None = None
    saturation: int | None = None
    color_temperature_mired: int | None = None
    cie: tuple[float, float] | None = None


@dataclass(frozen=True)
class Observation:
    """A single path/value pair handed to the host."""

    path: str
    value: Any

    def as_dict(self) -> dict[str, Any]:
        """Return the wire representation of the observation."""
        return {"path": self.path, "value": self.value}


# Decoded device payload: collection name -> device key -> record
RawDeviceState = dict[str, dict[str, dict[str, Any]]]
