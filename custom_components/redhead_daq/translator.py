"""Translate Redhead DAQ light and group state into observations."""

from __future__ import annotations

import logging
import re
from typing import Any

from .api import RedheadDaqTranslationError
from .const import (
    BASE_PATH,
    COLOR_MODE_MAP,
    COLOR_MODE_UNRECOGNIZED,
    ENTITY_KIND_GROUPS,
)
from .models import DeviceRecord, Observation, RawDeviceState

_LOGGER = logging.getLogger(__name__)

# Anything that is not a letter or digit separates words
_WORD_SPLIT = re.compile(r"[\W_]+")

# Hue spans 0-65535 on the wire, i.e. 182.04 steps per degree
HUE_STEPS_PER_DEGREE = 182.04
MAX_BRIGHTNESS = 255.0
MAX_SATURATION = 255.0


def _split_camel(word: str) -> list[str]:
    """Split "kitchenCeiling" and "TVLight" at their case boundaries."""
    parts = []
    start = 0
    for index in range(1, len(word)):
        previous, current = word[index - 1], word[index]
        following = word[index + 1 : index + 2]
        if (previous.islower() and current.isupper()) or (
            previous.isupper() and current.isupper() and following.islower()
        ):
            parts.append(word[start:index])
            start = index
    parts.append(word[start:])
    return parts


def camel_case(display_name: str) -> str:
    """Turn a display name into a path segment, e.g. "TV Light" -> "tvLight"."""
    words = [
        part.lower()
        for word in _WORD_SPLIT.split(display_name)
        if word
        for part in _split_camel(word)
    ]
    if not words:
        return ""
    return words[0] + "".join(word[0].upper() + word[1:] for word in words[1:])


def _number(entity_kind: str, key: str, settings: dict[str, Any], field: str) -> Any:
    """Return a numeric field, None when absent."""
    value = settings.get(field)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} has a non-numeric {field}: {value!r}"
        )
    return value


def parse_record(entity_kind: str, key: str, record: Any) -> DeviceRecord:
    """Build a DeviceRecord from one raw light or group record.

    Groups report their light settings under ``action`` and whether any
    member is lit under ``state.any_on``; lights use ``state`` for both.

    Raises:
        RedheadDaqTranslationError: If required fields are missing or of the
            wrong type

    """
    if not isinstance(record, dict):
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} is not an object"
        )

    status = record.get("state")
    if entity_kind == ENTITY_KIND_GROUPS:
        settings = record.get("action")
        on_field = "any_on"
    else:
        settings = status
        on_field = "on"

    if not isinstance(status, dict) or not isinstance(settings, dict):
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} has no usable state"
        )

    display_name = record.get("name")
    if not display_name or not isinstance(display_name, str):
        raise RedheadDaqTranslationError(f"Record {entity_kind}/{key} has no name")

    brightness = _number(entity_kind, key, settings, "bri")
    if brightness is None:
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} has no brightness"
        )

    color_mode = settings.get("colormode")
    if color_mode is not None and not isinstance(color_mode, str):
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} has an invalid colormode: {color_mode!r}"
        )

    xy = settings.get("xy")
    if xy and (
        not isinstance(xy, (list, tuple))
        or len(xy) != 2
        or not all(
            isinstance(value, (int, float)) and not isinstance(value, bool)
            for value in xy
        )
    ):
        raise RedheadDaqTranslationError(
            f"Record {entity_kind}/{key} has an invalid xy value: {xy!r}"
        )

    return DeviceRecord(
        key=key,
        entity_kind=entity_kind,
        display_name=display_name,
        on=bool(status.get(on_field)),
        brightness=brightness,
        model_id=record.get("modelid"),
        color_mode=color_mode,
        hue=_number(entity_kind, key, settings, "hue"),
        saturation=_number(entity_kind, key, settings, "sat"),
        color_temperature_mired=_number(entity_kind, key, settings, "ct"),
        cie=(xy[0], xy[1]) if xy else None,
    )


def translate_record(record: DeviceRecord) -> list[Observation]:
    """Return the observations describing a single light or group."""
    path = f"{BASE_PATH}.{record.entity_kind}.{camel_case(record.display_name)}"

    observations = [
        Observation(f"{path}.state", record.on),
        Observation(f"{path}.dimmingLevel", record.brightness / MAX_BRIGHTNESS),
        Observation(
            f"{path}.meta",
            {
                "type": "dimmer",
                "displayName": record.display_name,
                "hueModel": record.model_id,
                "canDimWhenOff": False,
            },
        ),
    ]

    if not record.color_mode:
        return observations

    color_mode = COLOR_MODE_MAP.get(record.color_mode)
    if color_mode is None:
        _LOGGER.warning(
            "Unrecognized color mode %r for %s", record.color_mode, record.display_name
        )
        color_mode = COLOR_MODE_UNRECOGNIZED
    observations.append(Observation(f"{path}.colorMode", color_mode))

    # Zero hue or saturation is reported the same as a missing value
    if record.hue and record.saturation:
        observations.append(
            Observation(f"{path}.hue", record.hue / HUE_STEPS_PER_DEGREE / 360.0)
        )
        observations.append(
            Observation(f"{path}.saturation", record.saturation / MAX_SATURATION)
        )

    if record.color_temperature_mired:
        kelvin = 1000000.0 / record.color_temperature_mired
        observations.append(Observation(f"{path}.temperature", kelvin))

    if record.cie:
        observations.append(
            Observation(f"{path}.cie", {"x": record.cie[0], "y": record.cie[1]})
        )

    return observations


def translate_state(raw: RawDeviceState) -> list[tuple[str, list[Observation]]]:
    """Translate a full payload into one observation batch per record.

    Args:
        raw: Decoded payload keyed by collection ("lights", "groups")

    Returns:
        (entity kind, observations) for every record, in payload order

    Raises:
        RedheadDaqTranslationError: If any record is malformed

    """
    batches: list[tuple[str, list[Observation]]] = []
    for entity_kind, collection in raw.items():
        if not isinstance(collection, dict):
            raise RedheadDaqTranslationError(
                f"Collection {entity_kind!r} is not an object"
            )
        for key, record in collection.items():
            device = parse_record(entity_kind, key, record)
            batches.append((entity_kind, translate_record(device)))
    return batches
