"""Constants for the Redhead DAQ integration."""

from homeassistant.const import Platform

DOMAIN = "redhead_daq"

# Identifier the host uses to attribute published deltas
PLUGIN_ID = "signalk-redhead-daq"

# Platforms
PLATFORMS = [Platform.SENSOR]

# Config entry keys
CONF_ADDRESS = "address"
CONF_REFRESH_RATE = "refresh_rate"

DEFAULT_REFRESH_RATE = 5  # seconds between polls
FETCH_TIMEOUT = 10  # seconds, upper bound for a single state request

STATE_ENDPOINT = "/state.xml"

# Event fired on the Home Assistant bus for every published delta
EVENT_DELTA = f"{DOMAIN}_delta"

# Observation paths
BASE_PATH = "electrical.switches.hue"
ALARM_PATH = "notifications.redhead.daqUnavailable"

ENTITY_KIND_LIGHTS = "lights"
ENTITY_KIND_GROUPS = "groups"

COLOR_MODE_MAP = {
    "hs": "hsb",
    "ct": "temperature",
    "xy": "cie",
}
COLOR_MODE_UNRECOGNIZED = "unrecognized"

ALARM_METHOD = ["visual", "sound"]
ALARM_STATE_ALERT = "alert"
ALARM_STATE_NORMAL = "normal"
ALARM_MESSAGE_UNAVAILABLE = "The DAQ module is unavailable"
ALARM_MESSAGE_AVAILABLE = "The DAQ module is now available"
