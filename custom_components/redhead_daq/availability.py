"""Edge-triggered availability alarm for the Redhead DAQ module."""

from __future__ import annotations

import logging

from .const import (
    ALARM_MESSAGE_AVAILABLE,
    ALARM_MESSAGE_UNAVAILABLE,
    ALARM_METHOD,
    ALARM_PATH,
    ALARM_STATE_ALERT,
    ALARM_STATE_NORMAL,
)
from .models import Observation

_LOGGER = logging.getLogger(__name__)


def alarm_observation(state: str, message: str) -> Observation:
    """Build the notification observation for an availability alarm."""
    return Observation(
        ALARM_PATH,
        {
            "state": state,
            "method": list(ALARM_METHOD),
            "message": message,
        },
    )


class AvailabilityTracker:
    """Track whether the DAQ module is reachable across polls.

    An alarm observation is produced only when availability changes: once
    when the module stops answering and once when it comes back. Repeated
    results in the same direction produce nothing.
    """

    def __init__(self) -> None:
        """Initialize the tracker as available with no alarm sent."""
        self.unavailable_alarm_sent = False

    @property
    def available(self) -> bool:
        """Return True unless an unavailable alarm is outstanding."""
        return not self.unavailable_alarm_sent

    def record_success(self) -> Observation | None:
        """Register a successful fetch, returning the recovery alarm on an edge."""
        if not self.unavailable_alarm_sent:
            return None

        self.unavailable_alarm_sent = False
        _LOGGER.info("Redhead DAQ module is available again")
        return alarm_observation(ALARM_STATE_NORMAL, ALARM_MESSAGE_AVAILABLE)

    def record_failure(self) -> Observation | None:
        """Register a failed fetch, returning the alert alarm on an edge."""
        if self.unavailable_alarm_sent:
            return None

        self.unavailable_alarm_sent = True
        _LOGGER.info("Redhead DAQ module became unavailable")
        return alarm_observation(ALARM_STATE_ALERT, ALARM_MESSAGE_UNAVAILABLE)
