"""Periodic poller for the Redhead DAQ module."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import contextlib
from datetime import datetime, timedelta
import logging

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback
from homeassistant.helpers.event import async_track_time_interval

from .api import (
    RedheadDaqApiClient,
    RedheadDaqFetchError,
    RedheadDaqTranslationError,
)
from .availability import AvailabilityTracker
from .const import DOMAIN, PLUGIN_ID
from .delta import DeltaHandler, build_delta
from .models import DeviceEndpoint, Observation
from .translator import translate_state

_LOGGER = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


class RedheadDaqPoller:
    """Poll a Redhead DAQ module and hand its state to the host.

    Every tick fetches the module state, updates the availability alarm,
    translates each light and group into observations and publishes one
    delta per record. A tick that fires while the previous poll is still
    waiting on the network is skipped.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        api: RedheadDaqApiClient,
        endpoint: DeviceEndpoint,
        handle_message: DeltaHandler,
        *,
        plugin_id: str = PLUGIN_ID,
        set_status: StatusCallback | None = None,
        set_error: StatusCallback | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            hass: Home Assistant instance driving the timer
            api: Client for the module's state endpoint
            endpoint: Address and refresh rate of the module
            handle_message: Host callback receiving (plugin_id, delta)
            plugin_id: Identifier passed along with every delta
            set_status: Optional host callback for connection status
            set_error: Optional host callback for connection errors

        """
        self.hass = hass
        self.api = api
        self.endpoint = endpoint
        self.plugin_id = plugin_id
        self.tracker = AvailabilityTracker()
        self._handle_message = handle_message
        self._set_status_callback = set_status
        self._set_error_callback = set_error
        self._status_message: str | None = None
        self._listeners: list[CALLBACK_TYPE] = []
        self._unsub_timer: CALLBACK_TYPE | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def status_message(self) -> str | None:
        """Return the last connection status, prefixed "error: " on failure."""
        return self._status_message

    @property
    def unavailable_alarm_sent(self) -> bool:
        """Return True while the unavailable alarm is outstanding."""
        return self.tracker.unavailable_alarm_sent

    @callback
    def async_add_listener(self, update_callback: CALLBACK_TYPE) -> CALLBACK_TYPE:
        """Register a callback run whenever the status message changes."""
        self._listeners.append(update_callback)

        @callback
        def _remove_listener() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(update_callback)

        return _remove_listener

    async def async_start(self) -> None:
        """Poll once right away, then every refresh interval."""
        _LOGGER.info(
            "Polling Redhead DAQ at %s every %s seconds",
            self.endpoint.address,
            self.endpoint.refresh_rate,
        )
        self._poll_task = self.hass.async_create_task(
            self.async_poll(), f"{DOMAIN} poll {self.endpoint.address}"
        )
        # A stop during the first poll cancels the task instead of raising here
        await asyncio.wait([self._poll_task])
        if self._stopped:
            return

        self._unsub_timer = async_track_time_interval(
            self.hass,
            self._handle_tick,
            timedelta(seconds=self.endpoint.refresh_rate),
            name=f"{DOMAIN} poll {self.endpoint.address}",
            cancel_on_shutdown=True,
        )

    async def async_stop(self) -> None:
        """Stop polling; nothing is published once this returns."""
        self._stopped = True

        if self._unsub_timer is not None:
            self._unsub_timer()
            self._unsub_timer = None

        if self._poll_task is not None:
            if not self._poll_task.done():
                self._poll_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._poll_task
            self._poll_task = None

        await self.api.async_close()
        _LOGGER.info("Stopped polling Redhead DAQ at %s", self.endpoint.address)

    @callback
    def _handle_tick(self, now: datetime) -> None:
        """Start a poll unless the previous one is still running."""
        if self._poll_task is not None and not self._poll_task.done():
            _LOGGER.debug(
                "Previous poll of %s still running, skipping tick",
                self.endpoint.address,
            )
            return

        self._poll_task = self.hass.async_create_task(
            self.async_poll(), f"{DOMAIN} poll {self.endpoint.address}"
        )

    async def async_poll(self) -> None:
        """Run one fetch, translate and publish cycle."""
        try:
            await self._async_poll()
        except Exception:  # pylint: disable=broad-except
            _LOGGER.exception(
                "Unexpected error polling Redhead DAQ at %s", self.endpoint.address
            )

    async def _async_poll(self) -> None:
        try:
            raw = await self.api.async_get_state()
        except RedheadDaqFetchError as err:
            if not self._stopped:
                self._handle_unavailable(err)
            return
        except RedheadDaqTranslationError as err:
            # The module answered, so it counts as available
            if not self._stopped:
                self._handle_available()
                _LOGGER.warning(
                    "Skipping update from %s: %s", self.endpoint.address, err
                )
            return

        if self._stopped:
            return

        self._handle_available()

        try:
            batches = translate_state(raw)
        except RedheadDaqTranslationError as err:
            _LOGGER.warning("Skipping update from %s: %s", self.endpoint.address, err)
            return

        for _entity_kind, observations in batches:
            self._publish(observations)

        _LOGGER.debug(
            "Published %d records from %s", len(batches), self.endpoint.address
        )

    def _handle_available(self) -> None:
        self._set_status(f"Connected to {self.endpoint.address}")

        alarm = self.tracker.record_success()
        if alarm is not None:
            self._publish([alarm])

    def _handle_unavailable(self, err: RedheadDaqFetchError) -> None:
        alarm = self.tracker.record_failure()
        if alarm is not None:
            self._publish([alarm])

        self._set_error(err.message)
        _LOGGER.error("error: %s", err.message)

    def _publish(self, observations: list[Observation]) -> None:
        self._handle_message(self.plugin_id, build_delta(observations))

    def _set_status(self, message: str) -> None:
        if self._set_status_callback is not None:
            self._set_status_callback(message)
        self._update_status_message(message)

    def _set_error(self, message: str) -> None:
        if self._set_error_callback is not None:
            self._set_error_callback(message)
        self._update_status_message(f"error: {message}")

    def _update_status_message(self, message: str) -> None:
        if message == self._status_message:
            return

        self._status_message = message
        for update_callback in list(self._listeners):
            update_callback()
