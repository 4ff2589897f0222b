"""API client for the Redhead DAQ module."""

from __future__ import annotations

from http import HTTPStatus
import logging
from typing import Any

import aiohttp
from aiohttp import ClientTimeout
from aiohttp.client_exceptions import ClientError

from homeassistant.exceptions import HomeAssistantError

from .const import FETCH_TIMEOUT, STATE_ENDPOINT
from .models import RawDeviceState

_LOGGER = logging.getLogger(__name__)


class RedheadDaqError(HomeAssistantError):
    """Base exception for the Redhead DAQ integration."""


class RedheadDaqFetchError(RedheadDaqError):
    """Exception to indicate the state request did not succeed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        """Initialize the error with the HTTP status received, if any."""
        super().__init__(message)
        self.message = message
        self.status = status


class RedheadDaqConnectionError(RedheadDaqFetchError):
    """Exception to indicate a connection error occurred."""


class RedheadDaqStatusError(RedheadDaqFetchError):
    """Exception to indicate the module answered with a non-200 status."""

    def __init__(self, url: str, status: int) -> None:
        """Initialize the error from the offending status."""
        super().__init__(f"Unexpected response status {status} from {url}", status)


class RedheadDaqTranslationError(RedheadDaqError):
    """Exception to indicate the module returned a payload we cannot read."""


class RedheadDaqApiClient:
    """API client for a Redhead DAQ module."""

    def __init__(
        self, address: str, session: aiohttp.ClientSession | None = None
    ) -> None:
        """Initialize the API client.

        Args:
            address: IP address or hostname of the DAQ module
            session: Shared aiohttp session; a private one is created if omitted

        """
        self.address = address
        self.base_url = f"http://{address}"
        self._close_session = session is None
        self._session = session or aiohttp.ClientSession()

    @property
    def state_url(self) -> str:
        """Return the URL polled for device state."""
        return f"{self.base_url}{STATE_ENDPOINT}"

    async def async_validate_connection(self) -> bool:
        """Test if we can read state from the DAQ module.

        Returns:
            True if the state endpoint answered with a readable payload

        Raises:
            RedheadDaqFetchError: If the request fails
            RedheadDaqTranslationError: If the payload cannot be decoded

        """
        try:
            await self.async_get_state()
        except RedheadDaqFetchError:
            _LOGGER.error("Failed to connect to Redhead DAQ at %s", self.address)
            raise
        else:
            return True

    async def async_get_state(self) -> RawDeviceState:
        """Fetch the current light and group state.

        Returns:
            Decoded payload keyed by collection name

        Raises:
            RedheadDaqConnectionError: If the module cannot be reached
            RedheadDaqStatusError: If the module answers with a status other than 200
            RedheadDaqTranslationError: If the body is not a JSON object

        """
        url = self.state_url
        try:
            async with self._session.get(
                url, timeout=ClientTimeout(total=FETCH_TIMEOUT)
            ) as response:
                if response.status != HTTPStatus.OK:
                    raise RedheadDaqStatusError(url, response.status)
                # The module labels its JSON body inconsistently, so skip the check
                data: Any = await response.json(content_type=None)
        except TimeoutError as err:
            raise RedheadDaqConnectionError(
                f"Timed out after {FETCH_TIMEOUT} seconds waiting for {url}"
            ) from err
        except ClientError as err:
            raise RedheadDaqConnectionError(
                f"Failed to connect to {url}: {err}"
            ) from err
        except ValueError as err:
            raise RedheadDaqTranslationError(
                f"Invalid response from Redhead DAQ: {err}"
            ) from err

        if not isinstance(data, dict):
            raise RedheadDaqTranslationError(
                f"Expected a JSON object from {url}, got {type(data).__name__}"
            )
        return data

    async def async_close(self) -> None:
        """Close the API client session if we own it."""
        if self._close_session and not self._session.closed:
            await self._session.close()
