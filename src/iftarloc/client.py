"""High-level async client for location resolution."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from iftarloc._api import nominatim as _nominatim_api
from iftarloc._api import photon as _photon_api
from iftarloc._transport import HttpTransport, Transport
from iftarloc.config import LocatorConfig
from iftarloc.exceptions import (
    DeviceLocationError,
    GeocodeError,
    GeolocationUnsupportedError,
    InvalidCoordinatesError,
    LocatorError,
    PositionTimeoutError,
)
from iftarloc.geolocation import PositionSource
from iftarloc.models.location import ResolvedLocation
from iftarloc.models.nominatim import NominatimResponse
from iftarloc.models.photon import PhotonFeature
from iftarloc.models.position import DevicePosition, PositionOptions
from iftarloc.sanitize import build_reverse_address, format_coordinate_fallback, is_valid_coord

_logger = logging.getLogger(__name__)


class GeocodeClient:
    """Async client for forward search, reverse lookup and device location.

    Usage::

        async with GeocodeClient(config) as client:
            features = await client.search("Burj Khalifa")
            address = await client.describe(25.1972, 55.2744)
    """

    def __init__(
        self,
        config: LocatorConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        position_source: PositionSource | None = None,
    ) -> None:
        self._config = config or LocatorConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._position_source = position_source

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GeocodeClient:
        if not self._external_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    @property
    def config(self) -> LocatorConfig:
        return self._config

    @property
    def supports_geolocation(self) -> bool:
        return self._position_source is not None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise LocatorError("Client not initialized. Use 'async with GeocodeClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Forward search
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[PhotonFeature]:
        """Return up to ``search_limit`` candidates for *query*.

        Failures are logged and yield an empty list.
        """
        return await _photon_api.search_places(self._config, self._require_transport(), query)

    # ------------------------------------------------------------------
    # Reverse lookup
    # ------------------------------------------------------------------

    async def reverse_geocode(self, lat: float, lng: float) -> NominatimResponse:
        """Raw reverse-geocode result for ``(lat, lng)``.

        Raises
        ------
        InvalidCoordinatesError
            If the pair is non-finite or out of range.
        GeocodeError
            On transport or response failures.
        """
        if not is_valid_coord(lat, lng):
            raise InvalidCoordinatesError(lat, lng)
        return await _nominatim_api.reverse_geocode(self._config, self._require_transport(), lat, lng)

    async def lookup_address(self, lat: float, lng: float) -> str:
        """Readable address for ``(lat, lng)``; raises on provider failure."""
        response = await self.reverse_geocode(lat, lng)
        return build_reverse_address(response, max_length=self._config.max_address_length)

    async def describe(self, lat: float, lng: float) -> str:
        """Best-effort address for ``(lat, lng)``.

        Falls back to the coordinate pair formatted to 5 decimals when the
        lookup fails or yields no usable label.
        """
        if not is_valid_coord(lat, lng):
            raise InvalidCoordinatesError(lat, lng)
        try:
            address = await self.lookup_address(lat, lng)
        except GeocodeError:
            _logger.debug("Reverse geocode failed; using coordinate fallback", exc_info=True)
            address = ""
        return address or format_coordinate_fallback(lat, lng)

    async def resolve_coordinates(self, lat: float, lng: float) -> ResolvedLocation:
        """Resolve a coordinate pair, always yielding a location for valid input."""
        address = await self.describe(lat, lng)
        return ResolvedLocation.from_coordinates(
            address, lat, lng, max_address_length=self._config.max_address_length
        )

    # ------------------------------------------------------------------
    # Device location
    # ------------------------------------------------------------------

    def default_position_options(self) -> PositionOptions:
        return PositionOptions(
            enable_high_accuracy=self._config.gps_high_accuracy,
            timeout=self._config.gps_timeout,
            maximum_age=self._config.gps_maximum_age,
        )

    async def current_position(self, options: PositionOptions | None = None) -> DevicePosition:
        """Ask the position source for the device's current coordinates.

        Raises
        ------
        GeolocationUnsupportedError
            No position source is configured.
        PermissionDeniedError, PositionUnavailableError, PositionTimeoutError
            Classified device failures. Nothing is retried.
        """
        if self._position_source is None:
            raise GeolocationUnsupportedError("no position source configured")
        opts = options or self.default_position_options()
        try:
            position = await asyncio.wait_for(
                self._position_source.get_current_position(opts),
                timeout=opts.timeout,
            )
        except TimeoutError as exc:
            raise PositionTimeoutError(f"no position within {opts.timeout}s") from exc
        except LocatorError:
            raise
        except Exception as exc:
            raise DeviceLocationError(f"position source failed: {exc!r}") from exc
        _logger.debug("Device position obtained (accuracy=%s)", position.accuracy)
        return position
