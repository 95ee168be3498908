"""Three-mode location picker.

Search, map pin and GPS all converge on :meth:`LocationPicker.notify`,
so the hosting form receives the same ``ResolvedLocation`` regardless of
which mode produced it.

State is only mutated from the event loop thread. Requests issued by the
pin-drop and GPS flows are not guarded against overlap: if triggered
repeatedly, the last one to resolve wins unless
``LocatorConfig.discard_stale_results`` is set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from iftarloc._constants import MSG_ADDRESS_FAILED
from iftarloc.client import GeocodeClient
from iftarloc.config import LocatorConfig
from iftarloc.debounce import Debouncer
from iftarloc.exceptions import DeviceLocationError, GeocodeError, PositionUnavailableError
from iftarloc.geolocation import error_message_for
from iftarloc.models.location import ResolvedLocation
from iftarloc.models.photon import PhotonFeature
from iftarloc.models.tab import PickerTab
from iftarloc.sanitize import build_readable_address, format_coordinate_fallback, is_valid_coord

_logger = logging.getLogger(__name__)


class LocationPicker:
    """Stateful controller behind a location input widget.

    Parameters
    ----------
    client : GeocodeClient
        An initialized client (inside its ``async with`` block).
    on_change : callable
        Called with the address text on every resolution.
    on_location_fetched : callable, optional
        Called with the full :class:`ResolvedLocation` on every resolution.
    config : LocatorConfig, optional
        Defaults to the client's configuration.
    """

    def __init__(
        self,
        client: GeocodeClient,
        *,
        on_change: Callable[[str], None],
        on_location_fetched: Callable[[ResolvedLocation], None] | None = None,
        config: LocatorConfig | None = None,
    ) -> None:
        self._client = client
        self._config = config or client.config
        self._on_change = on_change
        self._on_location_fetched = on_location_fetched
        self._debouncer = Debouncer(self._config.debounce_delay)
        self._search_seq = 0
        self._resolve_seq = 0

        self.active_tab = PickerTab.SEARCH
        self.error: str | None = None

        self.search_query = ""
        self.search_results: list[PhotonFeature] = []
        self.is_searching = False

        self.map_lat: float | None = None
        self.map_lng: float | None = None
        self.is_reverse_geocoding = False

        self.is_loading = False

        self.confirmed_address = ""
        self.location: ResolvedLocation | None = None

    async def __aenter__(self) -> LocationPicker:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Tear down: cancel any pending search and drop transient state."""
        self._debouncer.cancel()
        self.search_results = []
        self.location = None

    async def wait_idle(self) -> None:
        """Wait until debounced searches have settled."""
        await self._debouncer.wait_idle()

    # ------------------------------------------------------------------
    # Tab controller
    # ------------------------------------------------------------------

    def select_tab(self, tab: PickerTab | str) -> None:
        """Switch input mode; clears the error, keeps the confirmed location."""
        self.active_tab = PickerTab(tab)
        self.error = None

    def notify(self, location: ResolvedLocation) -> None:
        """Publish a resolution to the hosting form."""
        self._on_change(location.address)
        self.confirmed_address = location.address
        self.location = location
        if self._on_location_fetched is not None:
            self._on_location_fetched(location)
        self.error = None

    # ------------------------------------------------------------------
    # Search mode
    # ------------------------------------------------------------------

    @property
    def search_pending(self) -> bool:
        return self._debouncer.pending

    def set_search_query(self, text: str) -> None:
        """Record a keystroke; dispatches a search once typing pauses.

        Must be called from a running event loop.
        """
        self.search_query = text
        self._debouncer.cancel()

        if len(text.strip()) < self._config.min_query_length:
            self.search_results = []
            return

        self._debouncer.schedule(lambda: self._run_search(text))

    async def _run_search(self, query: str) -> None:
        self._search_seq += 1
        seq = self._search_seq
        self.is_searching = True
        try:
            results = await self._client.search(query)
        finally:
            if seq == self._search_seq:
                self.is_searching = False

        if self._config.discard_stale_results and seq != self._search_seq:
            _logger.debug("Discarding stale search results (seq=%d latest=%d)", seq, self._search_seq)
            return
        self.search_results = [feature for feature in results if feature.is_valid]

    def select_result(self, feature: PhotonFeature) -> ResolvedLocation | None:
        """Confirm a search candidate. Malformed candidates are ignored."""
        coords = feature.coordinates
        if coords is None:
            _logger.debug("Ignoring selection with invalid coordinates")
            return None
        lat, lng = coords
        address = build_readable_address(feature.properties, max_length=self._config.max_address_length)
        # Cancel any queued search so selecting does not trigger a new one.
        self._debouncer.cancel()
        self.search_query = address
        self.search_results = []
        location = ResolvedLocation.from_coordinates(
            address, lat, lng, max_address_length=self._config.max_address_length
        )
        self.notify(location)
        return location

    # ------------------------------------------------------------------
    # Map mode
    # ------------------------------------------------------------------

    async def drop_pin(self, lat: float, lng: float) -> ResolvedLocation | None:
        """Resolve a map click.

        The coordinates are kept even when no readable address can be
        obtained: the label then falls back to the formatted pair.
        """
        if not is_valid_coord(lat, lng):
            _logger.debug("Ignoring pin drop with invalid coordinates")
            return None

        self._resolve_seq += 1
        seq = self._resolve_seq
        self.map_lat = lat
        self.map_lng = lng
        self.is_reverse_geocoding = True
        self.error = None

        try:
            address = await self._client.lookup_address(lat, lng)
        except GeocodeError:
            _logger.debug("Pin reverse geocode failed; using coordinates", exc_info=True)
            address = ""
        finally:
            self.is_reverse_geocoding = False

        if self._is_stale(seq):
            return None
        location = ResolvedLocation.from_coordinates(
            address or format_coordinate_fallback(lat, lng),
            lat,
            lng,
            max_address_length=self._config.max_address_length,
        )
        self.notify(location)
        return location

    # ------------------------------------------------------------------
    # GPS mode
    # ------------------------------------------------------------------

    async def fetch_gps_location(self) -> ResolvedLocation | None:
        """Resolve the device's current position.

        Device failures and address lookup failures set :attr:`error` and
        leave any previously confirmed location untouched.
        """
        self.is_loading = True
        self.error = None
        self._resolve_seq += 1
        seq = self._resolve_seq

        try:
            position = await self._client.current_position()
            lat, lng = position.latitude, position.longitude
            if not is_valid_coord(lat, lng):
                raise PositionUnavailableError("device reported invalid coordinates")
            address = await self._client.lookup_address(lat, lng)
        except DeviceLocationError as exc:
            _logger.debug("Device location failed: %s", exc)
            if not self._is_stale(seq):
                self.error = error_message_for(exc)
            return None
        except GeocodeError:
            _logger.debug("GPS reverse geocode failed", exc_info=True)
            if not self._is_stale(seq):
                self.error = MSG_ADDRESS_FAILED
            return None
        finally:
            self.is_loading = False

        if self._is_stale(seq):
            return None
        location = ResolvedLocation.from_coordinates(
            address or format_coordinate_fallback(lat, lng),
            lat,
            lng,
            max_address_length=self._config.max_address_length,
        )
        self.notify(location)
        # Keep the map pin in sync for a later switch to the map tab.
        self.map_lat = lat
        self.map_lng = lng
        return location

    def _is_stale(self, seq: int) -> bool:
        if self._config.discard_stale_results and seq != self._resolve_seq:
            _logger.debug("Discarding stale resolution (seq=%d latest=%d)", seq, self._resolve_seq)
            return True
        return False
