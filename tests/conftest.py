from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from iftarloc._constants import NOMINATIM_REVERSE_URL, PHOTON_URL
from iftarloc.exceptions import GeocodeTransportError
from iftarloc.models.position import DevicePosition, PositionOptions

BURJ_FEATURE: dict[str, Any] = {
    "type": "Feature",
    "properties": {
        "name": "Burj Khalifa",
        "street": "Sheikh Mohammed bin Rashid Boulevard",
        "city": "Dubai",
        "state": "Dubai Emirate",
        "country": "United Arab Emirates",
    },
    "geometry": {"type": "Point", "coordinates": [55.2744, 25.1972]},
}

JUMEIRAH_REVERSE: dict[str, Any] = {
    "display_name": "Al Wasl Road, Jumeirah 1, Dubai, United Arab Emirates",
    "address": {
        "road": "Al Wasl Road",
        "suburb": "Jumeirah 1",
        "city": "Dubai",
        "state": "Dubai",
        "country": "United Arab Emirates",
    },
}


@dataclass
class FakeGeocoder:
    """In-memory stand-in for both providers, implementing ``Transport``."""

    search_payload: Any = field(default_factory=lambda: {"features": [BURJ_FEATURE]})
    reverse_payload: Any = field(default_factory=lambda: dict(JUMEIRAH_REVERSE))
    fail_search: bool = False
    fail_reverse: bool = False
    search_gates: dict[str, asyncio.Event] = field(default_factory=dict)
    search_payloads: dict[str, Any] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, str], dict[str, str] | None]] = field(default_factory=list)

    def calls_to(self, url: str) -> list[dict[str, str]]:
        return [params for called_url, params, _headers in self.calls if called_url == url]

    @property
    def search_queries(self) -> list[str]:
        return [params["q"] for params in self.calls_to(PHOTON_URL)]

    async def get_json(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        self.calls.append((url, dict(params), dict(headers) if headers is not None else None))

        if url == PHOTON_URL:
            gate = self.search_gates.get(params["q"])
            if gate is not None:
                await gate.wait()
            if self.fail_search:
                raise GeocodeTransportError("HTTP 502 from photon", status_code=502, endpoint=url)
            return self.search_payloads.get(params["q"], self.search_payload)

        if url == NOMINATIM_REVERSE_URL:
            if self.fail_reverse:
                raise GeocodeTransportError("connection reset", endpoint=url)
            return self.reverse_payload

        raise AssertionError(f"unexpected url {url}")


class StaticSource:
    """Position source returning a fixed position or raising a fixed error."""

    def __init__(self, position: DevicePosition | None = None, error: Exception | None = None, delay: float = 0.0):
        self.position = position
        self.error = error
        self.delay = delay
        self.options: list[PositionOptions] = []

    async def get_current_position(self, options: PositionOptions) -> DevicePosition:
        self.options.append(options)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        assert self.position is not None
        return self.position


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()
