"""Nominatim reverse-geocode endpoint.

Endpoint: ``GET https://nominatim.openstreetmap.org/reverse``
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from iftarloc._transport import Transport
from iftarloc.config import LocatorConfig
from iftarloc.exceptions import GeocodeResponseError
from iftarloc.models.nominatim import NominatimResponse
from iftarloc.sanitize import format_coordinate

_logger = logging.getLogger(__name__)


def build_reverse_headers(config: LocatorConfig) -> dict[str, str]:
    return {
        "Accept-Language": config.accept_language,
        "User-Agent": config.user_agent,
    }


def build_reverse_params(lat: float, lng: float) -> dict[str, str]:
    return {
        "lat": format_coordinate(lat),
        "lon": format_coordinate(lng),
        "format": "json",
    }


async def reverse_geocode(
    config: LocatorConfig,
    transport: Transport,
    lat: float,
    lng: float,
) -> NominatimResponse:
    """Look up the address at ``(lat, lng)``.

    Raises
    ------
    GeocodeTransportError
        Network failure or non-2xx response.
    GeocodeResponseError
        The response is not a JSON object, or Nominatim reported an error.
    """
    endpoint = config.nominatim_url
    payload = await transport.get_json(
        endpoint,
        build_reverse_params(lat, lng),
        build_reverse_headers(config),
    )

    if not isinstance(payload, dict):
        raise GeocodeResponseError(f"Expected JSON object from {endpoint}", endpoint=endpoint)
    # Nominatim answers 200 with {"error": "..."} when nothing is found.
    if "error" in payload:
        raise GeocodeResponseError(f"{endpoint} error: {payload['error']}", endpoint=endpoint)

    try:
        response = NominatimResponse.model_validate(payload)
    except ValidationError as exc:
        raise GeocodeResponseError(f"Malformed response from {endpoint}", endpoint=endpoint) from exc

    _logger.debug(
        "Nominatim reverse: address keys=%s",
        sorted(k for k, v in response.address.model_dump().items() if v),
    )
    return response
