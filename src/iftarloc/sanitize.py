"""Validation and sanitization of provider results.

Everything returned by an external geocoder passes through here before
it reaches picker state or the hosting form:

* coordinate pairs are checked for finiteness and range,
* free-text addresses lose control characters, are trimmed and bounded,
* structured address components are assembled in a fixed precedence
  order (named place, street, suburb/city, state).
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from iftarloc._constants import MAX_ADDRESS_LENGTH, UNKNOWN_LOCATION

if TYPE_CHECKING:
    from iftarloc.models.nominatim import NominatimResponse
    from iftarloc.models.photon import PhotonProperties

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def is_valid_coord(lat: Any, lng: Any) -> bool:
    """Return ``True`` iff both values are finite numbers within range."""
    if isinstance(lat, bool) or isinstance(lng, bool):
        return False
    try:
        lat_f = float(lat)
        lng_f = float(lng)
    except (TypeError, ValueError, OverflowError):
        return False
    if not (math.isfinite(lat_f) and math.isfinite(lng_f)):
        return False
    return -90.0 <= lat_f <= 90.0 and -180.0 <= lng_f <= 180.0


def sanitise_address(raw: str | None, *, max_length: int = MAX_ADDRESS_LENGTH) -> str:
    """Strip control characters, trim, and truncate to *max_length*."""
    if not raw:
        return ""
    return _CONTROL_CHARS.sub("", raw).strip()[:max_length]


def _join_parts(*parts: str | None) -> str:
    return ", ".join(part for part in parts if part)


def build_readable_address(props: PhotonProperties, *, max_length: int = MAX_ADDRESS_LENGTH) -> str:
    """Assemble a Photon feature label: name, street, city, state."""
    joined = _join_parts(props.name, props.street, props.city, props.state)
    return sanitise_address(joined or UNKNOWN_LOCATION, max_length=max_length)


def build_reverse_address(response: NominatimResponse, *, max_length: int = MAX_ADDRESS_LENGTH) -> str:
    """Assemble a Nominatim label.

    Uses amenity, road, suburb, city, state; falls back to the provider's
    ``display_name`` when no structured component is present.
    """
    addr = response.address
    joined = _join_parts(addr.amenity, addr.road, addr.suburb, addr.city, addr.state)
    return sanitise_address(joined or response.display_name, max_length=max_length)


def format_coordinate(value: float) -> str:
    """Render a coordinate the way ``Number.prototype.toString`` does.

    Uses the shortest round-tripping digits. Fixed notation covers
    magnitudes from ``1e-6`` up to ``1e21``; outside that range the
    exponent is written without padding (``1e-7``, ``1e+21``).
    """
    number = float(value)
    if number == 0:
        return "0"
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"

    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k  # position of the decimal point

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"
    e = n - 1
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def format_coordinate_fallback(lat: float, lng: float) -> str:
    """Label used when no readable address could be obtained."""
    return f"{float(lat):.5f}, {float(lng):.5f}"
