from __future__ import annotations

import math

import pytest

from iftarloc.models.nominatim import NominatimResponse
from iftarloc.models.photon import PhotonProperties
from iftarloc.sanitize import (
    build_readable_address,
    build_reverse_address,
    format_coordinate,
    format_coordinate_fallback,
    is_valid_coord,
    sanitise_address,
)


@pytest.mark.parametrize(
    ("lat", "lng", "expected"),
    [
        (25.2, 55.3, True),
        (90, 180, True),
        (-90, -180, True),
        (0, 0, True),
        (90.0001, 0, False),
        (-90.0001, 0, False),
        (0, 180.0001, False),
        (0, -180.0001, False),
        (math.nan, 55.3, False),
        (25.2, math.inf, False),
        (-math.inf, 0, False),
        ("25.2", "55.3", True),
        ("abc", 55.3, False),
        (None, 55.3, False),
        (True, 55.3, False),
        (10**400, 0, False),
    ],
)
def test_is_valid_coord(lat: object, lng: object, expected: bool) -> None:
    assert is_valid_coord(lat, lng) is expected


def test_sanitise_address_strips_control_characters_and_trims() -> None:
    raw = "  Al\x00 Fahidi\x1f Street\x7f, Dubai\n\t "
    assert sanitise_address(raw) == "Al Fahidi Street, Dubai"


def test_sanitise_address_bounds_length() -> None:
    raw = "\x01" + "x" * 500
    cleaned = sanitise_address(raw)
    assert len(cleaned) == 300
    assert all(ord(ch) > 0x1F and ord(ch) != 0x7F for ch in cleaned)


def test_sanitise_address_handles_empty() -> None:
    assert sanitise_address("") == ""
    assert sanitise_address(None) == ""
    assert sanitise_address("\x00\x1f") == ""


def test_photon_address_precedence() -> None:
    props = PhotonProperties(
        name="Al Ustad Special Kabab",
        street="Al Musalla Road",
        city="Dubai",
        state="Dubai",
        country="United Arab Emirates",
        postcode="00000",
    )
    assert build_readable_address(props) == "Al Ustad Special Kabab, Al Musalla Road, Dubai, Dubai"


def test_photon_address_skips_missing_parts() -> None:
    assert build_readable_address(PhotonProperties(street="Corniche Road", state="Abu Dhabi")) == (
        "Corniche Road, Abu Dhabi"
    )


def test_photon_address_unknown_when_no_components() -> None:
    assert build_readable_address(PhotonProperties(country="United Arab Emirates")) == "Unknown location"


def test_reverse_address_prefers_structured_components() -> None:
    response = NominatimResponse.model_validate(
        {
            "display_name": "ignored",
            "address": {"amenity": "Etihad Museum", "road": "Jumeirah Street", "city": "Dubai", "state": "Dubai"},
        }
    )
    assert build_reverse_address(response) == "Etihad Museum, Jumeirah Street, Dubai, Dubai"


def test_reverse_address_falls_back_to_display_name() -> None:
    response = NominatimResponse.model_validate(
        {"display_name": "Arabian Gulf\x07, United Arab Emirates", "address": {"country": "United Arab Emirates"}}
    )
    assert build_reverse_address(response) == "Arabian Gulf, United Arab Emirates"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (25.2, "25.2"),
        (55.0, "55"),
        (-0.5, "-0.5"),
        (25.1972, "25.1972"),
        (0.0, "0"),
        (-0.0, "0"),
        (1e-06, "0.000001"),
        (1e-07, "1e-7"),
        (-2.5e-08, "-2.5e-8"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
    ],
)
def test_format_coordinate_matches_js_rendering(value: float, expected: str) -> None:
    assert format_coordinate(value) == expected


def test_coordinate_fallback_uses_five_decimals() -> None:
    assert format_coordinate_fallback(25.2, 55.3) == "25.20000, 55.30000"
    assert format_coordinate_fallback(-1.234567, 3) == "-1.23457, 3.00000"
