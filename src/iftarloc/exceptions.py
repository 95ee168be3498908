"""Custom exception hierarchy for iftarloc."""

from __future__ import annotations


class LocatorError(Exception):
    """Base exception for all iftarloc errors."""


class LocatorConfigError(LocatorError):
    """Invalid or missing configuration."""


class GeocodeError(LocatorError):
    """A geocoding provider call failed."""


class GeocodeTransportError(GeocodeError):
    """HTTP-level failure (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class GeocodeResponseError(GeocodeError):
    """Provider answered, but the body is not the expected JSON shape."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class InvalidCoordinatesError(LocatorError, ValueError):
    """Coordinate pair is non-finite or outside the valid range."""

    def __init__(self, latitude: object, longitude: object) -> None:
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(f"invalid coordinate pair: lat={latitude!r} lng={longitude!r}")


class DeviceLocationError(LocatorError):
    """The device location capability failed.

    ``code`` follows the platform geolocation error codes
    (1 = permission denied, 2 = position unavailable, 3 = timeout);
    ``0`` is used when no code applies.
    """

    code: int = 0

    def __init__(self, message: str = "", *, code: int | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(message or type(self).__doc__ or "device location failed")


class PermissionDeniedError(DeviceLocationError):
    """User declined the location permission prompt."""

    code = 1


class PositionUnavailableError(DeviceLocationError):
    """Device could not determine its position."""

    code = 2


class PositionTimeoutError(DeviceLocationError):
    """No position was obtained before the request timeout."""

    code = 3


class GeolocationUnsupportedError(DeviceLocationError):
    """No device location capability is available."""
