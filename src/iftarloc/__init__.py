"""iftarloc - Async location resolution for community place listings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("iftarloc")
except PackageNotFoundError:
    __version__ = "0+local"
from iftarloc.client import GeocodeClient
from iftarloc.config import LocatorConfig
from iftarloc.debounce import Debouncer, ScheduledCall
from iftarloc.exceptions import (
    DeviceLocationError,
    GeocodeError,
    GeocodeResponseError,
    GeocodeTransportError,
    GeolocationUnsupportedError,
    InvalidCoordinatesError,
    LocatorConfigError,
    LocatorError,
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnavailableError,
)
from iftarloc.geolocation import FixedPositionSource, PositionErrorCode, PositionSource, error_message_for
from iftarloc.models import (
    DevicePosition,
    NominatimAddress,
    NominatimResponse,
    PhotonFeature,
    PhotonGeometry,
    PhotonProperties,
    PickerTab,
    PositionOptions,
    ResolvedLocation,
)
from iftarloc.picker import LocationPicker
from iftarloc.sanitize import (
    build_readable_address,
    build_reverse_address,
    format_coordinate_fallback,
    is_valid_coord,
    sanitise_address,
)

__all__ = [
    "__version__",
    "Debouncer",
    "DeviceLocationError",
    "DevicePosition",
    "FixedPositionSource",
    "GeocodeClient",
    "GeocodeError",
    "GeocodeResponseError",
    "GeocodeTransportError",
    "GeolocationUnsupportedError",
    "InvalidCoordinatesError",
    "LocationPicker",
    "LocatorConfig",
    "LocatorConfigError",
    "LocatorError",
    "NominatimAddress",
    "NominatimResponse",
    "PermissionDeniedError",
    "PhotonFeature",
    "PhotonGeometry",
    "PhotonProperties",
    "PickerTab",
    "PositionErrorCode",
    "PositionOptions",
    "PositionSource",
    "PositionTimeoutError",
    "PositionUnavailableError",
    "ResolvedLocation",
    "ScheduledCall",
    "build_readable_address",
    "build_reverse_address",
    "error_message_for",
    "format_coordinate_fallback",
    "is_valid_coord",
    "sanitise_address",
]
