"""Device location capability.

The platform location API (browser, OS service, GPS daemon) is reached
through :class:`PositionSource`. Sources report failures with the standard
geolocation error codes; :func:`raise_for_position_error` maps a code to
the matching exception and :func:`error_message_for` turns any failure
into the short message shown to the user.
"""

from __future__ import annotations

import enum
import logging
import time
from typing import NoReturn, Protocol

from iftarloc._constants import (
    MSG_GEOLOCATION_UNSUPPORTED,
    MSG_PERMISSION_DENIED,
    MSG_POSITION_GENERIC,
    MSG_POSITION_TIMEOUT,
    MSG_POSITION_UNAVAILABLE,
)
from iftarloc.exceptions import (
    DeviceLocationError,
    GeolocationUnsupportedError,
    PermissionDeniedError,
    PositionTimeoutError,
    PositionUnavailableError,
)
from iftarloc.models.position import DevicePosition, PositionOptions

_logger = logging.getLogger(__name__)


class PositionErrorCode(enum.IntEnum):
    UNKNOWN = 0
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    @classmethod
    def _missing_(cls, value: object) -> PositionErrorCode:
        return cls.UNKNOWN


_ERROR_CLASSES: dict[PositionErrorCode, type[DeviceLocationError]] = {
    PositionErrorCode.PERMISSION_DENIED: PermissionDeniedError,
    PositionErrorCode.POSITION_UNAVAILABLE: PositionUnavailableError,
    PositionErrorCode.TIMEOUT: PositionTimeoutError,
}


class PositionSource(Protocol):
    """Anything able to report the device's current position."""

    async def get_current_position(self, options: PositionOptions) -> DevicePosition:
        ...


def raise_for_position_error(code: int, message: str = "") -> NoReturn:
    """Raise the exception matching a platform geolocation error *code*."""
    error_code = PositionErrorCode(code)
    exc_cls = _ERROR_CLASSES.get(error_code, DeviceLocationError)
    raise exc_cls(message, code=int(error_code))


def error_message_for(exc: BaseException) -> str:
    """User-facing message for a device location failure."""
    if isinstance(exc, GeolocationUnsupportedError):
        return MSG_GEOLOCATION_UNSUPPORTED
    if isinstance(exc, PermissionDeniedError):
        return MSG_PERMISSION_DENIED
    if isinstance(exc, PositionUnavailableError):
        return MSG_POSITION_UNAVAILABLE
    if isinstance(exc, PositionTimeoutError):
        return MSG_POSITION_TIMEOUT
    return MSG_POSITION_GENERIC


class FixedPositionSource:
    """Position source that always reports the same coordinate.

    Useful for kiosks and scripts where the device location is known in
    advance. Built without coordinates it behaves like a device that
    cannot obtain a fix.
    """

    def __init__(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        *,
        accuracy: float | None = None,
    ) -> None:
        self._latitude = latitude
        self._longitude = longitude
        self._accuracy = accuracy

    async def get_current_position(self, options: PositionOptions) -> DevicePosition:
        if self._latitude is None or self._longitude is None:
            raise_for_position_error(PositionErrorCode.POSITION_UNAVAILABLE, "no fixed position configured")
        _logger.debug("Reporting fixed position (high_accuracy=%s)", options.enable_high_accuracy)
        return DevicePosition(
            latitude=self._latitude,
            longitude=self._longitude,
            accuracy=self._accuracy,
            timestamp=time.time(),
        )
