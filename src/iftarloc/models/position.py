"""Device position models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PositionOptions(BaseModel):
    """Options passed to a position source.

    Parameters
    ----------
    enable_high_accuracy : bool
        Request the most accurate fix the device can provide.
    timeout : float
        Seconds to wait for a position before giving up.
    maximum_age : float
        Maximum age in seconds of a cached position that may be returned.
        ``0`` means a fresh fix is always required.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_high_accuracy: bool = True
    timeout: float = Field(default=10.0, gt=0)
    maximum_age: float = Field(default=0.0, ge=0)


class DevicePosition(BaseModel):
    """A position reported by the device."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    latitude: float
    longitude: float
    accuracy: float | None = None
    timestamp: float | None = None
