"""Resolved location model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator, model_validator

from iftarloc._constants import MAX_ADDRESS_LENGTH
from iftarloc.sanitize import format_coordinate, is_valid_coord, sanitise_address


class ResolvedLocation(BaseModel):
    """A confirmed place, ready to be handed to the hosting form.

    Produced by every input mode (search, map pin, GPS). Instances are
    immutable; a new resolution replaces the previous one.

    Parameters
    ----------
    address : str
        Human-readable label. Control characters are stripped and the
        value is trimmed and bounded on construction, to
        ``MAX_ADDRESS_LENGTH`` unless a ``max_address_length`` is passed
        in the validation context.
    latitude : str
        Latitude in degrees, rendered as text.
    longitude : str
        Longitude in degrees, rendered as text.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    address: str
    latitude: str
    longitude: str

    @field_validator("address", mode="before")
    @classmethod
    def _sanitise_address(cls, value: Any, info: ValidationInfo) -> str:
        max_length = (info.context or {}).get("max_address_length", MAX_ADDRESS_LENGTH)
        return sanitise_address(value if isinstance(value, str) else str(value or ""), max_length=max_length)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_coordinate(value)
        return value

    @model_validator(mode="after")
    def _check_range(self) -> ResolvedLocation:
        if not is_valid_coord(self.latitude, self.longitude):
            raise ValueError(f"coordinates out of range: lat={self.latitude!r} lng={self.longitude!r}")
        return self

    @classmethod
    def from_coordinates(
        cls,
        address: str,
        latitude: float,
        longitude: float,
        *,
        max_address_length: int = MAX_ADDRESS_LENGTH,
    ) -> ResolvedLocation:
        """Build a location from numeric coordinates."""
        return cls.model_validate(
            {
                "address": address,
                "latitude": format_coordinate(latitude),
                "longitude": format_coordinate(longitude),
            },
            context={"max_address_length": max_address_length},
        )

    @property
    def lat(self) -> float:
        return float(self.latitude)

    @property
    def lng(self) -> float:
        return float(self.longitude)
