"""Photon forward-search response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from iftarloc._normalize import safe_float, safe_str
from iftarloc.sanitize import build_readable_address, is_valid_coord


class PhotonProperties(BaseModel):
    """Structured address components of a Photon feature."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postcode: str | None = None

    @field_validator("name", "street", "city", "state", "country", "postcode", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)


class PhotonGeometry(BaseModel):
    """GeoJSON point geometry; ``coordinates`` is ``[lng, lat]``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    coordinates: list[float | None] = Field(default_factory=list)

    @field_validator("coordinates", mode="before")
    @classmethod
    def _coerce_coordinates(cls, value: Any) -> list[float | None]:
        if not isinstance(value, (list, tuple)):
            return []
        return [safe_float(item) for item in value]


class PhotonFeature(BaseModel):
    """A single forward-search candidate.

    Parameters
    ----------
    properties : PhotonProperties
        Address components.
    geometry : PhotonGeometry
        Point geometry in ``[lng, lat]`` order.
    raw : dict
        Original feature dict.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    properties: PhotonProperties = Field(default_factory=PhotonProperties)
    geometry: PhotonGeometry = Field(default_factory=PhotonGeometry)
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def coordinates(self) -> tuple[float, float] | None:
        """``(lat, lng)`` or ``None`` when the geometry is malformed."""
        coords = self.geometry.coordinates
        if len(coords) < 2:
            return None
        lng, lat = coords[0], coords[1]
        if lat is None or lng is None or not is_valid_coord(lat, lng):
            return None
        return (lat, lng)

    @property
    def is_valid(self) -> bool:
        return self.coordinates is not None

    @property
    def label(self) -> str:
        return build_readable_address(self.properties)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PhotonFeature:
        """Parse a raw GeoJSON feature dict."""
        properties = data.get("properties")
        geometry = data.get("geometry")
        return cls(
            properties=properties if isinstance(properties, dict) else {},
            geometry=geometry if isinstance(geometry, dict) else {},
            raw=data,
        )
