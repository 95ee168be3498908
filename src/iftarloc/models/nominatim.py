"""Nominatim reverse-geocode response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from iftarloc._normalize import safe_str


class NominatimAddress(BaseModel):
    """Structured address components returned by Nominatim."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    amenity: str | None = None
    road: str | None = None
    suburb: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None

    @field_validator("amenity", "road", "suburb", "city", "state", "country", mode="before")
    @classmethod
    def _coerce_str(cls, value: Any) -> str | None:
        return safe_str(value)


class NominatimResponse(BaseModel):
    """Reverse-geocode result.

    ``address`` is empty (all ``None``) when Nominatim returns no
    structured components, e.g. for open water.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    display_name: str = ""
    address: NominatimAddress = Field(default_factory=NominatimAddress)
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned = dict(values)
        if not isinstance(cleaned.get("address"), dict):
            cleaned.pop("address", None)
        if cleaned.get("display_name") is None:
            cleaned.pop("display_name", None)
        else:
            cleaned["display_name"] = str(cleaned["display_name"])
        cleaned.setdefault("raw", values)
        return cleaned
