"""Typed models for geocoding responses and resolved locations."""

from iftarloc.models.location import ResolvedLocation
from iftarloc.models.nominatim import NominatimAddress, NominatimResponse
from iftarloc.models.photon import PhotonFeature, PhotonGeometry, PhotonProperties
from iftarloc.models.position import DevicePosition, PositionOptions
from iftarloc.models.tab import PickerTab

__all__ = [
    "DevicePosition",
    "NominatimAddress",
    "NominatimResponse",
    "PhotonFeature",
    "PhotonGeometry",
    "PhotonProperties",
    "PickerTab",
    "PositionOptions",
    "ResolvedLocation",
]
