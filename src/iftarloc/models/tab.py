"""Picker input modes."""

from __future__ import annotations

from enum import StrEnum


class PickerTab(StrEnum):
    SEARCH = "search"
    MAP = "map"
    GPS = "gps"
