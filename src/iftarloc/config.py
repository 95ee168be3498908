"""Client configuration for iftarloc."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from iftarloc._constants import (
    ACCEPT_LANGUAGE,
    DEBOUNCE_DELAY_S,
    GPS_MAXIMUM_AGE_S,
    GPS_TIMEOUT_S,
    MAX_ADDRESS_LENGTH,
    MIN_QUERY_LENGTH,
    NOMINATIM_REVERSE_URL,
    PHOTON_URL,
    REQUEST_TIMEOUT_S,
    SEARCH_LIMIT,
    UAE_BBOX,
    USER_AGENT,
)
from iftarloc.exceptions import LocatorConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_bbox(value: str) -> tuple[float, float, float, float]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 4:
        raise LocatorConfigError(f"bbox must have 4 comma-separated values, got {value!r}")
    try:
        min_lon, min_lat, max_lon, max_lat = (float(part) for part in parts)
    except ValueError as exc:
        raise LocatorConfigError(f"bbox values must be numeric, got {value!r}") from exc
    return (min_lon, min_lat, max_lon, max_lat)


@dataclasses.dataclass(frozen=True)
class LocatorConfig:
    """Location resolution configuration.

    Parameters
    ----------
    photon_url : str
        Photon forward-search endpoint.
    nominatim_url : str
        Nominatim reverse-geocode endpoint.
    user_agent : str
        ``User-Agent`` sent to Nominatim (required by its usage policy).
    accept_language : str
        ``Accept-Language`` header and Photon ``lang`` parameter.
    search_limit : int
        Maximum number of forward-search candidates.
    bbox : tuple of float
        ``(min_lon, min_lat, max_lon, max_lat)`` box used to bias search
        results. Defaults to the UAE.
    debounce_delay : float
        Seconds of typing inactivity before a search is dispatched.
    min_query_length : int
        Queries shorter than this (after trimming) never hit the network.
    max_address_length : int
        Sanitized addresses are truncated to this many characters.
    request_timeout : float
        Total per-request HTTP timeout in seconds.
    gps_high_accuracy : bool
        Ask the position source for a high-accuracy fix.
    gps_timeout : float
        Seconds to wait for a device position.
    gps_maximum_age : float
        Maximum age in seconds of a cached position the source may return.
        ``0`` forces a fresh fix.
    discard_stale_results : bool
        Drop responses superseded by a newer request instead of letting
        the last one to arrive win.
    """

    photon_url: str = PHOTON_URL
    nominatim_url: str = NOMINATIM_REVERSE_URL
    user_agent: str = USER_AGENT
    accept_language: str = ACCEPT_LANGUAGE
    search_limit: int = SEARCH_LIMIT
    bbox: tuple[float, float, float, float] = UAE_BBOX
    debounce_delay: float = DEBOUNCE_DELAY_S
    min_query_length: int = MIN_QUERY_LENGTH
    max_address_length: int = MAX_ADDRESS_LENGTH
    request_timeout: float = REQUEST_TIMEOUT_S
    gps_high_accuracy: bool = True
    gps_timeout: float = GPS_TIMEOUT_S
    gps_maximum_age: float = GPS_MAXIMUM_AGE_S
    discard_stale_results: bool = False

    def __post_init__(self) -> None:
        if self.search_limit < 1:
            raise LocatorConfigError(f"search_limit must be >= 1, got {self.search_limit}")
        if self.debounce_delay < 0:
            raise LocatorConfigError(f"debounce_delay must be >= 0, got {self.debounce_delay}")
        if self.max_address_length < 1:
            raise LocatorConfigError(f"max_address_length must be >= 1, got {self.max_address_length}")
        if self.gps_timeout <= 0:
            raise LocatorConfigError(f"gps_timeout must be > 0, got {self.gps_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> LocatorConfig:
        """Create configuration from environment variables.

        Reads optional ``IFTARLOC_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        LocatorConfig
            Populated configuration.

        Raises
        ------
        LocatorConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "IFTARLOC_PHOTON_URL": "photon_url",
            "IFTARLOC_NOMINATIM_URL": "nominatim_url",
            "IFTARLOC_USER_AGENT": "user_agent",
            "IFTARLOC_ACCEPT_LANGUAGE": "accept_language",
        }
        _ENV_NUM_MAP: dict[str, tuple[str, type]] = {
            "IFTARLOC_SEARCH_LIMIT": ("search_limit", int),
            "IFTARLOC_DEBOUNCE_DELAY": ("debounce_delay", float),
            "IFTARLOC_MIN_QUERY_LENGTH": ("min_query_length", int),
            "IFTARLOC_MAX_ADDRESS_LENGTH": ("max_address_length", int),
            "IFTARLOC_REQUEST_TIMEOUT": ("request_timeout", float),
            "IFTARLOC_GPS_TIMEOUT": ("gps_timeout", float),
            "IFTARLOC_GPS_MAXIMUM_AGE": ("gps_maximum_age", float),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, (field_name, cast) in _ENV_NUM_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise LocatorConfigError(f"{env_key} must be {cast.__name__}, got {val!r}") from exc

        bbox_env = env.get("IFTARLOC_BBOX")
        if bbox_env is not None and "bbox" not in overrides:
            config_kwargs["bbox"] = _parse_bbox(bbox_env)

        if "gps_high_accuracy" not in overrides:
            config_kwargs["gps_high_accuracy"] = _env_bool(env.get("IFTARLOC_GPS_HIGH_ACCURACY"), True)

        if "discard_stale_results" not in overrides:
            config_kwargs["discard_stale_results"] = _env_bool(
                env.get("IFTARLOC_DISCARD_STALE_RESULTS"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
