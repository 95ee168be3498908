"""Photon forward-search endpoint.

Endpoint: ``GET https://photon.komoot.io/api/``
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from iftarloc._constants import format_bbox
from iftarloc._transport import Transport
from iftarloc.config import LocatorConfig
from iftarloc.exceptions import GeocodeError
from iftarloc.models.photon import PhotonFeature

_logger = logging.getLogger(__name__)


def build_search_params(config: LocatorConfig, query: str) -> dict[str, str]:
    """Query parameters for a forward search biased to ``config.bbox``."""
    return {
        "q": query,
        "limit": str(config.search_limit),
        "bbox": format_bbox(config.bbox),
        "lang": config.accept_language,
    }


def parse_features(payload: Any, *, limit: int) -> list[PhotonFeature]:
    """Extract well-formed features from a Photon FeatureCollection.

    Candidates with malformed or out-of-range coordinates indicate a
    provider defect and are dropped without raising.
    """
    if not isinstance(payload, dict):
        return []
    raw_features = payload.get("features")
    if not isinstance(raw_features, list):
        return []

    features: list[PhotonFeature] = []
    for raw in raw_features:
        if not isinstance(raw, dict):
            continue
        try:
            feature = PhotonFeature.from_api(raw)
        except ValidationError:
            _logger.debug("Dropping unparseable Photon feature", exc_info=True)
            continue
        if not feature.is_valid:
            _logger.debug("Dropping Photon feature with invalid coordinates: %s", feature.geometry.coordinates)
            continue
        features.append(feature)
        if len(features) >= limit:
            break
    return features


async def search_places(
    config: LocatorConfig,
    transport: Transport,
    query: str,
) -> list[PhotonFeature]:
    """Forward-search *query*.

    Never raises: any transport or decoding failure yields ``[]``.
    """
    try:
        payload = await transport.get_json(config.photon_url, build_search_params(config, query))
    except GeocodeError:
        _logger.debug("Photon search failed", exc_info=True)
        return []

    features = parse_features(payload, limit=config.search_limit)
    _logger.debug("Photon search returned %d feature(s)", len(features))
    return features
