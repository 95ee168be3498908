"""Helpers for safe debug logging.

Locations typed or pinned by users are personal data. This module
coarsens coordinates and truncates free text before it is written
to DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_COORDINATE_KEYS: frozenset[str] = frozenset(
    {
        "lat",
        "lon",
        "lng",
        "latitude",
        "longitude",
    }
)

_COORDINATE_DECIMALS = 2


def _coarsen(value: Any) -> Any:
    try:
        return f"{float(value):.{_COORDINATE_DECIMALS}f}~"
    except (TypeError, ValueError, OverflowError):
        return "<redacted>"


def redact_for_log(value: Any, *, max_string: int = 120, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _COORDINATE_KEYS:
                redacted[key] = _coarsen(v)
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
