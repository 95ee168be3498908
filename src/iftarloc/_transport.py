"""HTTP transport for the public geocoding providers."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from iftarloc._redact import redact_for_log
from iftarloc.exceptions import GeocodeResponseError, GeocodeTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        ...


class HttpTransport:
    """aiohttp-backed transport issuing GET requests that return JSON."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 10.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """GET *url* and decode the JSON body.

        Raises
        ------
        GeocodeTransportError
            Network failure, timeout, or non-2xx status.
        GeocodeResponseError
            The body is not valid UTF-8 JSON.
        """
        _logger.debug("GET %s params=%s", url, redact_for_log(dict(params)))

        try:
            async with self._http.get(
                url,
                params=dict(params),
                headers=dict(headers or {}),
                timeout=self._timeout,
            ) as resp:
                body = await resp.read()
                if not 200 <= resp.status < 300:
                    text = body.decode("utf-8", errors="replace")
                    raise GeocodeTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=url,
                    )
        except GeocodeTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise GeocodeTransportError(
                f"Request to {url} failed: {exc!r}",
                endpoint=url,
            ) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GeocodeResponseError(
                f"Invalid JSON from {url}: {body[:200]!r}",
                endpoint=url,
            ) from exc
