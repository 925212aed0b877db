"""HTTP client for the Overpass API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import settings
from .errors import SearchError

logger = logging.getLogger(__name__)

HEALTH_QUERY = "[out:json][timeout:5];node(1);out ids;"


class OverpassClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.overpass_url
        if not self.base_url:
            raise ValueError("Overpass URL is not configured.")
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.user_agent = user_agent or settings.http_user_agent
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            transport=self.transport,
        )

    def fetch(self, query: str) -> list[dict[str, Any]]:
        """POST an Overpass QL query and return its ``elements`` array.

        Any transport failure, error status or malformed payload raises
        :class:`SearchError`. There is no retry.
        """
        client = self._get_client()
        try:
            response = client.post(self.base_url, data={"data": query})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 429:
                raise SearchError("Overpass rate limit exceeded, try again shortly.") from exc
            if status_code == 504:
                raise SearchError("Overpass query timed out.") from exc
            raise SearchError(f"Overpass request failed with HTTP {status_code}.") from exc
        except httpx.HTTPError as exc:
            raise SearchError(f"Failed to reach Overpass at {self.base_url}: {exc}") from exc
        except ValueError as exc:
            raise SearchError("Overpass returned a response that is not valid JSON.") from exc
        finally:
            client.close()

        elements = payload.get("elements") if isinstance(payload, dict) else None
        if not isinstance(elements, list):
            remark = payload.get("remark") if isinstance(payload, dict) else None
            raise SearchError(f"Overpass response is missing the elements list{f': {remark}' if remark else ''}.")
        logger.debug("Overpass returned %d elements", len(elements))
        return elements


def check_health(base_url: str | None = None, transport: httpx.BaseTransport | None = None) -> bool:
    """Check Overpass reachability with a minimal query."""
    try:
        OverpassClient(base_url=base_url, timeout=10.0, transport=transport).fetch(HEALTH_QUERY)
        return True
    except SearchError as exc:
        logger.warning(f"Overpass health check failed: {exc}")
        return False
