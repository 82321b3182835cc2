from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


class UnsplashImageProvider:
    """Keyword image search returning at most one image URL."""

    def __init__(
        self,
        access_key: str | None,
        api_url: str = "https://api.unsplash.com/search/photos",
        timeout_sec: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.access_key = access_key
        self.api_url = api_url
        self.timeout_sec = timeout_sec
        self._transport = transport

    async def find_image(self, query: str) -> str:
        """
        Return the first matching image URL, or "" when there is none.
        Best effort: errors are logged, never raised.
        """
        if not self.access_key:
            logger.debug("No Unsplash access key, skipping image lookup")
            return ""

        params = {"query": query, "per_page": 1, "orientation": "landscape"}
        headers = {
            "Authorization": f"Client-ID {self.access_key}",
            "Accept-Version": "v1",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout_sec, transport=self._transport) as client:
                r = await client.get(self.api_url, params=params, headers=headers)
            r.raise_for_status()
            results = r.json().get("results") or []
            if not results:
                logger.info("No image found for %r", query)
                return ""
            return results[0]["urls"]["regular"] or ""
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Image lookup failed for %r: %s", query, exc)
            return ""
