"""Pexels API client — implements the ImageProvider interface.

Searches https://api.pexels.com/v1/search for landscape photos. A random
result page and a random photo on it are picked so repeated searches for the
same query return different images.
"""

import logging
import random

import httpx

from sitebuilder.application.interfaces import ImageProvider
from sitebuilder.config import PEXELS_PLACEHOLDER_KEY
from sitebuilder.domain.entities import StockImage
from sitebuilder.domain.exceptions import ImageSearchError

logger = logging.getLogger(__name__)

PEXELS_KEY_ENV = "PEXELS_API_KEY"


class PexelsClient(ImageProvider):
    """Infrastructure adapter — connects to the Pexels search API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.pexels.com/v1",
        *,
        per_page: int = 15,
        max_page: int = 10,
        http_client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ):
        self._api_key = api_key.strip()
        self._base_url = base_url.rstrip("/")
        self._per_page = per_page
        self._max_page = max_page
        self._http_client = http_client
        self._rng = rng or random.Random()

    @property
    def configured(self) -> bool:
        return bool(self._api_key) and self._api_key != PEXELS_PLACEHOLDER_KEY

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=30.0)

    async def search(self, query: str) -> StockImage:
        if not self.configured:
            raise ImageSearchError(
                500,
                f"{PEXELS_KEY_ENV} is not configured",
                missing_credential=PEXELS_KEY_ENV,
            )

        page = self._rng.randint(1, self._max_page)
        index = self._rng.randrange(self._per_page)
        logger.debug("Pexels search: query=%r page=%d index=%d", query, page, index)

        client = await self._get_client()
        should_close = self._http_client is None
        try:
            photos = await self._fetch_page(client, query, page)
            if photos:
                photo = photos[min(index, len(photos) - 1)]
                return self._to_stock_image(photo, query)

            logger.info("No Pexels results for %r on page %d, trying page 1", query, page)
            if page != 1:
                photos = await self._fetch_page(client, query, 1, strict=False)
                if photos:
                    return self._to_stock_image(self._rng.choice(photos), query)
        except httpx.HTTPError as e:
            logger.warning("Pexels request failed: %s", e)
            raise ImageSearchError(500, "Failed to fetch from Pexels API") from e
        finally:
            if should_close:
                await client.aclose()

        raise ImageSearchError(404, f"No images found for query: {query}")

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        query: str,
        page: int,
        *,
        strict: bool = True,
    ) -> list[dict]:
        """Return the photos of one result page.

        With ``strict`` a non-2xx answer raises; otherwise it counts as empty.
        """
        response = await client.get(
            f"{self._base_url}/search",
            params={
                "query": query,
                "per_page": self._per_page,
                "page": page,
                "orientation": "landscape",
            },
            headers={"Authorization": self._api_key},
        )
        if not response.is_success:
            logger.warning("Pexels API error: %d %s", response.status_code, response.reason_phrase)
            if strict:
                raise ImageSearchError(500, "Failed to fetch from Pexels API")
            return []
        return response.json().get("photos") or []

    @staticmethod
    def _to_stock_image(photo: dict, query: str) -> StockImage:
        src = photo.get("src") or {}
        return StockImage(
            image_url=src.get("large") or src.get("medium") or "",
            photographer=photo.get("photographer") or "",
            alt=photo.get("alt") or query,
        )
