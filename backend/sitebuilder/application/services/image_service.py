"""Image use cases — role-based stock-photo lookup for a business profile."""

import asyncio
import logging
from collections.abc import Iterable

from sitebuilder.application.interfaces import ImageProvider
from sitebuilder.application.services.image_query_builder import ImageQueryBuilder
from sitebuilder.domain.entities import BusinessProfile, StockImage

logger = logging.getLogger(__name__)


class ImageService:
    """Combines the query builder with an image provider.

    Errors from the provider (``ImageSearchError``) propagate unchanged;
    callers decide whether a failure aborts their flow or becomes an alert.
    """

    def __init__(self, provider: ImageProvider, query_builder: ImageQueryBuilder | None = None):
        self._provider = provider
        self._query_builder = query_builder or ImageQueryBuilder()

    @property
    def query_builder(self) -> ImageQueryBuilder:
        return self._query_builder

    async def fetch(self, query: str) -> StockImage:
        return await self._provider.search(query)

    async def fetch_for_role(self, profile: BusinessProfile, role: str) -> StockImage:
        query = self._query_builder.build_query(profile.type, role, profile.location)
        logger.debug("Image query for role '%s': %s", role, query)
        return await self._provider.search(query)

    async def fetch_many(self, profile: BusinessProfile, roles: Iterable[str]) -> dict[str, StockImage]:
        """Fetch one image per role concurrently; the first failure propagates."""
        role_list = list(roles)
        images = await asyncio.gather(
            *(self.fetch_for_role(profile, role) for role in role_list)
        )
        return dict(zip(role_list, images))
