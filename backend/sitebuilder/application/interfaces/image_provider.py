"""Abstract stock-photo provider interface."""

from abc import ABC, abstractmethod

from sitebuilder.domain.entities import StockImage


class ImageProvider(ABC):
    """Port for stock-photo search — implemented in the infrastructure layer."""

    @abstractmethod
    async def search(self, query: str) -> StockImage:
        """Return one photo matching ``query``.

        Raises:
            ImageSearchError: if the provider is misconfigured, unreachable,
                or has no result for the query.
        """
        ...
