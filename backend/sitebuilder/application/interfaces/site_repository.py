"""Abstract repository interface (port) for saved websites and their pages."""

from abc import ABC, abstractmethod

from sitebuilder.domain.entities import SitePage, SiteRecord


class SiteRepository(ABC):
    """Port for relational website persistence — implemented in the infrastructure layer.

    Websites are owned: lookups by id are always scoped to the owning user.
    """

    @abstractmethod
    async def get_by_id(self, site_id: str, user_id: str) -> SiteRecord | None:
        """The website ``site_id`` if it belongs to ``user_id``."""
        ...

    @abstractmethod
    async def get_by_subdomain(self, subdomain: str) -> SiteRecord | None:
        ...

    @abstractmethod
    async def create(self, site: SiteRecord) -> SiteRecord:
        """Persist a new website and return it.

        Raises:
            DuplicateEntityError: the subdomain is already taken.
        """
        ...

    @abstractmethod
    async def update(self, site: SiteRecord) -> SiteRecord:
        """Persist name, theme, business info and status changes of an existing website."""
        ...

    @abstractmethod
    async def delete(self, site_id: str) -> bool:
        """Delete a website and its pages. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def add_page(self, page: SitePage) -> SitePage:
        """Persist a new page.

        Raises:
            DuplicateEntityError: the slug is already used within the website.
        """
        ...

    @abstractmethod
    async def update_page(self, page: SitePage) -> SitePage:
        ...

    @abstractmethod
    async def clear_home_page(self, site_id: str) -> None:
        """Unset the home-page flag on every page of a website."""
        ...

    @abstractmethod
    async def list_pages(self, site_id: str) -> list[SitePage]:
        """Pages of a website, home page first, then by creation time."""
        ...
