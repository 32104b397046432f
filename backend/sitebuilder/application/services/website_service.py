"""Application service for the relational website copy (save, edit and publish)."""

import logging
import re

from sitebuilder.application.interfaces import SiteRepository
from sitebuilder.application.schemas.website import (
    PageCreateRequest,
    WebsiteSaveRequest,
    WebsiteUpdateRequest,
)
from sitebuilder.domain.entities import SitePage, SiteRecord, SiteStatus
from sitebuilder.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PublishValidationError,
)

logger = logging.getLogger(__name__)

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9-]+$")
SLUG_PATTERN = SUBDOMAIN_PATTERN
SUBDOMAIN_MIN_LENGTH = 3
SUBDOMAIN_MAX_LENGTH = 50
NAME_MAX_LENGTH = 100
PAGE_FIELD_MAX_LENGTH = 100


def subdomain_problem(subdomain: str) -> str | None:
    """Describe why ``subdomain`` is invalid, or None when it is acceptable."""
    if not SUBDOMAIN_MIN_LENGTH <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
        return (
            f"Subdomain must be between {SUBDOMAIN_MIN_LENGTH} and "
            f"{SUBDOMAIN_MAX_LENGTH} characters"
        )
    if not SUBDOMAIN_PATTERN.match(subdomain):
        return "Subdomain may only contain lowercase letters, digits and hyphens"
    return None


class WebsiteService:
    """Saves websites with a home page and manages their pages and publication.

    Every operation on an existing website is scoped to its owner: a website
    that belongs to another user is reported as not found.
    """

    def __init__(self, repository: SiteRepository):
        self._repository = repository

    async def save(self, data: WebsiteSaveRequest, user_id: str) -> tuple[SiteRecord, SitePage]:
        """Store a website and its home page carrying the content blocks.

        Raises:
            ValueError: invalid name or subdomain.
            DuplicateEntityError: subdomain already taken.
        """
        name = self._validate_name(data.name)
        problem = subdomain_problem(data.subdomain)
        if problem:
            raise ValueError(problem)
        if await self._repository.get_by_subdomain(data.subdomain) is not None:
            raise DuplicateEntityError("Website", "subdomain", data.subdomain)

        site = await self._repository.create(
            SiteRecord(
                name=name,
                subdomain=data.subdomain,
                project_id=data.project_id,
                user_id=user_id,
                theme=data.theme,
                business_info=data.business_info,
            )
        )
        home = await self._repository.add_page(
            SitePage(
                website_id=site.id,
                name="Home",
                slug="home",
                title=f"Welcome to {site.name}",
                content={"blocks": data.content},
                is_home_page=True,
            )
        )
        logger.info("Saved website %s (%s) with %d blocks", site.id, site.subdomain, len(data.content))
        return site, home

    async def get(self, site_id: str, user_id: str) -> SiteRecord:
        site = await self._repository.get_by_id(site_id, user_id)
        if site is None:
            raise EntityNotFoundError("Website", site_id)
        return site

    async def update(self, site_id: str, user_id: str, data: WebsiteUpdateRequest) -> SiteRecord:
        """Apply the provided fields; ``content`` replaces the home page blocks.

        Raises:
            EntityNotFoundError: unknown website or not owned by ``user_id``.
            ValueError: invalid name or status.
        """
        site = await self.get(site_id, user_id)
        if data.name is not None:
            site.name = self._validate_name(data.name)
        if data.theme is not None:
            site.theme = data.theme
        if data.business_info is not None:
            site.business_info = data.business_info
        if data.status is not None:
            try:
                site.status = SiteStatus(data.status.lower())
            except ValueError:
                allowed = ", ".join(s.value for s in SiteStatus)
                raise ValueError(f"Status must be one of: {allowed}") from None

        if data.content is not None:
            pages = await self._repository.list_pages(site_id)
            home = next((p for p in pages if p.is_home_page), None)
            if home is None:
                await self._repository.add_page(
                    SitePage(
                        website_id=site_id,
                        name="Home",
                        slug=self._free_slug("home", pages),
                        title=f"Welcome to {site.name}",
                        content={"blocks": data.content},
                        is_home_page=True,
                    )
                )
            else:
                home.content = {**home.content, "blocks": data.content}
                await self._repository.update_page(home)

        site.touch()
        updated = await self._repository.update(site)
        logger.info("Updated website %s", site_id)
        return updated

    async def list_pages(self, site_id: str, user_id: str) -> list[SitePage]:
        await self.get(site_id, user_id)
        return await self._repository.list_pages(site_id)

    async def add_page(self, site_id: str, user_id: str, data: PageCreateRequest) -> SitePage:
        """Add a page; a new home page takes the flag from the previous one.

        Raises:
            EntityNotFoundError: unknown website or not owned by ``user_id``.
            ValueError: invalid name, slug or title.
            DuplicateEntityError: slug already used within the website.
        """
        await self.get(site_id, user_id)
        for label, value in (("Name", data.name), ("Title", data.title)):
            if not value.strip() or len(value) > PAGE_FIELD_MAX_LENGTH:
                raise ValueError(f"{label} must be between 1 and {PAGE_FIELD_MAX_LENGTH} characters")
        if not 1 <= len(data.slug) <= PAGE_FIELD_MAX_LENGTH or not SLUG_PATTERN.match(data.slug):
            raise ValueError("Slug may only contain lowercase letters, digits and hyphens")

        pages = await self._repository.list_pages(site_id)
        if any(p.slug == data.slug for p in pages):
            raise DuplicateEntityError("Page", "slug", data.slug)
        if data.is_home_page:
            await self._repository.clear_home_page(site_id)

        page = await self._repository.add_page(
            SitePage(
                website_id=site_id,
                name=data.name.strip(),
                slug=data.slug,
                title=data.title.strip(),
                content=data.content,
                is_home_page=data.is_home_page,
            )
        )
        logger.info("Added page %s to website %s", page.slug, site_id)
        return page

    async def check_subdomain(self, subdomain: str) -> tuple[bool, str | None]:
        """Return ``(available, reason)`` for a candidate subdomain."""
        problem = subdomain_problem(subdomain)
        if problem:
            return False, problem
        if await self._repository.get_by_subdomain(subdomain) is not None:
            return False, "Subdomain already taken"
        return True, None

    async def publish(self, site_id: str, user_id: str) -> SiteRecord:
        """Publish a website; it needs at least one page and a home page.

        Raises:
            EntityNotFoundError: unknown website or not owned by ``user_id``.
            PublishValidationError: page preconditions not met.
        """
        site = await self.get(site_id, user_id)
        pages = await self._repository.list_pages(site_id)
        if not pages:
            raise PublishValidationError("Website must have at least one page to publish")
        if not any(p.is_home_page for p in pages):
            raise PublishValidationError("Website must have a home page to publish")
        site.mark_published()
        return await self._repository.update(site)

    async def unpublish(self, site_id: str, user_id: str) -> SiteRecord:
        site = await self.get(site_id, user_id)
        site.mark_unpublished()
        return await self._repository.update(site)

    async def delete(self, site_id: str, user_id: str) -> bool:
        await self.get(site_id, user_id)
        return await self._repository.delete(site_id)

    @staticmethod
    def _validate_name(name: str) -> str:
        name = name.strip()
        if not name or len(name) > NAME_MAX_LENGTH:
            raise ValueError(f"Name must be between 1 and {NAME_MAX_LENGTH} characters")
        return name

    @staticmethod
    def _free_slug(base: str, pages: list[SitePage]) -> str:
        taken = {p.slug for p in pages}
        slug, n = base, 2
        while slug in taken:
            slug, n = f"{base}-{n}", n + 1
        return slug
