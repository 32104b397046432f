"""Concrete repository implementation for saved websites backed by SQLAlchemy."""

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.application.interfaces import SiteRepository
from sitebuilder.domain.entities import SitePage, SiteRecord, SiteStatus
from sitebuilder.domain.exceptions import DuplicateEntityError
from sitebuilder.infrastructure.database.models import PageModel, WebsiteModel


class SQLAlchemySiteRepository(SiteRepository):
    """Implements the SiteRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: WebsiteModel) -> SiteRecord:
        """Map ORM model → domain entity."""
        return SiteRecord(
            id=model.id,
            name=model.name,
            subdomain=model.subdomain,
            project_id=model.project_id,
            user_id=model.user_id,
            theme=model.theme or {},
            business_info=model.business_info or {},
            status=SiteStatus(model.status),
            is_published=model.is_published,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: SiteRecord) -> WebsiteModel:
        """Map domain entity → ORM model (for creation)."""
        return WebsiteModel(
            id=entity.id,
            name=entity.name,
            subdomain=entity.subdomain,
            project_id=entity.project_id,
            user_id=entity.user_id,
            theme=entity.theme,
            business_info=entity.business_info,
            status=entity.status.value,
            is_published=entity.is_published,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _page_to_entity(model: PageModel) -> SitePage:
        return SitePage(
            id=model.id,
            website_id=model.website_id,
            name=model.name,
            slug=model.slug,
            title=model.title,
            content=model.content or {},
            is_home_page=model.is_home_page,
            created_at=model.created_at,
        )

    async def get_by_id(self, site_id: str, user_id: str) -> SiteRecord | None:
        stmt = select(WebsiteModel).where(WebsiteModel.id == site_id, WebsiteModel.user_id == user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_subdomain(self, subdomain: str) -> SiteRecord | None:
        stmt = select(WebsiteModel).where(WebsiteModel.subdomain == subdomain)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, site: SiteRecord) -> SiteRecord:
        model = self._to_model(site)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Concurrent save of the same subdomain.
            raise DuplicateEntityError("Website", "subdomain", site.subdomain) from e
        return self._to_entity(model)

    async def update(self, site: SiteRecord) -> SiteRecord:
        model = await self._session.get(WebsiteModel, site.id)
        if model is None:
            raise ValueError(f"Website {site.id} not found in database")
        model.name = site.name
        model.theme = site.theme
        model.business_info = site.business_info
        model.status = site.status.value
        model.is_published = site.is_published
        model.updated_at = site.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, site_id: str) -> bool:
        model = await self._session.get(WebsiteModel, site_id)
        if model is None:
            return False
        await self._session.execute(delete(PageModel).where(PageModel.website_id == site_id))
        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_page(self, page: SitePage) -> SitePage:
        model = PageModel(
            id=page.id,
            website_id=page.website_id,
            name=page.name,
            slug=page.slug,
            title=page.title,
            content=page.content,
            is_home_page=page.is_home_page,
            created_at=page.created_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise DuplicateEntityError("Page", "slug", page.slug) from e
        return self._page_to_entity(model)

    async def update_page(self, page: SitePage) -> SitePage:
        model = await self._session.get(PageModel, page.id)
        if model is None:
            raise ValueError(f"Page {page.id} not found in database")
        model.name = page.name
        model.title = page.title
        model.content = page.content
        model.is_home_page = page.is_home_page
        await self._session.flush()
        return self._page_to_entity(model)

    async def clear_home_page(self, site_id: str) -> None:
        await self._session.execute(
            update(PageModel)
            .where(PageModel.website_id == site_id, PageModel.is_home_page.is_(True))
            .values(is_home_page=False)
        )

    async def list_pages(self, site_id: str) -> list[SitePage]:
        stmt = (
            select(PageModel)
            .where(PageModel.website_id == site_id)
            .order_by(PageModel.is_home_page.desc(), PageModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._page_to_entity(row) for row in result.scalars().all()]
