"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from sitebuilder.config import get_settings
from sitebuilder.application.interfaces import ChatProvider
from sitebuilder.application.services import (
    BusinessProfileStore,
    ContentGenerationGateway,
    EditorServices,
    EditorSessionManager,
    ImageService,
    PersistenceFacade,
    SectionCatalog,
    Viewport,
    WebsiteGenerationService,
    WebsiteService,
)
from sitebuilder.infrastructure.database.session import get_db_session
from sitebuilder.infrastructure.database.repositories import (
    SQLAlchemySiteRepository,
    SQLAlchemyUserStateRepository,
)
from sitebuilder.infrastructure.openrouter import OpenRouterClient
from sitebuilder.infrastructure.pexels import PexelsClient


# ── Identity ──


async def get_user_id(x_user_id: str | None = Header(None, alias="X-User-Id")) -> str:
    """The caller's id as asserted by the authentication provider."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()


# ── Process-wide singletons ──


@lru_cache
def get_editor_session_manager() -> EditorSessionManager:
    settings = get_settings()
    return EditorSessionManager(
        transition_ms=settings.panel_transition_ms,
        viewport=Viewport(settings.viewport_width, settings.viewport_height),
    )


@lru_cache
def _load_section_catalog() -> SectionCatalog:
    return SectionCatalog.from_yaml()


# ── External services ──


def _build_chat_provider() -> ChatProvider | None:
    settings = get_settings()
    if not settings.openrouter_api_key.strip():
        return None
    return OpenRouterClient(
        api_key=settings.openrouter_api_key,
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
    )


async def get_content_gateway() -> AsyncGenerator[ContentGenerationGateway, None]:
    """Provides the copy gateway; without an API key every call falls back."""
    settings = get_settings()
    yield ContentGenerationGateway(
        provider=_build_chat_provider(),
        model=settings.content_model,
        temperature=settings.content_temperature,
        max_tokens=settings.content_max_tokens,
    )


async def get_image_service() -> AsyncGenerator[ImageService, None]:
    """Provides an ImageService backed by Pexels."""
    settings = get_settings()
    provider = PexelsClient(
        api_key=settings.pexels_api_key,
        base_url=settings.pexels_base_url,
        per_page=settings.pexels_per_page,
        max_page=settings.pexels_max_page,
    )
    yield ImageService(provider)


async def get_section_catalog(
    image_service: ImageService = Depends(get_image_service),
) -> AsyncGenerator[SectionCatalog, None]:
    yield _load_section_catalog().with_image_service(image_service)


async def get_website_generation_service(
    gateway: ContentGenerationGateway = Depends(get_content_gateway),
    image_service: ImageService = Depends(get_image_service),
) -> AsyncGenerator[WebsiteGenerationService, None]:
    yield WebsiteGenerationService(gateway, image_service)


# ── Persistence-backed services ──


async def get_persistence_facade(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[PersistenceFacade, None]:
    """Provides the per-user snapshot store."""
    repository = SQLAlchemyUserStateRepository(session)
    yield PersistenceFacade(repository, recent_limit=get_settings().recent_projects_limit)


async def get_business_profile_store(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BusinessProfileStore, None]:
    repository = SQLAlchemyUserStateRepository(session)
    yield BusinessProfileStore(repository)


async def get_website_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[WebsiteService, None]:
    """Provides a WebsiteService instance with its repository wired up."""
    repository = SQLAlchemySiteRepository(session)
    yield WebsiteService(repository)


async def get_editor_services(
    persistence: PersistenceFacade = Depends(get_persistence_facade),
    catalog: SectionCatalog = Depends(get_section_catalog),
    image_service: ImageService = Depends(get_image_service),
    gateway: ContentGenerationGateway = Depends(get_content_gateway),
) -> AsyncGenerator[EditorServices, None]:
    """Request-scoped collaborators bound to the user's editor session."""
    yield EditorServices(
        persistence=persistence,
        catalog=catalog,
        image_service=image_service,
        gateway=gateway,
    )
