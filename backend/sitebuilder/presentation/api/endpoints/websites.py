"""Saved-website endpoints — save, edit, inspect and publish the relational copy.

Every route except the discovery stub and the subdomain check acts for the
caller identified by ``X-User-Id``; websites of other users answer 404.
"""

import logging

from fastapi import APIRouter, Depends, status

from sitebuilder.application.schemas import (
    ErrorResponse,
    PageCreateRequest,
    SavedWebsiteSchema,
    SitePageResponse,
    SiteResponse,
    SubdomainCheckResponse,
    WebsiteSaveRequest,
    WebsiteSaveResponse,
    WebsiteUpdateRequest,
)
from sitebuilder.application.services import WebsiteService
from sitebuilder.domain.entities import SitePage, SiteRecord
from sitebuilder.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PublishValidationError,
)
from sitebuilder.infrastructure.dependencies import get_user_id, get_website_service
from sitebuilder.presentation.api.errors import ApiError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/websites", tags=["Websites"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _not_found() -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, "Website not found")


def _to_response(site: SiteRecord) -> SiteResponse:
    return SiteResponse(
        id=site.id,
        name=site.name,
        subdomain=site.subdomain,
        project_id=site.project_id,
        theme=site.theme,
        business_info=site.business_info,
        status=site.status.value,
        is_published=site.is_published,
        created_at=site.created_at,
        updated_at=site.updated_at,
    )


def _page_response(page: SitePage) -> SitePageResponse:
    return SitePageResponse(
        id=page.id,
        website_id=page.website_id,
        name=page.name,
        slug=page.slug,
        title=page.title,
        content=page.content,
        is_home_page=page.is_home_page,
        created_at=page.created_at,
    )


@router.get("")
async def describe_endpoints() -> dict:
    """Discovery stub listing what this resource supports."""
    return {
        "message": "Websites API endpoint",
        "endpoints": {
            "POST": "Create/save a website",
            "GET": "Get website information",
        },
    }


@router.post(
    "",
    response_model=WebsiteSaveResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def save_website(
    data: WebsiteSaveRequest,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    """Save a website together with a home page holding its blocks."""
    try:
        site, home = await service.save(data, user_id=user_id)
    except ValueError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(e)) from e
    except DuplicateEntityError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Subdomain already taken") from e
    except Exception as e:
        logger.exception("Error saving website")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save website") from e

    return WebsiteSaveResponse(
        website=SavedWebsiteSchema(
            id=site.id,
            name=site.name,
            subdomain=site.subdomain,
            project_id=site.project_id,
            theme=site.theme,
            content=home.content.get("blocks", []),
            business_info=site.business_info,
            status=site.status.value,
            is_published=site.is_published,
            created_at=site.created_at,
            updated_at=site.updated_at,
        ),
    )


@router.get("/check-subdomain/{subdomain}", response_model=SubdomainCheckResponse)
async def check_subdomain(
    subdomain: str,
    service: WebsiteService = Depends(get_website_service),
) -> SubdomainCheckResponse:
    available, reason = await service.check_subdomain(subdomain)
    return SubdomainCheckResponse(subdomain=subdomain, available=available, reason=reason)


@router.get("/{site_id}", response_model=SiteResponse, responses=_NOT_FOUND)
async def get_website(
    site_id: str,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    try:
        site = await service.get(site_id, user_id)
    except EntityNotFoundError as e:
        raise _not_found() from e
    return _to_response(site)


@router.put(
    "/{site_id}",
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def update_website(
    site_id: str,
    data: WebsiteUpdateRequest,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    """Update name, theme, business info, status or home-page content."""
    try:
        site = await service.update(site_id, user_id, data)
    except EntityNotFoundError as e:
        raise _not_found() from e
    except ValueError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(e)) from e
    return {
        "success": True,
        "data": _to_response(site).model_dump(by_alias=True, mode="json"),
    }


@router.get(
    "/{site_id}/pages",
    response_model=list[SitePageResponse],
    responses=_NOT_FOUND,
)
async def list_pages(
    site_id: str,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    """Pages of a website, home page first."""
    try:
        pages = await service.list_pages(site_id, user_id)
    except EntityNotFoundError as e:
        raise _not_found() from e
    return [_page_response(p) for p in pages]


@router.post(
    "/{site_id}/pages",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def add_page(
    site_id: str,
    data: PageCreateRequest,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    try:
        page = await service.add_page(site_id, user_id, data)
    except EntityNotFoundError as e:
        raise _not_found() from e
    except ValueError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(e)) from e
    except DuplicateEntityError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Page slug already exists") from e
    return {
        "success": True,
        "data": _page_response(page).model_dump(by_alias=True, mode="json"),
    }


@router.post(
    "/{site_id}/publish",
    responses={400: {"model": ErrorResponse}, **_NOT_FOUND},
)
async def publish_website(
    site_id: str,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    try:
        site = await service.publish(site_id, user_id)
    except EntityNotFoundError as e:
        raise _not_found() from e
    except PublishValidationError as e:
        raise ApiError(status.HTTP_400_BAD_REQUEST, str(e)) from e
    return {
        "success": True,
        "data": _to_response(site).model_dump(by_alias=True, mode="json"),
        "message": "Website published successfully",
    }


@router.post("/{site_id}/unpublish", responses=_NOT_FOUND)
async def unpublish_website(
    site_id: str,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    try:
        site = await service.unpublish(site_id, user_id)
    except EntityNotFoundError as e:
        raise _not_found() from e
    return {
        "success": True,
        "data": _to_response(site).model_dump(by_alias=True, mode="json"),
        "message": "Website unpublished successfully",
    }


@router.delete(
    "/{site_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def delete_website(
    site_id: str,
    user_id: str = Depends(get_user_id),
    service: WebsiteService = Depends(get_website_service),
):
    try:
        await service.delete(site_id, user_id)
    except EntityNotFoundError as e:
        raise _not_found() from e
    return None
