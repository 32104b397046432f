"""Copy generation and stock-photo endpoints.

Failures answer with an ``{"error": "..."}`` body, which is what the editor
frontend reads.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from sitebuilder.application.schemas import (
    ErrorResponse,
    FetchImageRequest,
    FetchImageResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerateCopyRequest,
)
from sitebuilder.application.services import ContentGenerationGateway, ImageService
from sitebuilder.domain.entities import BusinessProfile
from sitebuilder.domain.exceptions import ContentGenerationError, ImageSearchError
from sitebuilder.infrastructure.dependencies import get_content_gateway, get_image_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Content"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/generate-content",
    response_model=GenerateContentResponse,
    responses={500: {"model": ErrorResponse}},
)
async def generate_content(
    data: GenerateContentRequest,
    gateway: ContentGenerationGateway = Depends(get_content_gateway),
):
    """Generate website copy. Upstream failures return the fallback copy."""
    profile = BusinessProfile.from_dict(data.business_info.model_dump()) if data.business_info else None
    try:
        content = await gateway.generate(data.prompt, profile)
    except Exception:
        logger.exception("Unexpected failure while generating content")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate content")
    return GenerateContentResponse(content=content)


@router.post(
    "/generate-copy",
    response_model=GenerateContentResponse,
    responses={502: {"model": ErrorResponse}},
)
async def generate_copy(
    data: GenerateCopyRequest,
    gateway: ContentGenerationGateway = Depends(get_content_gateway),
):
    """Generate page, blog, SEO or marketing copy about a topic."""
    prompt = gateway.build_copy_prompt(
        data.type,
        data.topic,
        tone=data.tone,
        length=data.length,
        keywords=data.keywords,
    )
    try:
        content = await gateway.request_json(prompt)
    except ContentGenerationError as e:
        logger.warning("Copy generation failed: %s", e)
        return _error(status.HTTP_502_BAD_GATEWAY, "Failed to generate content")
    return GenerateContentResponse(content=content)


@router.post(
    "/fetch-image",
    response_model=FetchImageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def fetch_image(
    data: FetchImageRequest,
    image_service: ImageService = Depends(get_image_service),
):
    """Return one landscape stock photo for the query."""
    query = (data.query or "").strip()
    if not query:
        return _error(status.HTTP_400_BAD_REQUEST, "Query is required")
    try:
        image = await image_service.fetch(query)
    except ImageSearchError as e:
        return _error(e.status_code, e.message)
    return FetchImageResponse(image_url=image.image_url, photographer=image.photographer, alt=image.alt)
