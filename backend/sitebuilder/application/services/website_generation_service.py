"""Website generation use case — profile in, fully assembled Website out.

Runs one content-generation call and six image fetches concurrently and
assembles the document only once all of them resolved. Content failures
are absorbed by the gateway's fallback copy; image failures abort.
"""

import asyncio
import time
from collections.abc import Callable
from typing import Any
from uuid import uuid4

from sitebuilder.application.services.content_generation_gateway import ContentGenerationGateway
from sitebuilder.application.services.image_query_builder import GENERATION_IMAGE_ROLES
from sitebuilder.application.services.image_service import ImageService
from sitebuilder.domain.entities import (
    BlockType,
    BusinessProfile,
    ContentBlock,
    StockImage,
    Website,
    theme_for_business_type,
)
from sitebuilder.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

plog = PipelineLogger("WebsiteGenerationService")

_DEFAULT_TESTIMONIALS = (
    {"name": "Sarah Johnson", "text": "Absolutely fantastic service. Highly recommended!", "rating": 5},
    {"name": "Michael Chen", "text": "Professional, friendly, and reliable from day one.", "rating": 5},
    {"name": "Emily Davis", "text": "They exceeded all of my expectations.", "rating": 5},
)


def _new_website_id() -> str:
    return f"website-{uuid4().hex[:12]}"


def _new_block_id(block_type: BlockType) -> str:
    return f"{block_type.value}-{uuid4().hex[:8]}"


class WebsiteGenerationService:
    """Builds the initial website document for a business profile."""

    def __init__(
        self,
        gateway: ContentGenerationGateway,
        image_service: ImageService,
        *,
        website_id_factory: Callable[[], str] = _new_website_id,
        block_id_factory: Callable[[BlockType], str] = _new_block_id,
    ):
        self._gateway = gateway
        self._images = image_service
        self._new_website_id = website_id_factory
        self._new_block_id = block_id_factory

    async def generate(self, profile: BusinessProfile, prompt: str | None = None) -> Website:
        """Generate a website.

        Raises:
            ImageSearchError: when any image fetch fails.
        """
        t0 = time.perf_counter()
        plog.step_start(
            PipelineStage.PROFILE,
            f"Generating website for {profile.name}",
            type=profile.type,
            location=profile.location,
        )

        theme = theme_for_business_type(profile.type)
        plog.step_complete(PipelineStage.THEME, "Theme selected", primary=theme.colors.primary)

        plog.step_start(
            PipelineStage.CONTENT,
            "Requesting copy and images",
            images=len(GENERATION_IMAGE_ROLES),
        )
        try:
            content, images = await asyncio.gather(
                self._gateway.generate(prompt, profile),
                self._images.fetch_many(profile, GENERATION_IMAGE_ROLES),
            )
        except Exception as e:
            plog.step_error(PipelineStage.IMAGES, "Generation aborted", error=e)
            raise
        plog.step_complete(PipelineStage.IMAGES, "Copy and images ready")

        with plog.timed_step(PipelineStage.BLOCKS, "Assembling blocks"):
            blocks = self._assemble_blocks(content, images, profile)

        website = Website(
            id=self._new_website_id(),
            title=f"{profile.name} Website",
            business_name=profile.name,
            business_type=profile.type,
            location=profile.location,
            theme=theme,
            blocks=tuple(blocks),
        )
        plog.step_complete(PipelineStage.COMPLETE, f"Website {website.id} generated")
        plog.stats(blocks=len(blocks), elapsed=f"{time.perf_counter() - t0:.2f}s")
        return website

    def _assemble_blocks(
        self,
        content: dict[str, Any],
        images: dict[str, StockImage],
        profile: BusinessProfile,
    ) -> list[ContentBlock]:
        fallback = self._gateway.fallback_content(profile)

        def section(key: str) -> dict[str, Any]:
            value = content.get(key)
            return value if isinstance(value, dict) else fallback[key]

        hero = section("hero")
        about = section("about")
        services = section("services")
        features = section("features")
        contact = section("contact")
        cta = section("cta")

        service_items = []
        for index, item in enumerate(services.get("items") or fallback["services"]["items"]):
            entry = dict(item) if isinstance(item, dict) else {"title": str(item)}
            role = f"service{index + 1}"
            if role in images:
                entry["image"] = images[role].image_url
            service_items.append(entry)

        return [
            self._block(BlockType.HERO, {
                "title": hero.get("title", fallback["hero"]["title"]),
                "subtitle": hero.get("subtitle", fallback["hero"]["subtitle"]),
                "buttonText": hero.get("buttonText", fallback["hero"]["buttonText"]),
                "backgroundImage": images["hero"].image_url,
            }, {"textAlign": "center", "padding": "96px 24px"}),
            self._block(BlockType.ABOUT, {
                "title": about.get("title", fallback["about"]["title"]),
                "description": about.get("description", fallback["about"]["description"]),
                "highlights": about.get("highlights", fallback["about"]["highlights"]),
                "image": images["about"].image_url,
            }, {"padding": "64px 24px"}),
            self._block(BlockType.SERVICES, {
                "title": services.get("title", fallback["services"]["title"]),
                "subtitle": services.get("subtitle", fallback["services"]["subtitle"]),
                "services": service_items,
            }, {"padding": "64px 24px", "backgroundColor": "#f9fafb"}),
            self._block(BlockType.FEATURES, {
                "title": features.get("title", fallback["features"]["title"]),
                "subtitle": features.get("subtitle", fallback["features"]["subtitle"]),
                "features": features.get("items") or fallback["features"]["items"],
            }, {"padding": "64px 24px"}),
            self._block(BlockType.TESTIMONIALS, {
                "title": "What Our Clients Say",
                "testimonials": [dict(t) for t in _DEFAULT_TESTIMONIALS],
            }, {"padding": "64px 24px", "backgroundColor": "#f9fafb"}),
            self._block(BlockType.CONTACT, {
                "title": contact.get("title", fallback["contact"]["title"]),
                "subtitle": contact.get("subtitle", fallback["contact"]["subtitle"]),
                "address": profile.location,
                "formFields": ["name", "email", "message"],
            }, {"padding": "64px 24px"}),
            self._block(BlockType.CTA, {
                "title": cta.get("title", fallback["cta"]["title"]),
                "subtitle": cta.get("subtitle", fallback["cta"]["subtitle"]),
                "buttonText": cta.get("buttonText", fallback["cta"]["buttonText"]),
                "backgroundImage": images["gallery"].image_url,
            }, {"textAlign": "center", "padding": "80px 24px"}),
        ]

    def _block(self, block_type: BlockType, content: dict[str, Any], styles: dict[str, Any]) -> ContentBlock:
        return ContentBlock(id=self._new_block_id(block_type), type=block_type, content=content, styles=styles)
