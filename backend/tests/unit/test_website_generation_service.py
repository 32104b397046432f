"""Unit tests for the WebsiteGenerationService."""

import itertools
import json
import logging

import pytest

from sitebuilder.application.services import (
    ContentGenerationGateway,
    ImageQueryBuilder,
    ImageService,
    WebsiteGenerationService,
)
from sitebuilder.domain.entities import BlockType, BusinessProfile, theme_for_business_type
from sitebuilder.domain.exceptions import ChatProviderError, ImageSearchError

from fakes import FakeChatProvider, FakeImageProvider, seeded_rng

PROFILE = BusinessProfile(name="Pinewood Dental", type="Dental clinic", location="Denver, CO, USA")


def _service(chat=None, images=None) -> WebsiteGenerationService:
    counter = itertools.count(1)
    return WebsiteGenerationService(
        ContentGenerationGateway(chat, "test-model"),
        ImageService(images or FakeImageProvider(), ImageQueryBuilder(seeded_rng())),
        website_id_factory=lambda: "website-test",
        block_id_factory=lambda t: f"{t.value}-{next(counter)}",
    )


@pytest.mark.asyncio
async def test_fallback_generation_produces_full_website():
    chat = FakeChatProvider(error=ChatProviderError("fake", 500, "down"))
    site = await _service(chat=chat).generate(PROFILE)

    assert site.id == "website-test"
    assert site.title == "Pinewood Dental Website"
    assert [b.type for b in site.blocks] == [
        BlockType.HERO,
        BlockType.ABOUT,
        BlockType.SERVICES,
        BlockType.FEATURES,
        BlockType.TESTIMONIALS,
        BlockType.CONTACT,
        BlockType.CTA,
    ]
    hero = site.blocks[0]
    assert hero.content["title"] == "Welcome to Pinewood Dental"
    assert hero.content["backgroundImage"].startswith("https://images.test/")
    assert site.theme == theme_for_business_type("Dental clinic")


@pytest.mark.asyncio
async def test_block_ids_are_unique():
    site = await _service().generate(PROFILE)
    ids = site.block_ids()
    assert len(ids) == len(set(ids))


@pytest.mark.asyncio
async def test_generation_fetches_six_role_images():
    images = FakeImageProvider()
    site = await _service(images=images).generate(PROFILE)

    assert len(images.queries) == 6
    services = site.find_block("services-3")
    assert all(item["image"].startswith("https://images.test/") for item in services.content["services"])
    contact = next(b for b in site.blocks if b.type == BlockType.CONTACT)
    assert contact.content["address"] == "Denver, CO, USA"


@pytest.mark.asyncio
async def test_generated_copy_is_used():
    copy = ContentGenerationGateway.fallback_content(PROFILE)
    copy["hero"]["title"] = "Smiles Made in Denver"
    site = await _service(chat=FakeChatProvider(json.dumps(copy))).generate(PROFILE)
    assert site.blocks[0].content["title"] == "Smiles Made in Denver"


@pytest.mark.asyncio
async def test_image_failure_aborts_generation():
    images = FakeImageProvider(
        fail_when=lambda q: ImageSearchError(500, "PEXELS_API_KEY is not configured", "PEXELS_API_KEY")
    )
    with pytest.raises(ImageSearchError) as exc_info:
        await _service(images=images).generate(PROFILE)
    assert exc_info.value.missing_credential == "PEXELS_API_KEY"


@pytest.mark.asyncio
async def test_content_failure_for_short_dental_profile():
    profile = BusinessProfile(name="Pinewood Dental", type="dental", location="Austin, TX")
    chat = FakeChatProvider(error=ChatProviderError("fake", 503, "unavailable"))
    images = FakeImageProvider()

    site = await _service(chat=chat, images=images).generate(profile)

    hero = next(b for b in site.blocks if b.type == BlockType.HERO)
    about = next(b for b in site.blocks if b.type == BlockType.ABOUT)
    assert hero.content["title"] == "Welcome to Pinewood Dental"
    assert about.content["title"] == "About Pinewood Dental"

    # Role images are requested in order, hero first.
    hero_query = images.queries[0]
    assert "dental clinic" in hero_query
    assert "Austin, TX" in hero_query


@pytest.mark.asyncio
async def test_theme_step_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="WebsiteGenerationService")
    site = await _service().generate(PROFILE)

    theme_lines = [r.getMessage() for r in caplog.records if "[THEME]" in r.getMessage()]
    assert len(theme_lines) == 1
    assert site.theme.colors.primary in theme_lines[0]
