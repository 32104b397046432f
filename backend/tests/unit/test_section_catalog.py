"""Unit tests for the SectionCatalog."""

import pytest

from sitebuilder.application.services import ImageQueryBuilder, ImageService, SectionCatalog
from sitebuilder.domain.entities import BlockType, BusinessProfile
from sitebuilder.domain.exceptions import EntityNotFoundError, ImageSearchError

from fakes import FakeImageProvider, seeded_rng

PROFILE = BusinessProfile(name="Pinewood Dental", type="Dental clinic", location="Denver, CO, USA")


@pytest.fixture
def provider() -> FakeImageProvider:
    return FakeImageProvider()


@pytest.fixture
def catalog(provider) -> SectionCatalog:
    return SectionCatalog.from_yaml(image_service=ImageService(provider, ImageQueryBuilder(seeded_rng())))


def test_categories_keep_file_order(catalog: SectionCatalog):
    keys = [c.key for c in catalog.list_categories()]
    assert keys == ["hero", "content", "services", "social", "media", "conversion"]


def test_section_ids_are_unique(catalog: SectionCatalog):
    ids = [s.id for c in catalog.list_categories() for s in c.sections]
    assert len(ids) == len(set(ids))


def test_filter_by_query_drops_empty_categories(catalog: SectionCatalog):
    filtered = catalog.filter_by_query("testimon")
    assert [c.key for c in filtered] == ["social"]
    assert [s.id for s in filtered[0].sections] == ["testimonials"]


def test_filter_matches_description_case_insensitively(catalog: SectionCatalog):
    filtered = catalog.filter_by_query("PHOTO")
    ids = {s.id for c in filtered for s in c.sections}
    assert "gallery" in ids
    assert "hero-centered" in ids


def test_blank_query_returns_everything(catalog: SectionCatalog):
    assert catalog.filter_by_query("   ") == catalog.list_categories()
    assert catalog.filter_by_query(None) == catalog.list_categories()


def test_unknown_section_raises(catalog: SectionCatalog):
    with pytest.raises(EntityNotFoundError):
        catalog.get_section("carousel")


def test_map_section_to_block_type(catalog: SectionCatalog):
    assert catalog.map_section_to_block_type("text-image") == BlockType.ABOUT
    assert catalog.map_section_to_block_type("banner-grid") == BlockType.BANNER_GRID


def test_default_styles_are_copies(catalog: SectionCatalog):
    styles = catalog.create_default_styles("hero-centered")
    styles["textAlign"] = "right"
    assert catalog.create_default_styles("hero-centered")["textAlign"] == "center"


@pytest.mark.asyncio
async def test_default_content_is_interpolated(catalog: SectionCatalog):
    content = await catalog.create_default_content("hero-centered", PROFILE)

    assert content["title"] == "Welcome to Pinewood Dental"
    assert content["subtitle"] == "Professional Dental clinic services in Denver, CO, USA"
    assert content["backgroundImage"].startswith("https://images.test/")


@pytest.mark.asyncio
async def test_list_image_fields_fetch_one_image_per_role(catalog: SectionCatalog, provider):
    content = await catalog.create_default_content("services-grid", PROFILE)

    assert len(content["images"]) == 3
    assert len(provider.queries) == 3
    assert all("Denver, CO, USA" in q for q in provider.queries)


@pytest.mark.asyncio
async def test_section_without_images_makes_no_requests(catalog: SectionCatalog, provider):
    content = await catalog.create_default_content("hero-minimal", PROFILE)
    assert "backgroundImage" not in content
    assert provider.queries == []


@pytest.mark.asyncio
async def test_create_block(catalog: SectionCatalog):
    block = await catalog.create_block("banner-grid", PROFILE)

    assert block.type == BlockType.BANNER_GRID
    assert block.id.startswith("banner-grid-")
    assert block.content["headline"] == "Experience the best of Pinewood Dental"
    assert len(block.content["images"]) == 3
    assert block.styles["gridColumns"] == 3


@pytest.mark.asyncio
async def test_image_failure_propagates():
    failing = FakeImageProvider(fail_when=lambda q: ImageSearchError(500, "Failed to fetch from Pexels API"))
    catalog = SectionCatalog.from_yaml(image_service=ImageService(failing))

    with pytest.raises(ImageSearchError):
        await catalog.create_block("about", PROFILE)


def test_duplicate_ids_are_rejected(catalog: SectionCatalog):
    category = catalog.list_categories()[0]
    with pytest.raises(ValueError):
        SectionCatalog([category, category])
