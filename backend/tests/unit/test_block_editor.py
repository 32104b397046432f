"""Unit tests for the BlockEditor state machine and document mutations."""

import asyncio
import json
from dataclasses import replace

import pytest

from sitebuilder.application.interfaces import ImageProvider
from sitebuilder.application.services import (
    BlockEditor,
    ContentGenerationGateway,
    EditorServices,
    ElementKind,
    ImageQueryBuilder,
    ImageService,
    MenuAction,
    PanelKind,
    PersistenceFacade,
    SectionCatalog,
    Viewport,
)
from sitebuilder.application.services.persistence_facade import GENERATED_WEBSITE_KEY
from sitebuilder.domain.entities import BlockType, BusinessProfile, ContentBlock, StockImage, Website
from sitebuilder.domain.exceptions import EntityNotFoundError, ImageSearchError

from fakes import FakeChatProvider, FakeImageProvider, FakeUserStateRepository, seeded_rng

USER = "user-1"
PROFILE = BusinessProfile(name="Pinewood Dental", type="Dental clinic", location="Denver, CO, USA")


class GatedImageProvider(ImageProvider):
    """Holds every search until ``release`` is set."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def search(self, query: str) -> StockImage:
        self.started.set()
        await self.release.wait()
        return StockImage(image_url="https://images.test/late.jpg")


def _website() -> Website:
    return Website(
        id="website-1",
        title="Pinewood Dental Website",
        business_name="Pinewood Dental",
        business_type="Dental clinic",
        location="Denver, CO, USA",
        blocks=(
            ContentBlock(
                id="hero-1",
                type=BlockType.HERO,
                content={"title": "Welcome", "buttonText": "Book", "backgroundImage": "https://img/hero.jpg"},
                styles={"buttonStyle": "primary"},
            ),
            ContentBlock(
                id="about-1",
                type=BlockType.ABOUT,
                content={"title": "About us", "description": "We care.", "image": "https://img/about.jpg"},
            ),
            ContentBlock(
                id="banner-1",
                type=BlockType.BANNER_GRID,
                content={"tagline": "t", "headline": "h", "subtext": "s", "images": ["a", "b", "c"]},
            ),
            ContentBlock(id="features-1", type=BlockType.FEATURES, content={"title": "Why us"}),
        ),
    )


def _editor(
    images: ImageProvider | None = None,
    chat: FakeChatProvider | None = None,
    transition_ms: int = 0,
) -> tuple[BlockEditor, FakeUserStateRepository]:
    repo = FakeUserStateRepository()
    image_service = ImageService(images or FakeImageProvider(), ImageQueryBuilder(seeded_rng()))
    services = EditorServices(
        persistence=PersistenceFacade(repo),
        catalog=SectionCatalog.from_yaml(image_service=image_service),
        image_service=image_service,
        gateway=ContentGenerationGateway(chat, "test-model"),
    )
    editor = BlockEditor(
        USER,
        _website(),
        PROFILE,
        services,
        transition_ms=transition_ms,
        viewport=Viewport(1440, 900),
    )
    return editor, repo


def _stored_block_ids(repo: FakeUserStateRepository) -> list[str]:
    data = json.loads(repo.values[(USER, GENERATED_WEBSITE_KEY)])
    return [b["id"] for b in data["blocks"]]


# ── Panels ──


def test_click_image_opens_image_settings():
    editor, _ = _editor()
    assert editor.click_element("about-1", ElementKind.IMAGE)

    assert editor.panel.kind == PanelKind.IMAGE_SETTINGS
    assert editor.panel.block_id == "about-1"
    assert editor.panel.selection == {"imageUrl": "https://img/about.jpg"}
    assert editor.selected_block_id == "about-1"


def test_click_element_routes_by_block_and_element():
    editor, _ = _editor()

    editor.click_element("hero-1", ElementKind.BACKGROUND)
    assert (editor.panel.kind, editor.panel.field_name) == (PanelKind.IMAGE_SETTINGS, "backgroundImage")

    editor.click_element("hero-1", ElementKind.BUTTON)
    assert editor.panel.kind == PanelKind.BUTTON_SETTINGS
    assert editor.panel.selection == {"text": "Book", "style": "primary"}

    editor.click_element("about-1", ElementKind.TEXT, "title")
    assert editor.panel.kind == PanelKind.TEXT_IMAGE

    editor.click_element("features-1", ElementKind.TEXT, "title")
    assert editor.panel.kind == PanelKind.EDIT

    editor.click_element("banner-1", ElementKind.IMAGE)
    assert editor.panel.kind == PanelKind.BANNER_GRID
    assert editor.panel.selection["images"] == ["a", "b", "c"]


def test_opening_a_panel_closes_the_previous_one():
    editor, _ = _editor()
    editor.open_add_section(after_id="hero-1")
    editor.click_element("hero-1", ElementKind.BUTTON)

    assert editor.panel.kind == PanelKind.BUTTON_SETTINGS
    assert editor.panel.after_id is None
    assert editor.snapshot()["panel"]["kind"] == "button-settings"


@pytest.mark.asyncio
async def test_same_panel_request_during_transition_is_ignored():
    editor, _ = _editor(transition_ms=1000)

    assert editor.open_add_section(after_id="hero-1") is True
    assert editor.is_transitioning
    assert editor.open_add_section(after_id="about-1") is False
    assert editor.panel.after_id == "hero-1"

    assert editor.click_element("about-1", ElementKind.IMAGE) is True
    assert editor.panel.kind == PanelKind.IMAGE_SETTINGS


@pytest.mark.asyncio
async def test_transition_flag_clears():
    editor, _ = _editor(transition_ms=0)
    editor.open_add_section()
    await asyncio.sleep(0.01)
    assert editor.is_transitioning is False


def test_click_unknown_block_is_ignored():
    editor, _ = _editor()
    assert editor.click_element("nope", ElementKind.IMAGE) is False
    assert editor.click_block("nope") is False
    assert editor.panel is None


def test_panel_selection_updates():
    editor, _ = _editor()
    assert editor.update_panel_selection({"query": "x"}) is False
    editor.open_add_section()
    assert editor.update_panel_selection({"query": "hero"}) is True
    assert editor.panel.selection == {"query": "hero"}


def test_click_background_returns_to_idle():
    editor, _ = _editor()
    editor.double_click_block("hero-1", 100, 200)
    editor.click_element("hero-1", ElementKind.BUTTON)
    editor.double_click_text("hero-1", "title")

    editor.click_background()

    state = editor.snapshot()
    assert state["panel"] is None
    assert state["floatingMenu"] is None
    assert state["selectedBlockId"] is None
    assert state["editingText"] is None


# ── Floating menu ──


def test_menu_is_clamped_to_viewport():
    editor, _ = _editor()
    editor.double_click_block("hero-1", 790, 20, Viewport(800, 600))

    assert editor.floating_menu.block_id == "hero-1"
    assert (editor.floating_menu.x, editor.floating_menu.y) == (570, 10)


def test_menu_sits_above_pointer():
    editor, _ = _editor()
    editor.double_click_block("about-1", 300, 400)
    assert (editor.floating_menu.x, editor.floating_menu.y) == (300, 340)


def test_selecting_another_block_hides_menu():
    editor, _ = _editor()
    editor.double_click_block("hero-1", 300, 400)
    editor.click_block("about-1")
    assert editor.floating_menu is None


@pytest.mark.asyncio
async def test_menu_delete_hero_clears_selection_and_menu():
    editor, repo = _editor()
    editor.double_click_block("hero-1", 300, 400)

    assert await editor.menu_action(MenuAction.DELETE) is True

    assert not editor.website.has_block("hero-1")
    assert editor.selected_block_id is None
    assert editor.floating_menu is None
    assert "hero-1" not in _stored_block_ids(repo)


@pytest.mark.asyncio
async def test_menu_move_down():
    editor, repo = _editor()
    editor.double_click_block("hero-1", 300, 400)
    await editor.menu_action(MenuAction.MOVE_DOWN)

    assert editor.website.block_ids()[:2] == ["about-1", "hero-1"]
    assert _stored_block_ids(repo)[:2] == ["about-1", "hero-1"]


@pytest.mark.asyncio
async def test_menu_regenerate_images_on_banner_grid_replaces_all_three():
    editor, _ = _editor()
    editor.double_click_block("banner-1", 300, 400)

    assert await editor.menu_action(MenuAction.REGENERATE_IMAGES) is True

    images = editor.website.find_block("banner-1").content["images"]
    assert len(images) == 3
    assert all(url.startswith("https://images.test/") for url in images)


@pytest.mark.asyncio
async def test_menu_action_without_menu_is_ignored():
    editor, _ = _editor()
    assert await editor.menu_action(MenuAction.DELETE) is False
    assert len(editor.website.blocks) == 4


# ── Preview ──


@pytest.mark.asyncio
async def test_preview_freezes_the_editor():
    editor, repo = _editor()
    editor.double_click_block("hero-1", 300, 400)
    editor.click_element("hero-1", ElementKind.BUTTON)

    editor.set_preview_mode(True)

    assert editor.panel is None
    assert editor.floating_menu is None
    assert editor.selected_block_id is None
    assert editor.click_block("hero-1") is False
    assert editor.open_add_section() is False
    assert editor.double_click_text("hero-1", "title") is False
    assert await editor.change_text("hero-1", "title", "Changed") is False
    assert await editor.delete_block("hero-1") is False
    assert await editor.regenerate_image("hero-1") is False
    assert repo.writes == []

    assert editor.toggle_preview() is False
    assert editor.click_block("hero-1") is True


# ── Document mutations ──


@pytest.mark.asyncio
async def test_change_text_persists_snapshot_and_summary():
    editor, repo = _editor()
    assert await editor.change_text("hero-1", "title", "Brighter smiles") is True

    data = json.loads(repo.values[(USER, GENERATED_WEBSITE_KEY)])
    assert data["blocks"][0]["content"]["title"] == "Brighter smiles"
    assert (USER, "recent_projects") in repo.values


@pytest.mark.asyncio
async def test_change_text_on_missing_block_does_not_persist():
    editor, repo = _editor()
    assert await editor.change_text("gone", "title", "x") is False
    assert repo.writes == []


@pytest.mark.asyncio
async def test_update_style_and_content():
    editor, _ = _editor()
    await editor.update_style("about-1", {"padding": "8px"})
    await editor.update_content("about-1", {"title": "Our story", "description": "Since 1999"})

    block = editor.website.find_block("about-1")
    assert block.styles == {"padding": "8px"}
    assert block.content["title"] == "Our story"
    assert block.content["image"] == "https://img/about.jpg"


@pytest.mark.asyncio
async def test_add_section_after_panel_anchor():
    editor, repo = _editor()
    editor.open_add_section(after_id="hero-1")

    block = await editor.add_section("cta")

    assert editor.website.block_ids()[1] == block.id
    assert block.type == BlockType.CTA
    assert editor.panel is None
    assert editor.selected_block_id == block.id
    assert block.id in _stored_block_ids(repo)


@pytest.mark.asyncio
async def test_add_section_without_anchor_appends():
    editor, _ = _editor()
    block = await editor.add_section("features")
    assert editor.website.block_ids()[-1] == block.id


@pytest.mark.asyncio
async def test_add_unknown_section_raises():
    editor, _ = _editor()
    with pytest.raises(EntityNotFoundError):
        await editor.add_section("carousel")


@pytest.mark.asyncio
async def test_add_section_image_failure_becomes_alert():
    images = FakeImageProvider(
        fail_when=lambda q: ImageSearchError(500, "PEXELS_API_KEY is not configured", "PEXELS_API_KEY")
    )
    editor, repo = _editor(images=images)

    assert await editor.add_section("about") is None

    assert len(editor.website.blocks) == 4
    assert repo.writes == []
    assert editor.alerts == [
        "Could not add section: PEXELS_API_KEY is not configured. Please set PEXELS_API_KEY."
    ]
    assert editor.dismiss_alerts()
    assert editor.alerts == []


@pytest.mark.asyncio
async def test_delete_block_clears_inline_editing_and_panel():
    editor, _ = _editor()
    editor.click_element("about-1", ElementKind.IMAGE)
    editor.double_click_text("about-1", "title")

    await editor.delete_block("about-1")

    assert editor.panel is None
    assert editor.editing_text is None


@pytest.mark.asyncio
async def test_publish_sets_status_and_persists():
    editor, _ = _editor()
    await editor.publish()

    assert editor.status == "published"
    assert await editor._services.persistence.project_status(USER, "website-1") == "published"


# ── Regeneration ──


@pytest.mark.asyncio
async def test_regenerate_image_updates_block_and_panel():
    editor, _ = _editor()
    editor.click_element("about-1", ElementKind.IMAGE)

    assert await editor.regenerate_image("about-1") is True

    url = editor.website.find_block("about-1").content["image"]
    assert url.startswith("https://images.test/")
    assert editor.panel.selection["imageUrl"] == url
    assert not editor.is_regenerating("about-1-image")


@pytest.mark.asyncio
async def test_regenerate_hero_targets_background():
    editor, _ = _editor()
    await editor.regenerate_image("hero-1")
    assert editor.website.find_block("hero-1").content["backgroundImage"].startswith("https://images.test/")


@pytest.mark.asyncio
async def test_late_regeneration_does_not_resurrect_deleted_block():
    provider = GatedImageProvider()
    editor, repo = _editor(images=provider)

    task = asyncio.create_task(editor.regenerate_image("about-1"))
    await provider.started.wait()
    assert editor.is_regenerating("about-1-image")
    assert "about-1-image" in editor.snapshot()["regenerating"]

    # A second request for the same target while one is running is ignored.
    assert await editor.regenerate_image("about-1") is False

    await editor.delete_block("about-1")
    provider.release.set()

    assert await task is False
    assert not editor.website.has_block("about-1")
    assert "about-1" not in _stored_block_ids(repo)
    assert not editor.is_regenerating("about-1-image")


@pytest.mark.asyncio
async def test_regeneration_persists_through_services_bound_when_it_started():
    provider = GatedImageProvider()
    editor, first_repo = _editor(images=provider)
    first_repo.writes.clear()

    task = asyncio.create_task(editor.regenerate_image("about-1"))
    await provider.started.wait()

    later_repo = FakeUserStateRepository()
    editor.bind(replace(editor._services, persistence=PersistenceFacade(later_repo)))
    provider.release.set()

    assert await task is True
    assert (USER, GENERATED_WEBSITE_KEY) in first_repo.writes
    assert later_repo.writes == []

    # Mutations started after the rebind use the new services.
    await editor.change_text("about-1", "title", "Our story")
    assert (USER, GENERATED_WEBSITE_KEY) in later_repo.writes


@pytest.mark.asyncio
async def test_regenerate_image_on_block_without_image_field_alerts():
    images = FakeImageProvider()
    editor, repo = _editor(images=images)
    repo.writes.clear()

    assert await editor.regenerate_image("features-1") is False

    assert "image" not in editor.website.find_block("features-1").content
    assert images.queries == []
    assert repo.writes == []
    assert editor.alerts == ["This features section has no image to regenerate."]


@pytest.mark.asyncio
async def test_regenerate_image_rejects_field_outside_variant_schema():
    editor, _ = _editor()

    assert await editor.regenerate_image("about-1", "backgroundImage") is False
    assert "backgroundImage" not in editor.website.find_block("about-1").content


@pytest.mark.asyncio
async def test_regenerate_image_failure_becomes_alert():
    images = FakeImageProvider(fail_when=lambda q: ImageSearchError(404, f"No images found for query: {q}"))
    editor, _ = _editor(images=images)

    assert await editor.regenerate_image("about-1") is False

    assert editor.website.find_block("about-1").content["image"] == "https://img/about.jpg"
    assert editor.alerts[0].startswith("Failed to regenerate image: No images found")
    assert not editor.is_regenerating("about-1-image")


@pytest.mark.asyncio
async def test_regenerate_content_patches_text_fields():
    chat = FakeChatProvider('{"title": "Meet the team", "description": "Family dentists since 1999."}')
    editor, _ = _editor(chat=chat)

    assert await editor.regenerate_content("about-1") is True

    content = editor.website.find_block("about-1").content
    assert content["title"] == "Meet the team"
    assert content["description"] == "Family dentists since 1999."
    assert content["image"] == "https://img/about.jpg"


@pytest.mark.asyncio
async def test_regenerate_content_failure_becomes_alert():
    editor, _ = _editor(chat=None)
    assert await editor.regenerate_content("about-1") is False
    assert editor.alerts == ["Failed to regenerate content. Please try again."]


@pytest.mark.asyncio
async def test_regenerate_banner_text_falls_back_to_canned_copy():
    editor, _ = _editor(chat=None)
    editor.click_element("banner-1", ElementKind.TEXT, "tagline")

    assert await editor.regenerate_banner_text("banner-1", "tagline") is True

    expected = "Trusted Dental clinic in Denver, CO, USA"
    assert editor.website.find_block("banner-1").content["tagline"] == expected
    assert editor.panel.selection["tagline"] == expected


# ── Snapshot ──


def test_snapshot_shape():
    editor, _ = _editor()
    state = editor.snapshot()

    assert set(state) == {
        "website",
        "status",
        "selectedBlockId",
        "panel",
        "floatingMenu",
        "editingText",
        "previewMode",
        "isTransitioning",
        "regenerating",
        "alerts",
    }
    assert state["website"]["businessName"] == "Pinewood Dental"
    assert state["status"] == "draft"
