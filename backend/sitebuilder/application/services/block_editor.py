"""Block Editor — the single mutator of a user's website document.

The editor is a state machine over panel identity. At most one panel is
open at any time; opening a panel always tears down the previous one first.
Inline text editing, the floating quick-action menu and block selection are
tracked alongside the panel.

Every document mutation goes through ``_apply`` which reads the current
website, produces a new one through the Website operations, and persists the
snapshot plus the recent-projects summary before returning. Asynchronous
regenerations re-read the current document when they complete, so a late
result never resurrects a deleted block.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from sitebuilder.application.services.content_generation_gateway import (
    BannerTextField,
    ContentGenerationGateway,
)
from sitebuilder.application.services.image_service import ImageService
from sitebuilder.application.services.persistence_facade import PersistenceFacade
from sitebuilder.application.services.section_catalog import SectionCatalog
from sitebuilder.domain.entities import (
    BLOCK_CONTENT_FIELDS,
    IMAGE_FIELDS,
    BlockType,
    BusinessProfile,
    ContentBlock,
    MoveDirection,
    Website,
)
from sitebuilder.domain.exceptions import ContentGenerationError, ImageSearchError
from sitebuilder.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("BlockEditor")


class PanelKind(str, Enum):
    ADD_SECTION = "add-section"
    IMAGE_SETTINGS = "image-settings"
    BUTTON_SETTINGS = "button-settings"
    TEXT_IMAGE = "text-image"
    BANNER_GRID = "banner-grid"
    EDIT = "edit"


class ElementKind(str, Enum):
    """Editable sub-elements of a rendered block."""

    IMAGE = "image"
    BACKGROUND = "background"
    BUTTON = "button"
    TEXT = "text"


class MenuAction(str, Enum):
    REGENERATE_IMAGES = "regenerate-images"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    DELETE = "delete"


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int


@dataclass(frozen=True)
class OpenPanel:
    """The one open panel: what it edits and its panel-local selection."""

    kind: PanelKind
    block_id: str | None = None
    field_name: str | None = None
    after_id: str | None = None
    selection: dict[str, Any] = field(default_factory=dict)

    def targets(self, block_id: str) -> bool:
        return self.block_id == block_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "blockId": self.block_id,
            "field": self.field_name,
            "afterId": self.after_id,
            "selection": dict(self.selection),
        }


@dataclass(frozen=True)
class FloatingMenu:
    block_id: str
    x: int
    y: int
    actions: tuple[MenuAction, ...] = tuple(MenuAction)

    def to_dict(self) -> dict[str, Any]:
        return {
            "blockId": self.block_id,
            "x": self.x,
            "y": self.y,
            "actions": [a.value for a in self.actions],
        }


MENU_WIDTH = 220
MENU_HEIGHT = 48
MENU_MARGIN = 10
# The menu is drawn above the pointer.
MENU_OFFSET_Y = 60

# Block type → image role used when regenerating a single image.
_IMAGE_ROLE_BY_BLOCK: dict[BlockType, str] = {
    BlockType.HERO: "hero",
    BlockType.ABOUT: "about",
    BlockType.SERVICES: "service1",
    BlockType.GALLERY: "gallery",
    BlockType.BANNER_GRID: "banner",
    BlockType.TESTIMONIALS: "testimonial",
    BlockType.CONTACT: "contact",
    BlockType.CTA: "cta",
}

BANNER_IMAGE_ROLES = ("banner", "gallery", "default")

_REGENERABLE_TEXT_FIELDS = ("title", "subtitle", "description", "buttonText")


@dataclass
class EditorServices:
    """Collaborators an editor needs; rebound on every request."""

    persistence: PersistenceFacade
    catalog: SectionCatalog
    image_service: ImageService
    gateway: ContentGenerationGateway


def clamp_menu_position(x: int, y: int, viewport: Viewport) -> tuple[int, int]:
    """Anchor the floating menu at the pointer while keeping it on screen."""
    max_x = max(MENU_MARGIN, viewport.width - MENU_WIDTH - MENU_MARGIN)
    max_y = max(MENU_MARGIN, viewport.height - MENU_HEIGHT - MENU_MARGIN)
    menu_x = min(max(x, MENU_MARGIN), max_x)
    menu_y = min(max(y - MENU_OFFSET_Y, MENU_MARGIN), max_y)
    return menu_x, menu_y


class BlockEditor:
    """Editing session for one user's website."""

    def __init__(
        self,
        user_id: str,
        website: Website,
        profile: BusinessProfile,
        services: EditorServices,
        *,
        status: str = "draft",
        transition_ms: int = 300,
        viewport: Viewport = Viewport(1440, 900),
    ):
        self.user_id = user_id
        self.website = website
        self.profile = profile
        self.status = status
        self._services = services
        self._transition_seconds = transition_ms / 1000
        self._default_viewport = viewport

        self.selected_block_id: str | None = None
        self.panel: OpenPanel | None = None
        self.floating_menu: FloatingMenu | None = None
        self.editing_text: str | None = None
        self.preview_mode = False
        self.is_transitioning = False
        self.alerts: list[str] = []
        self._regenerating: set[str] = set()
        self._transition_token = 0

    def bind(self, services: EditorServices) -> None:
        self._services = services

    # ── Selection and menu ──────────────────────────────────────────

    def click_block(self, block_id: str) -> bool:
        if self.preview_mode or not self.website.has_block(block_id):
            return False
        self.selected_block_id = block_id
        if self.floating_menu is not None and self.floating_menu.block_id != block_id:
            self.floating_menu = None
        return True

    def double_click_block(self, block_id: str, x: int, y: int, viewport: Viewport | None = None) -> bool:
        if not self.click_block(block_id):
            return False
        menu_x, menu_y = clamp_menu_position(x, y, viewport or self._default_viewport)
        self.floating_menu = FloatingMenu(block_id=block_id, x=menu_x, y=menu_y)
        return True

    def close_floating_menu(self) -> None:
        self.floating_menu = None

    def click_background(self) -> None:
        """Universal escape: back to Idle."""
        if self.preview_mode:
            return
        self._reset_to_idle()

    # ── Panels ──────────────────────────────────────────────────────

    def click_element(self, block_id: str, element: ElementKind, field_name: str | None = None) -> bool:
        if self.preview_mode:
            return False
        block = self.website.find_block(block_id)
        if block is None:
            return False
        self.selected_block_id = block_id
        kind, target_field = self._panel_for_element(block, element, field_name)
        return self.open_panel(kind, block_id=block_id, field_name=target_field)

    def open_add_section(self, after_id: str | None = None) -> bool:
        return self.open_panel(PanelKind.ADD_SECTION, after_id=after_id)

    def open_panel(
        self,
        kind: PanelKind,
        *,
        block_id: str | None = None,
        field_name: str | None = None,
        after_id: str | None = None,
    ) -> bool:
        """Open ``kind``, closing whatever panel is open first.

        A request for the kind already animating in is ignored; a
        different kind switches immediately.
        """
        if self.preview_mode:
            return False
        if self.is_transitioning and self.panel is not None and self.panel.kind == kind:
            return False

        self._teardown_panel()
        block = self.website.find_block(block_id) if block_id else None
        self.panel = OpenPanel(
            kind=kind,
            block_id=block_id,
            field_name=field_name,
            after_id=after_id,
            selection=self._initial_selection(kind, block, field_name),
        )
        self._start_transition()
        return True

    def close_panel(self) -> None:
        self._teardown_panel()

    def update_panel_selection(self, patch: dict[str, Any]) -> bool:
        if self.preview_mode or self.panel is None:
            return False
        self.panel = replace(self.panel, selection={**self.panel.selection, **patch})
        return True

    # ── Preview and inline editing ──────────────────────────────────

    def set_preview_mode(self, enabled: bool) -> None:
        if enabled:
            self._reset_to_idle()
        self.preview_mode = enabled

    def toggle_preview(self) -> bool:
        self.set_preview_mode(not self.preview_mode)
        return self.preview_mode

    def double_click_text(self, block_id: str, field_name: str) -> bool:
        if self.preview_mode or not self.website.has_block(block_id):
            return False
        self.editing_text = f"{block_id}-{field_name}"
        return True

    def blur_text(self) -> None:
        self.editing_text = None

    # ── Document mutations ──────────────────────────────────────────

    async def change_text(self, block_id: str, field_name: str, value: str) -> bool:
        if self.preview_mode:
            return False
        return await self._apply(lambda w: w.update_block_content(block_id, field_name, value))

    async def update_content(self, block_id: str, patch: dict[str, Any]) -> bool:
        if self.preview_mode:
            return False
        return await self._apply(lambda w: w.patch_block_content(block_id, patch))

    async def update_style(self, block_id: str, patch: dict[str, Any]) -> bool:
        if self.preview_mode:
            return False
        return await self._apply(lambda w: w.update_block_style(block_id, patch))

    async def add_section(self, section_id: str, after_id: str | None = None) -> ContentBlock | None:
        """Create a block from the catalog and insert it after ``after_id``.

        Raises:
            EntityNotFoundError: unknown section id.
        """
        if self.preview_mode:
            return None
        if after_id is None and self.panel is not None and self.panel.kind == PanelKind.ADD_SECTION:
            after_id = self.panel.after_id

        services = self._services
        try:
            block = await services.catalog.create_block(section_id, self.profile)
        except ImageSearchError as e:
            self._alert(f"Could not add section: {self._describe_image_error(e)}")
            return None

        await self._apply(lambda w: w.insert_block(block, after_id), services)
        if self.panel is not None and self.panel.kind == PanelKind.ADD_SECTION:
            self._teardown_panel()
        self.selected_block_id = block.id
        plog.step_complete(PipelineStage.EDITOR, f"Added section {section_id}", block=block.id)
        return block

    async def move_block(self, block_id: str, direction: MoveDirection) -> bool:
        if self.preview_mode:
            return False
        return await self._apply(lambda w: w.move_block(block_id, direction))

    async def delete_block(self, block_id: str) -> bool:
        if self.preview_mode:
            return False
        removed = await self._apply(lambda w: w.remove_block(block_id))
        if self.selected_block_id == block_id:
            self.selected_block_id = None
        if self.floating_menu is not None and self.floating_menu.block_id == block_id:
            self.floating_menu = None
        if self.panel is not None and self.panel.targets(block_id):
            self._teardown_panel()
        if self.editing_text is not None and self.editing_text.startswith(f"{block_id}-"):
            self.editing_text = None
        return removed

    async def menu_action(self, action: MenuAction) -> bool:
        """Run a floating-menu action against the menu's block."""
        if self.preview_mode or self.floating_menu is None:
            return False
        block_id = self.floating_menu.block_id
        if action == MenuAction.REGENERATE_IMAGES:
            block = self.website.find_block(block_id)
            if block is not None and block.type == BlockType.BANNER_GRID:
                return await self.regenerate_banner_images(block_id)
            return await self.regenerate_image(block_id)
        if action == MenuAction.MOVE_UP:
            return await self.move_block(block_id, "up")
        if action == MenuAction.MOVE_DOWN:
            return await self.move_block(block_id, "down")
        if action == MenuAction.DELETE:
            return await self.delete_block(block_id)
        raise ValueError(f"Unknown menu action: {action!r}")

    async def publish(self) -> None:
        self.status = "published"
        await self._persist()

    # ── Regeneration ────────────────────────────────────────────────

    def is_regenerating(self, key: str) -> bool:
        return key in self._regenerating

    async def regenerate_image(self, block_id: str, field_name: str | None = None) -> bool:
        block = self.website.find_block(block_id)
        if self.preview_mode or block is None:
            return False
        target = self._image_target(block, field_name)
        if target is None:
            self._alert(f"This {block.type.value} section has no image to regenerate.")
            return False
        role = _IMAGE_ROLE_BY_BLOCK.get(block.type, "default")
        services = self._services

        async def run() -> bool:
            image = await services.image_service.fetch_for_role(self.profile, role)
            applied = await self._apply(lambda w: w.update_block_content(block_id, target, image.image_url), services)
            self._sync_panel(block_id, {"imageUrl": image.image_url})
            return applied

        return await self._regenerate(f"{block_id}-image", run, "image")

    async def regenerate_content(self, block_id: str) -> bool:
        block = self.website.find_block(block_id)
        if self.preview_mode or block is None:
            return False
        fields = [f for f in _REGENERABLE_TEXT_FIELDS if isinstance(block.content.get(f), str)] or ["title"]
        prompt = self._content_prompt(block, fields)
        services = self._services

        async def run() -> bool:
            data = await services.gateway.request_json(prompt)
            patch = {f: data[f].strip() for f in fields if isinstance(data.get(f), str) and data[f].strip()}
            if not patch:
                raise ContentGenerationError("Response contained none of the requested fields")
            applied = await self._apply(lambda w: w.patch_block_content(block_id, patch), services)
            self._sync_panel(block_id, patch)
            return applied

        return await self._regenerate(f"{block_id}-content", run, "content")

    async def regenerate_banner_text(self, block_id: str, field_name: BannerTextField) -> bool:
        block = self.website.find_block(block_id)
        if self.preview_mode or block is None:
            return False
        services = self._services

        async def run() -> bool:
            text = await services.gateway.regenerate_text(field_name, self.profile)
            applied = await self._apply(lambda w: w.update_block_content(block_id, field_name, text), services)
            self._sync_panel(block_id, {field_name: text})
            return applied

        return await self._regenerate(f"{block_id}-{field_name}", run, field_name)

    async def regenerate_banner_images(self, block_id: str) -> bool:
        block = self.website.find_block(block_id)
        if self.preview_mode or block is None:
            return False
        services = self._services

        async def run() -> bool:
            images = await asyncio.gather(
                *(
                    services.image_service.fetch_for_role(self.profile, role)
                    for role in BANNER_IMAGE_ROLES
                )
            )
            urls = [image.image_url for image in images]
            applied = await self._apply(lambda w: w.update_block_content(block_id, "images", urls), services)
            self._sync_panel(block_id, {"images": urls})
            return applied

        return await self._regenerate(f"{block_id}-images", run, "images")

    # ── Views ───────────────────────────────────────────────────────

    def dismiss_alerts(self) -> list[str]:
        alerts, self.alerts = self.alerts, []
        return alerts

    def snapshot(self) -> dict[str, Any]:
        return {
            "website": self.website.to_dict(),
            "status": self.status,
            "selectedBlockId": self.selected_block_id,
            "panel": self.panel.to_dict() if self.panel else None,
            "floatingMenu": self.floating_menu.to_dict() if self.floating_menu else None,
            "editingText": self.editing_text,
            "previewMode": self.preview_mode,
            "isTransitioning": self.is_transitioning,
            "regenerating": sorted(self._regenerating),
            "alerts": list(self.alerts),
        }

    # ── Internals ───────────────────────────────────────────────────

    async def _apply(
        self,
        update: Callable[[Website], Website],
        services: EditorServices | None = None,
    ) -> bool:
        current = self.website
        updated = update(current)
        if updated is current:
            return False
        self.website = updated
        await self._persist(services)
        return True

    async def _persist(self, services: EditorServices | None = None) -> None:
        # The session may be rebound to a later request while a change is in flight.
        services = services or self._services
        await services.persistence.save_website(self.user_id, self.website, status=self.status)

    async def _regenerate(self, key: str, run: Callable[[], Any], label: str) -> bool:
        if key in self._regenerating:
            logger.debug("Regeneration %s already running; ignoring", key)
            return False
        self._regenerating.add(key)
        plog.step_start(PipelineStage.EDITOR, f"Regenerating {label}", key=key)
        try:
            applied = await run()
        except ImageSearchError as e:
            plog.step_error(PipelineStage.EDITOR, f"Regenerating {label} failed", error=e)
            self._alert(f"Failed to regenerate {label}: {self._describe_image_error(e)}")
            return False
        except ContentGenerationError as e:
            plog.step_error(PipelineStage.EDITOR, f"Regenerating {label} failed", error=e)
            self._alert(f"Failed to regenerate {label}. Please try again.")
            return False
        finally:
            self._regenerating.discard(key)
        if not applied:
            logger.info("Discarded %s result: block is gone", key)
        return applied

    def _sync_panel(self, block_id: str, patch: dict[str, Any]) -> None:
        # Late results only touch a panel that still edits the same block.
        if self.panel is not None and self.panel.targets(block_id) and self.website.has_block(block_id):
            self.panel = replace(self.panel, selection={**self.panel.selection, **patch})

    def _alert(self, message: str) -> None:
        logger.warning("Editor alert for user %s: %s", self.user_id, message)
        self.alerts.append(message)

    @staticmethod
    def _image_target(block: ContentBlock, field_name: str | None) -> str | None:
        """Single-image field to regenerate, limited to the variant's schema."""
        allowed = [f for f in IMAGE_FIELDS if f in BLOCK_CONTENT_FIELDS[block.type]]
        if field_name is not None:
            return field_name if field_name in allowed else None
        present = [f for f in allowed if block.content.get(f)]
        if "backgroundImage" in present:
            return "backgroundImage"
        return (present or allowed or [None])[0]

    @staticmethod
    def _describe_image_error(error: ImageSearchError) -> str:
        if error.missing_credential:
            return f"{error.message}. Please set {error.missing_credential}."
        return error.message

    def _teardown_panel(self) -> None:
        self.panel = None

    def _reset_to_idle(self) -> None:
        self._teardown_panel()
        self.selected_block_id = None
        self.floating_menu = None
        self.editing_text = None

    def _start_transition(self) -> None:
        self._transition_token += 1
        token = self._transition_token
        self.is_transitioning = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.is_transitioning = False
            return
        loop.call_later(self._transition_seconds, self._end_transition, token)

    def _end_transition(self, token: int) -> None:
        if token == self._transition_token:
            self.is_transitioning = False

    @staticmethod
    def _panel_for_element(
        block: ContentBlock,
        element: ElementKind,
        field_name: str | None,
    ) -> tuple[PanelKind, str | None]:
        if block.type == BlockType.BANNER_GRID:
            return PanelKind.BANNER_GRID, field_name
        if element == ElementKind.IMAGE:
            return PanelKind.IMAGE_SETTINGS, field_name or "image"
        if element == ElementKind.BACKGROUND:
            return PanelKind.IMAGE_SETTINGS, field_name or "backgroundImage"
        if element == ElementKind.BUTTON:
            return PanelKind.BUTTON_SETTINGS, field_name or "buttonText"
        if block.has_image():
            return PanelKind.TEXT_IMAGE, field_name
        return PanelKind.EDIT, field_name

    @staticmethod
    def _initial_selection(kind: PanelKind, block: ContentBlock | None, field_name: str | None) -> dict[str, Any]:
        if kind == PanelKind.ADD_SECTION:
            return {"query": ""}
        if block is None:
            return {}
        content = block.content
        if kind == PanelKind.IMAGE_SETTINGS:
            return {"imageUrl": content.get(field_name or "image")}
        if kind == PanelKind.BUTTON_SETTINGS:
            return {"text": content.get("buttonText", ""), "style": block.styles.get("buttonStyle", "primary")}
        if kind == PanelKind.TEXT_IMAGE:
            return {
                "text": content.get(field_name or "title", ""),
                "imageUrl": content.get("image") or content.get("backgroundImage"),
            }
        if kind == PanelKind.BANNER_GRID:
            return {
                "tagline": content.get("tagline", ""),
                "headline": content.get("headline", ""),
                "subtext": content.get("subtext", ""),
                "images": list(content.get("images") or []),
            }
        return {"tab": "content"}

    def _content_prompt(self, block: ContentBlock, fields: list[str]) -> str:
        keys = ", ".join(f'"{f}": "..."' for f in fields)
        return (
            f"Rewrite the {block.type.value} section of the website for "
            f'"{self.profile.name}", a {self.profile.type} business in {self.profile.location}. '
            f"Current text: {block.known_content()}. "
            f"Return JSON: {{{keys}}}"
        )

