"""Pydantic DTOs for editor actions.

Every user interaction is one action object discriminated by ``action``;
the endpoint dispatches it to the matching BlockEditor method.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Action(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Selection, menu and panels ──


class ClickBlockAction(_Action):
    action: Literal["click-block"]
    block_id: str


class DoubleClickBlockAction(_Action):
    action: Literal["double-click-block"]
    block_id: str
    x: int
    y: int
    viewport_width: int | None = Field(None, gt=0)
    viewport_height: int | None = Field(None, gt=0)


class ClickElementAction(_Action):
    action: Literal["click-element"]
    block_id: str
    element: Literal["image", "background", "button", "text"]
    field: str | None = None


class OpenAddSectionAction(_Action):
    action: Literal["open-add-section"]
    after_id: str | None = None


class ClosePanelAction(_Action):
    action: Literal["close-panel"]


class UpdatePanelSelectionAction(_Action):
    action: Literal["update-panel-selection"]
    patch: dict[str, Any]


class ClickBackgroundAction(_Action):
    action: Literal["click-background"]


class CloseMenuAction(_Action):
    action: Literal["close-menu"]


class MenuActionAction(_Action):
    action: Literal["menu-action"]
    menu_action: Literal["regenerate-images", "move-up", "move-down", "delete"]


class SetPreviewAction(_Action):
    action: Literal["set-preview"]
    enabled: bool


class DoubleClickTextAction(_Action):
    action: Literal["double-click-text"]
    block_id: str
    field: str


class BlurTextAction(_Action):
    action: Literal["blur-text"]


# ── Document mutations ──


class ChangeTextAction(_Action):
    action: Literal["change-text"]
    block_id: str
    field: str
    value: str


class UpdateContentAction(_Action):
    action: Literal["update-content"]
    block_id: str
    patch: dict[str, Any]


class UpdateStyleAction(_Action):
    action: Literal["update-style"]
    block_id: str
    patch: dict[str, Any]


class AddSectionAction(_Action):
    action: Literal["add-section"]
    section_id: str
    after_id: str | None = None


class MoveBlockAction(_Action):
    action: Literal["move-block"]
    block_id: str
    direction: Literal["up", "down"]


class DeleteBlockAction(_Action):
    action: Literal["delete-block"]
    block_id: str


class PublishAction(_Action):
    action: Literal["publish"]


class DismissAlertsAction(_Action):
    action: Literal["dismiss-alerts"]


# ── Regeneration ──


class RegenerateImageAction(_Action):
    action: Literal["regenerate-image"]
    block_id: str
    field: str | None = None


class RegenerateContentAction(_Action):
    action: Literal["regenerate-content"]
    block_id: str


class RegenerateBannerTextAction(_Action):
    action: Literal["regenerate-banner-text"]
    block_id: str
    field: Literal["tagline", "headline", "subtext"]


class RegenerateBannerImagesAction(_Action):
    action: Literal["regenerate-banner-images"]
    block_id: str


EditorAction = Annotated[
    Union[
        ClickBlockAction,
        DoubleClickBlockAction,
        ClickElementAction,
        OpenAddSectionAction,
        ClosePanelAction,
        UpdatePanelSelectionAction,
        ClickBackgroundAction,
        CloseMenuAction,
        MenuActionAction,
        SetPreviewAction,
        DoubleClickTextAction,
        BlurTextAction,
        ChangeTextAction,
        UpdateContentAction,
        UpdateStyleAction,
        AddSectionAction,
        MoveBlockAction,
        DeleteBlockAction,
        PublishAction,
        DismissAlertsAction,
        RegenerateImageAction,
        RegenerateContentAction,
        RegenerateBannerTextAction,
        RegenerateBannerImagesAction,
    ],
    Field(discriminator="action"),
]


class GenerateWebsiteRequest(BaseModel):
    prompt: str | None = None


class EditorStateResponse(BaseModel):
    """Serialized editor state; ``applied`` reports whether the action took effect."""

    applied: bool = True
    state: dict[str, Any]
