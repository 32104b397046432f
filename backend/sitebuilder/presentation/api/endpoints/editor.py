"""Editor endpoints — open a session, regenerate the site, apply actions.

The editor itself is in-process state per user; every request rebinds it to
request-scoped services so mutations persist through the current session.
"""

import logging

from fastapi import APIRouter, Body, Depends, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError

from sitebuilder.application.schemas import (
    EditorAction,
    EditorStateResponse,
    ErrorResponse,
    GenerateWebsiteRequest,
)
from sitebuilder.application.schemas.editor import (
    AddSectionAction,
    BlurTextAction,
    ChangeTextAction,
    ClickBackgroundAction,
    ClickBlockAction,
    ClickElementAction,
    CloseMenuAction,
    ClosePanelAction,
    DeleteBlockAction,
    DismissAlertsAction,
    DoubleClickBlockAction,
    DoubleClickTextAction,
    MenuActionAction,
    MoveBlockAction,
    OpenAddSectionAction,
    PublishAction,
    RegenerateBannerImagesAction,
    RegenerateBannerTextAction,
    RegenerateContentAction,
    RegenerateImageAction,
    SetPreviewAction,
    UpdateContentAction,
    UpdatePanelSelectionAction,
    UpdateStyleAction,
)
from sitebuilder.application.services import (
    BlockEditor,
    BusinessProfileStore,
    EditorServices,
    EditorSessionManager,
    ElementKind,
    MenuAction,
    Viewport,
    WebsiteGenerationService,
)
from sitebuilder.domain.exceptions import (
    EntityNotFoundError,
    ImageSearchError,
    ProfileIncompleteError,
)
from sitebuilder.infrastructure.dependencies import (
    get_business_profile_store,
    get_editor_services,
    get_editor_session_manager,
    get_user_id,
    get_website_generation_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor", tags=["Editor"])

_ACTION_ADAPTER: TypeAdapter = TypeAdapter(EditorAction)

_ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def _profile_error(e: ProfileIncompleteError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(e), missing=e.missing)


def _image_error(e: ImageSearchError) -> JSONResponse:
    message = e.message
    if e.missing_credential:
        message = f"{message}. Please set {e.missing_credential}."
    return _error(e.status_code, message)


@router.get("", response_model=EditorStateResponse, responses=_ERROR_RESPONSES)
async def open_editor(
    user_id: str = Depends(get_user_id),
    services: EditorServices = Depends(get_editor_services),
    profile_store: BusinessProfileStore = Depends(get_business_profile_store),
    generator: WebsiteGenerationService = Depends(get_website_generation_service),
    manager: EditorSessionManager = Depends(get_editor_session_manager),
):
    """Open the editor, restoring the saved website or generating a new one."""
    try:
        editor = await manager.open(user_id, services, profile_store=profile_store, generator=generator)
    except ProfileIncompleteError as e:
        return _profile_error(e)
    except ImageSearchError as e:
        logger.warning("Website generation failed for user %s: %s", user_id, e)
        return _image_error(e)
    return EditorStateResponse(state=editor.snapshot())


@router.post("/generate", response_model=EditorStateResponse, responses=_ERROR_RESPONSES)
async def regenerate_website(
    data: GenerateWebsiteRequest,
    user_id: str = Depends(get_user_id),
    services: EditorServices = Depends(get_editor_services),
    profile_store: BusinessProfileStore = Depends(get_business_profile_store),
    generator: WebsiteGenerationService = Depends(get_website_generation_service),
    manager: EditorSessionManager = Depends(get_editor_session_manager),
):
    """Throw away the current website and generate a fresh one."""
    try:
        editor = await manager.regenerate(
            user_id,
            services,
            profile_store=profile_store,
            generator=generator,
            prompt=data.prompt,
        )
    except ProfileIncompleteError as e:
        return _profile_error(e)
    except ImageSearchError as e:
        logger.warning("Website regeneration failed for user %s: %s", user_id, e)
        return _image_error(e)
    return EditorStateResponse(state=editor.snapshot())


@router.post("/actions", response_model=EditorStateResponse, responses=_ERROR_RESPONSES)
async def apply_action(
    payload: dict = Body(...),
    user_id: str = Depends(get_user_id),
    services: EditorServices = Depends(get_editor_services),
    profile_store: BusinessProfileStore = Depends(get_business_profile_store),
    generator: WebsiteGenerationService = Depends(get_website_generation_service),
    manager: EditorSessionManager = Depends(get_editor_session_manager),
):
    """Apply one user interaction and return the resulting editor state."""
    try:
        action = _ACTION_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e

    try:
        editor = await manager.open(user_id, services, profile_store=profile_store, generator=generator)
    except ProfileIncompleteError as e:
        return _profile_error(e)
    except ImageSearchError as e:
        return _image_error(e)

    try:
        applied = await _dispatch(editor, action)
    except EntityNotFoundError as e:
        return _error(status.HTTP_404_NOT_FOUND, str(e))
    return EditorStateResponse(applied=applied, state=editor.snapshot())


async def _dispatch(editor: BlockEditor, action) -> bool:
    """Route an action to the editor; returns whether it took effect."""
    # ── Selection, menu and panels ──
    if isinstance(action, ClickBlockAction):
        return editor.click_block(action.block_id)
    if isinstance(action, DoubleClickBlockAction):
        viewport = None
        if action.viewport_width and action.viewport_height:
            viewport = Viewport(action.viewport_width, action.viewport_height)
        return editor.double_click_block(action.block_id, action.x, action.y, viewport)
    if isinstance(action, ClickElementAction):
        return editor.click_element(action.block_id, ElementKind(action.element), action.field)
    if isinstance(action, OpenAddSectionAction):
        return editor.open_add_section(action.after_id)
    if isinstance(action, ClosePanelAction):
        editor.close_panel()
        return True
    if isinstance(action, UpdatePanelSelectionAction):
        return editor.update_panel_selection(action.patch)
    if isinstance(action, ClickBackgroundAction):
        editor.click_background()
        return not editor.preview_mode
    if isinstance(action, CloseMenuAction):
        editor.close_floating_menu()
        return True
    if isinstance(action, MenuActionAction):
        return await editor.menu_action(MenuAction(action.menu_action))
    if isinstance(action, SetPreviewAction):
        editor.set_preview_mode(action.enabled)
        return True
    if isinstance(action, DoubleClickTextAction):
        return editor.double_click_text(action.block_id, action.field)
    if isinstance(action, BlurTextAction):
        editor.blur_text()
        return True

    # ── Document mutations ──
    if isinstance(action, ChangeTextAction):
        return await editor.change_text(action.block_id, action.field, action.value)
    if isinstance(action, UpdateContentAction):
        return await editor.update_content(action.block_id, action.patch)
    if isinstance(action, UpdateStyleAction):
        return await editor.update_style(action.block_id, action.patch)
    if isinstance(action, AddSectionAction):
        return await editor.add_section(action.section_id, action.after_id) is not None
    if isinstance(action, MoveBlockAction):
        return await editor.move_block(action.block_id, action.direction)
    if isinstance(action, DeleteBlockAction):
        return await editor.delete_block(action.block_id)
    if isinstance(action, PublishAction):
        await editor.publish()
        return True
    if isinstance(action, DismissAlertsAction):
        return bool(editor.dismiss_alerts())

    # ── Regeneration ──
    if isinstance(action, RegenerateImageAction):
        return await editor.regenerate_image(action.block_id, action.field)
    if isinstance(action, RegenerateContentAction):
        return await editor.regenerate_content(action.block_id)
    if isinstance(action, RegenerateBannerTextAction):
        return await editor.regenerate_banner_text(action.block_id, action.field)
    if isinstance(action, RegenerateBannerImagesAction):
        return await editor.regenerate_banner_images(action.block_id)

    raise ValueError(f"Unsupported editor action: {action!r}")
