"""Top-level API router — aggregates all endpoint routers under /api."""

from fastapi import APIRouter

from sitebuilder.presentation.api.endpoints.health import router as health_router
from sitebuilder.presentation.api.endpoints.content import router as content_router
from sitebuilder.presentation.api.endpoints.websites import router as websites_router
from sitebuilder.presentation.api.endpoints.profile import router as profile_router
from sitebuilder.presentation.api.endpoints.sections import router as sections_router
from sitebuilder.presentation.api.endpoints.projects import router as projects_router
from sitebuilder.presentation.api.endpoints.editor import router as editor_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(content_router)
router.include_router(websites_router)
router.include_router(profile_router)
router.include_router(sections_router)
router.include_router(projects_router)
router.include_router(editor_router)
