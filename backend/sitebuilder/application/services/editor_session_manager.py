"""In-process registry of editor sessions, one per user."""

import asyncio
import logging

from sitebuilder.application.services.block_editor import BlockEditor, EditorServices, Viewport
from sitebuilder.application.services.business_profile_store import BusinessProfileStore
from sitebuilder.application.services.website_generation_service import WebsiteGenerationService
from sitebuilder.domain.entities import REQUIRED_PROFILE_FIELDS, BusinessProfile, Website
from sitebuilder.domain.exceptions import CorruptSnapshotError, ProfileIncompleteError
from sitebuilder.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("EditorSessionManager")


class EditorSessionManager:
    """Holds the current BlockEditor of every user.

    A session is restored from the stored snapshot; when there is none, or it
    is unreadable, the website is regenerated from the business profile.
    """

    def __init__(self, *, transition_ms: int = 300, viewport: Viewport = Viewport(1440, 900)):
        self._transition_ms = transition_ms
        self._viewport = viewport
        self._sessions: dict[str, BlockEditor] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, user_id: str) -> BlockEditor | None:
        return self._sessions.get(user_id)

    async def open(
        self,
        user_id: str,
        services: EditorServices,
        *,
        profile_store: BusinessProfileStore,
        generator: WebsiteGenerationService,
    ) -> BlockEditor:
        """Return the user's editor, restoring or generating it on first use.

        Raises:
            ProfileIncompleteError: the user has not completed onboarding.
            ImageSearchError: regeneration was needed and an image fetch failed.
        """
        async with self._lock(user_id):
            editor = self._sessions.get(user_id)
            if editor is not None:
                editor.bind(services)
                return editor

            profile = await self._require_profile(user_id, profile_store)
            website = await self._restore(user_id, services)
            if website is None:
                website = await generator.generate(profile)
                await services.persistence.save_website(user_id, website)

            status = await services.persistence.project_status(user_id, website.id)
            editor = self._new_editor(user_id, website, profile, services, status)
            self._sessions[user_id] = editor
            return editor

    async def regenerate(
        self,
        user_id: str,
        services: EditorServices,
        *,
        profile_store: BusinessProfileStore,
        generator: WebsiteGenerationService,
        prompt: str | None = None,
    ) -> BlockEditor:
        """Replace the user's website with a freshly generated one."""
        async with self._lock(user_id):
            profile = await self._require_profile(user_id, profile_store)
            website = await generator.generate(profile, prompt)
            await services.persistence.save_website(user_id, website)
            editor = self._new_editor(user_id, website, profile, services, "draft")
            self._sessions[user_id] = editor
            plog.step_complete(PipelineStage.PERSIST, f"New editor session for {user_id}", website=website.id)
            return editor

    def close(self, user_id: str) -> None:
        self._sessions.pop(user_id, None)
        self._locks.pop(user_id, None)

    def _lock(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    @staticmethod
    async def _require_profile(user_id: str, profile_store: BusinessProfileStore) -> BusinessProfile:
        profile = await profile_store.get(user_id)
        if profile is None:
            raise ProfileIncompleteError(list(REQUIRED_PROFILE_FIELDS))
        missing = profile.missing_fields()
        if missing:
            raise ProfileIncompleteError(missing)
        return profile

    @staticmethod
    async def _restore(user_id: str, services: EditorServices) -> Website | None:
        try:
            return await services.persistence.load_website(user_id)
        except CorruptSnapshotError as e:
            logger.warning("%s; regenerating website", e)
            return None

    def _new_editor(
        self,
        user_id: str,
        website: Website,
        profile: BusinessProfile,
        services: EditorServices,
        status: str,
    ) -> BlockEditor:
        return BlockEditor(
            user_id,
            website,
            profile,
            services,
            status=status,
            transition_ms=self._transition_ms,
            viewport=self._viewport,
        )
