"""Persistence & Sync Facade — per-user snapshot of the website and recent projects."""

import json
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sitebuilder.application.interfaces import UserStateRepository
from sitebuilder.domain.entities import ProjectSummary, Website
from sitebuilder.domain.exceptions import CorruptSnapshotError

logger = logging.getLogger(__name__)

# Per-user storage keys.
BUSINESS_PROFILE_KEY = "business_profile"
GENERATED_WEBSITE_KEY = "generated_website"
ONBOARDING_COMPLETED_KEY = "onboarding_completed"
RECENT_PROJECTS_KEY = "recent_projects"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PersistenceFacade:
    """Writes the whole website snapshot and its dashboard summary.

    Every editor mutation calls ``save_website``; nothing else triggers
    persistence.
    """

    def __init__(
        self,
        state_repository: UserStateRepository,
        *,
        recent_limit: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._state = state_repository
        self._recent_limit = recent_limit
        self._clock = clock

    async def save_website(
        self,
        user_id: str,
        website: Website,
        *,
        status: str = "draft",
        preview_image: str | None = None,
    ) -> ProjectSummary:
        """Persist the snapshot, then upsert the summary at the front of the list."""
        await self._state.set(user_id, GENERATED_WEBSITE_KEY, json.dumps(website.to_dict()))

        summary = ProjectSummary(
            id=website.id,
            title=website.title,
            business_name=website.business_name,
            business_type=website.business_type,
            status=status,
            preview_image=preview_image or self._preview_image(website),
            last_modified=self._clock(),
        )
        projects = [p for p in await self.recent_projects(user_id) if p.id != website.id]
        projects.insert(0, summary)
        projects = projects[: self._recent_limit]
        await self._state.set(
            user_id,
            RECENT_PROJECTS_KEY,
            json.dumps([p.to_dict() for p in projects]),
        )
        return summary

    async def load_website(self, user_id: str) -> Website | None:
        """Return the stored website, or None when nothing was saved.

        Raises:
            CorruptSnapshotError: if the stored payload cannot be parsed.
        """
        raw = await self._state.get(user_id, GENERATED_WEBSITE_KEY)
        if raw is None:
            return None
        try:
            return Website.from_dict(json.loads(raw))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise CorruptSnapshotError(user_id, str(e)) from e

    async def recent_projects(self, user_id: str) -> list[ProjectSummary]:
        raw = await self._state.get(user_id, RECENT_PROJECTS_KEY)
        if raw is None:
            return []
        try:
            return [ProjectSummary.from_dict(item) for item in json.loads(raw)]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            # The list is a rebuildable projection; start over instead of failing.
            logger.warning("Discarding unreadable recent projects for user %s: %s", user_id, e)
            return []

    async def project_status(self, user_id: str, website_id: str) -> str:
        for project in await self.recent_projects(user_id):
            if project.id == website_id:
                return project.status
        return "draft"

    async def clear_website(self, user_id: str) -> None:
        await self._state.delete(user_id, GENERATED_WEBSITE_KEY)

    @staticmethod
    def _preview_image(website: Website) -> str | None:
        for block in website.blocks:
            for field_name in ("backgroundImage", "image"):
                value = block.content.get(field_name)
                if isinstance(value, str) and value:
                    return value
        return None
