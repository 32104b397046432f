"""Domain entities for the relational website copy used for save and publish.

This representation is written when the user saves or publishes; it is not
kept in sync with the per-user editing snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4


class SiteStatus(str, Enum):
    """Lifecycle states of a saved website."""

    BUILDING = "building"
    REVIEW = "review"
    LIVE = "live"
    MAINTENANCE = "maintenance"


@dataclass
class SitePage:
    """A page of a saved website. Exactly one page per site is the home page."""

    website_id: str
    name: str
    slug: str
    title: str
    content: dict[str, Any] = field(default_factory=dict)
    is_home_page: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SiteRecord:
    """Core domain entity for a saved website."""

    name: str
    subdomain: str
    project_id: str
    user_id: str | None = None
    theme: dict[str, Any] = field(default_factory=dict)
    business_info: dict[str, Any] = field(default_factory=dict)
    status: SiteStatus = SiteStatus.BUILDING
    is_published: bool = False
    id: str = field(default_factory=lambda: f"website-{uuid4().hex[:12]}")
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    def mark_published(self) -> None:
        self.is_published = True
        self.status = SiteStatus.LIVE
        self.updated_at = datetime.now(timezone.utc)

    def mark_unpublished(self) -> None:
        self.is_published = False
        self.status = SiteStatus.BUILDING
        self.updated_at = datetime.now(timezone.utc)
