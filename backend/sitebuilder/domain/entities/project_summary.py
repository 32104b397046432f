"""Domain entity — dashboard projection of a website."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class ProjectSummary:
    """Denormalized summary kept in the user's bounded recent-projects list.

    At most one summary exists per website id.
    """

    id: str
    title: str
    business_name: str
    business_type: str
    status: str = "draft"
    preview_image: str | None = None
    last_modified: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "businessName": self.business_name,
            "businessType": self.business_type,
            "lastModified": self.last_modified.isoformat(),
            "status": self.status,
            "previewImage": self.preview_image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectSummary":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            business_name=str(data.get("businessName", "")),
            business_type=str(data.get("businessType", "")),
            status=str(data.get("status", "draft")),
            preview_image=data.get("previewImage"),
            last_modified=datetime.fromisoformat(data["lastModified"]),
        )
