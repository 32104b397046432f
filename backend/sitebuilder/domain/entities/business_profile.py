"""Domain entity — the business described by the user during onboarding."""

from dataclasses import asdict, dataclass
from typing import Any

# Fields that must be non-empty before onboarding may advance.
REQUIRED_PROFILE_FIELDS = ("name", "type", "location")


@dataclass
class BusinessProfile:
    """Onboarding-captured description of the user's business.

    Drives theme selection, copy generation, and image queries.
    """

    name: str
    type: str
    location: str
    description: str = ""

    def missing_fields(self) -> list[str]:
        """Return the required fields that are empty or whitespace only."""
        return [f for f in REQUIRED_PROFILE_FIELDS if not getattr(self, f, "").strip()]

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BusinessProfile":
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type", "")),
            location=str(data.get("location", "")),
            description=str(data.get("description", "") or ""),
        )

    @classmethod
    def placeholder(cls) -> "BusinessProfile":
        """Profile used when generation runs without any business info."""
        return cls(name="Your Business", type="Business", location="Your Location")
