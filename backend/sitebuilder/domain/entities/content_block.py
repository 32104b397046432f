"""Domain entity — one section ("block") of a generated website."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BlockType(str, Enum):
    """Closed set of block variants a website can be composed of."""

    HERO = "hero"
    ABOUT = "about"
    SERVICES = "services"
    FEATURES = "features"
    TESTIMONIALS = "testimonials"
    CONTACT = "contact"
    CTA = "cta"
    GALLERY = "gallery"
    BANNER_GRID = "banner-grid"


_COMMON_FIELDS = frozenset({"title", "subtitle", "htmlContent"})

# Optional-field schema of each variant. Content is structurally permissive:
# fields outside a variant's schema are kept on the block but ignored when
# rendering or editing through known_content().
BLOCK_CONTENT_FIELDS: dict[BlockType, frozenset[str]] = {
    BlockType.HERO: _COMMON_FIELDS | {"description", "buttonText", "backgroundImage", "image", "slides"},
    BlockType.ABOUT: _COMMON_FIELDS | {"description", "image", "highlights", "buttonText"},
    BlockType.SERVICES: _COMMON_FIELDS | {"description", "services", "images"},
    BlockType.FEATURES: _COMMON_FIELDS | {"description", "features"},
    BlockType.TESTIMONIALS: _COMMON_FIELDS | {"testimonials"},
    BlockType.CONTACT: _COMMON_FIELDS | {
        "description", "address", "email", "phone", "formFields", "hours", "socialLinks",
    },
    BlockType.CTA: _COMMON_FIELDS | {"description", "buttonText", "backgroundImage"},
    BlockType.GALLERY: _COMMON_FIELDS | {"description", "images"},
    BlockType.BANNER_GRID: _COMMON_FIELDS | {"tagline", "headline", "subtext", "images", "buttonText"},
}

# Content fields that hold a single image URL.
IMAGE_FIELDS = ("image", "backgroundImage")


@dataclass(frozen=True)
class ContentBlock:
    """A section of the page with a variant-dependent content payload.

    ``id`` is stable for the block's lifetime. Blocks are never mutated in
    place: every change produces a new block via ``with_content`` or
    ``with_styles``.
    """

    id: str
    type: BlockType
    content: dict[str, Any] = field(default_factory=dict)
    styles: dict[str, Any] = field(default_factory=dict)

    def with_content(self, patch: dict[str, Any]) -> "ContentBlock":
        """Return a copy with ``patch`` shallow-merged into the content."""
        return ContentBlock(
            id=self.id,
            type=self.type,
            content={**self.content, **patch},
            styles=dict(self.styles),
        )

    def with_styles(self, patch: dict[str, Any]) -> "ContentBlock":
        """Return a copy with ``patch`` shallow-merged into the styles."""
        return ContentBlock(
            id=self.id,
            type=self.type,
            content=dict(self.content),
            styles={**self.styles, **patch},
        )

    def known_content(self) -> dict[str, Any]:
        """Content restricted to the fields this variant defines."""
        allowed = BLOCK_CONTENT_FIELDS[self.type]
        return {k: v for k, v in self.content.items() if k in allowed}

    def has_image(self) -> bool:
        return any(self.content.get(f) for f in IMAGE_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "content": dict(self.content),
            "styles": dict(self.styles),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentBlock":
        content = data.get("content") or {}
        styles = data.get("styles") or {}
        if not isinstance(content, dict) or not isinstance(styles, dict):
            raise ValueError(f"Block '{data.get('id')}' has a malformed payload")
        return cls(
            id=str(data["id"]),
            type=BlockType(data["type"]),
            content=dict(content),
            styles=dict(styles),
        )
