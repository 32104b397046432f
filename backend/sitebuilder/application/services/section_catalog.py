"""Section Catalog — registry of addable section archetypes and their defaults.

The registry itself is data (``infrastructure/catalog/section_catalog.yaml``);
this module loads it and turns a section id plus a business profile into a
ready-to-insert ContentBlock.
"""

import asyncio
import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from uuid import uuid4

import yaml

from sitebuilder.application.services.image_service import ImageService
from sitebuilder.domain.entities import BlockType, BusinessProfile, ContentBlock
from sitebuilder.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = (
    Path(__file__).resolve().parents[2] / "infrastructure" / "catalog" / "section_catalog.yaml"
)


@dataclass(frozen=True)
class SectionDefinition:
    id: str
    name: str
    description: str
    block_type: BlockType
    content: dict[str, Any] = field(default_factory=dict)
    images: dict[str, Any] = field(default_factory=dict)
    styles: dict[str, Any] = field(default_factory=dict)

    def matches(self, needle: str) -> bool:
        return needle in self.name.lower() or needle in self.description.lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "blockType": self.block_type.value,
        }


@dataclass(frozen=True)
class SectionCategory:
    key: str
    display_name: str
    icon: str
    sections: tuple[SectionDefinition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "displayName": self.display_name,
            "icon": self.icon,
            "sections": [s.to_dict() for s in self.sections],
        }


class SectionCatalog:
    """Ordered categories of section archetypes."""

    def __init__(self, categories: list[SectionCategory], image_service: ImageService | None = None):
        self._categories = tuple(categories)
        self._image_service = image_service
        self._by_id: dict[str, SectionDefinition] = {}
        for category in self._categories:
            for section in category.sections:
                if section.id in self._by_id:
                    raise ValueError(f"Duplicate section id in catalog: {section.id}")
                self._by_id[section.id] = section

    @classmethod
    def from_yaml(
        cls,
        path: Path | str = DEFAULT_CATALOG_PATH,
        image_service: ImageService | None = None,
    ) -> "SectionCatalog":
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        categories = []
        for raw_category in data.get("categories", []):
            sections = tuple(
                SectionDefinition(
                    id=raw["id"],
                    name=raw["name"],
                    description=raw.get("description", ""),
                    block_type=BlockType(raw["block_type"]),
                    content=raw.get("content") or {},
                    images=raw.get("images") or {},
                    styles=raw.get("styles") or {},
                )
                for raw in raw_category.get("sections", [])
            )
            categories.append(
                SectionCategory(
                    key=raw_category["key"],
                    display_name=raw_category["display_name"],
                    icon=raw_category.get("icon", ""),
                    sections=sections,
                )
            )
        logger.debug("Loaded %d section categories from %s", len(categories), path)
        return cls(categories, image_service)

    def with_image_service(self, image_service: ImageService) -> "SectionCatalog":
        return SectionCatalog(list(self._categories), image_service)

    # ── Listing ─────────────────────────────────────────────────────

    def list_categories(self) -> list[SectionCategory]:
        return list(self._categories)

    def filter_by_query(self, query: str | None) -> list[SectionCategory]:
        """Sections whose name or description contains ``query``; empty categories dropped."""
        needle = (query or "").strip().lower()
        if not needle:
            return self.list_categories()

        filtered = []
        for category in self._categories:
            sections = tuple(s for s in category.sections if s.matches(needle))
            if sections:
                filtered.append(
                    SectionCategory(
                        key=category.key,
                        display_name=category.display_name,
                        icon=category.icon,
                        sections=sections,
                    )
                )
        return filtered

    def get_section(self, section_id: str) -> SectionDefinition:
        section = self._by_id.get(section_id)
        if section is None:
            raise EntityNotFoundError("Section", section_id)
        return section

    # ── Defaults ────────────────────────────────────────────────────

    def map_section_to_block_type(self, section_id: str) -> BlockType:
        return self.get_section(section_id).block_type

    def create_default_styles(self, section_id: str) -> dict[str, Any]:
        return copy.deepcopy(self.get_section(section_id).styles)

    async def create_default_content(self, section_id: str, profile: BusinessProfile) -> dict[str, Any]:
        """Interpolate the section's template and fetch its images concurrently.

        Raises:
            EntityNotFoundError: unknown section id.
            ImageSearchError: an image lookup failed.
        """
        section = self.get_section(section_id)
        values = {"name": profile.name, "type": profile.type, "location": profile.location}
        content = _interpolate(section.content, values)

        if section.images and self._image_service is not None:
            content.update(await self._fetch_images(section.images, profile))
        return content

    async def create_block(self, section_id: str, profile: BusinessProfile) -> ContentBlock:
        block_type = self.map_section_to_block_type(section_id)
        return ContentBlock(
            id=f"{block_type.value}-{uuid4().hex[:8]}",
            type=block_type,
            content=await self.create_default_content(section_id, profile),
            styles=self.create_default_styles(section_id),
        )

    async def _fetch_images(self, spec: dict[str, Any], profile: BusinessProfile) -> dict[str, Any]:
        # Flatten to (field, role) pairs so every lookup runs in one gather.
        jobs: list[tuple[str, str]] = []
        for field_name, roles in spec.items():
            if isinstance(roles, list):
                jobs.extend((field_name, role) for role in roles)
            else:
                jobs.append((field_name, roles))

        images = await asyncio.gather(
            *(self._image_service.fetch_for_role(profile, role) for _, role in jobs)
        )

        result: dict[str, Any] = {}
        for (field_name, _), image in zip(jobs, images):
            if isinstance(spec[field_name], list):
                result.setdefault(field_name, []).append(image.image_url)
            else:
                result[field_name] = image.image_url
        return result


def _interpolate(value: Any, values: dict[str, str]) -> Any:
    if isinstance(value, str):
        return value.format(**values)
    if isinstance(value, dict):
        return {k: _interpolate(v, values) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate(v, values) for v in value]
    return value
