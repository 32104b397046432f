"""Pydantic DTOs for saved websites, pages, sections and recent projects."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebsiteSaveRequest(_CamelModel):
    """Body of ``POST /api/websites``.

    Name and subdomain are validated by the service so that failures answer
    with an ``{"error": ...}`` body.
    """

    name: str
    subdomain: str
    project_id: str = Field(..., min_length=1)
    theme: dict[str, Any] = Field(default_factory=dict)
    content: list[dict[str, Any]] = Field(default_factory=list)
    business_info: dict[str, Any] = Field(default_factory=dict)


class WebsiteUpdateRequest(_CamelModel):
    """Body of ``PUT /api/websites/{id}``. Omitted fields are left unchanged.

    ``content`` replaces the blocks stored on the home page.
    """

    name: str | None = None
    theme: dict[str, Any] | None = None
    content: list[dict[str, Any]] | None = None
    business_info: dict[str, Any] | None = None
    status: str | None = None


class PageCreateRequest(_CamelModel):
    """Body of ``POST /api/websites/{id}/pages``."""

    name: str
    slug: str
    title: str
    content: dict[str, Any] = Field(default_factory=dict)
    is_home_page: bool = False


class SavedWebsiteSchema(_CamelModel):
    id: str
    name: str
    subdomain: str
    project_id: str
    theme: dict[str, Any]
    content: list[dict[str, Any]]
    business_info: dict[str, Any]
    status: str
    is_published: bool
    created_at: datetime
    updated_at: datetime


class WebsiteSaveResponse(BaseModel):
    success: bool = True
    website: SavedWebsiteSchema
    message: str = "Website saved successfully"


class SitePageResponse(_CamelModel):
    id: str
    website_id: str
    name: str
    slug: str
    title: str
    content: dict[str, Any]
    is_home_page: bool
    created_at: datetime


class SiteResponse(_CamelModel):
    id: str
    name: str
    subdomain: str
    project_id: str
    theme: dict[str, Any]
    business_info: dict[str, Any]
    status: str
    is_published: bool
    created_at: datetime
    updated_at: datetime


class SubdomainCheckResponse(BaseModel):
    subdomain: str
    available: bool
    reason: str | None = None


class ProjectSummaryResponse(_CamelModel):
    id: str
    title: str
    business_name: str
    business_type: str
    last_modified: datetime
    status: str
    preview_image: str | None = None


class SectionSchema(_CamelModel):
    id: str
    name: str
    description: str
    block_type: str


class SectionCategorySchema(_CamelModel):
    key: str
    display_name: str
    icon: str
    sections: list[SectionSchema]
