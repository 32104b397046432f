"""Pydantic DTOs for copy generation and image lookup."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sitebuilder.application.schemas.business_profile import BusinessInfoSchema


class GenerateContentRequest(BaseModel):
    """Website copy request; both fields are optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    prompt: str | None = None
    business_info: BusinessInfoSchema | None = None


class GenerateContentResponse(BaseModel):
    content: dict[str, Any]


class GenerateCopyRequest(BaseModel):
    type: Literal["page", "blog", "seo", "marketing"]
    topic: str = Field(..., min_length=1)
    keywords: list[str] | None = None
    tone: Literal["professional", "casual", "friendly", "formal"] = "professional"
    length: Literal["short", "medium", "long"] = "medium"


class FetchImageRequest(BaseModel):
    query: str | None = None


class FetchImageResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_url: str
    photographer: str
    alt: str


class ErrorResponse(BaseModel):
    error: str
