"""Pydantic DTOs for onboarding and the business profile."""

from pydantic import BaseModel, Field


class BusinessInfoSchema(BaseModel):
    """Business profile as exchanged with the frontend."""

    name: str = Field(..., max_length=200, examples=["Pinewood Dental"])
    type: str = Field(..., max_length=200, examples=["dental"])
    location: str = Field(..., max_length=200, examples=["Austin, TX"])
    description: str = Field("", max_length=2000)


class BusinessProfileResponse(BusinessInfoSchema):
    onboarded: bool = True


class LocationSuggestionsResponse(BaseModel):
    query: str
    suggestions: list[str]
