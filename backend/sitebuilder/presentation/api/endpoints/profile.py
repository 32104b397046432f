"""Business profile and onboarding endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sitebuilder.application.schemas import (
    BusinessInfoSchema,
    BusinessProfileResponse,
    LocationSuggestionsResponse,
)
from sitebuilder.application.services import BusinessProfileStore
from sitebuilder.domain.entities import BusinessProfile
from sitebuilder.domain.exceptions import ProfileIncompleteError
from sitebuilder.infrastructure.dependencies import get_business_profile_store, get_user_id

router = APIRouter(tags=["Onboarding"])


@router.get("/profile", response_model=BusinessProfileResponse)
async def get_profile(
    user_id: str = Depends(get_user_id),
    store: BusinessProfileStore = Depends(get_business_profile_store),
) -> BusinessProfileResponse:
    """Return the caller's business profile."""
    profile = await store.get(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No business profile yet")
    return BusinessProfileResponse(**profile.to_dict(), onboarded=await store.is_onboarded(user_id))


@router.put("/profile", response_model=BusinessProfileResponse)
async def put_profile(
    data: BusinessInfoSchema,
    user_id: str = Depends(get_user_id),
    store: BusinessProfileStore = Depends(get_business_profile_store),
) -> BusinessProfileResponse:
    """Complete onboarding by storing the business profile."""
    try:
        profile = await store.set(user_id, BusinessProfile.from_dict(data.model_dump()))
    except ProfileIncompleteError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return BusinessProfileResponse(**profile.to_dict(), onboarded=True)


@router.get("/onboarding/locations", response_model=LocationSuggestionsResponse)
async def suggest_locations(
    q: str = Query("", max_length=100, description="Partial city name"),
) -> LocationSuggestionsResponse:
    """Up to five city suggestions for the location field."""
    return LocationSuggestionsResponse(query=q, suggestions=BusinessProfileStore.suggest_locations(q))
