"""Business Profile Store — onboarding data persisted per user."""

import json
import logging

from sitebuilder.application.interfaces import UserStateRepository
from sitebuilder.application.services.persistence_facade import (
    BUSINESS_PROFILE_KEY,
    ONBOARDING_COMPLETED_KEY,
)
from sitebuilder.domain.entities import BusinessProfile
from sitebuilder.domain.exceptions import ProfileIncompleteError

logger = logging.getLogger(__name__)

MIN_LOCATION_QUERY = 2

# Popular cities offered as location suggestions during onboarding.
WORLD_CITIES = (
    "New York, NY, USA",
    "Los Angeles, CA, USA",
    "Chicago, IL, USA",
    "Houston, TX, USA",
    "Phoenix, AZ, USA",
    "Philadelphia, PA, USA",
    "San Antonio, TX, USA",
    "San Diego, CA, USA",
    "Dallas, TX, USA",
    "San Jose, CA, USA",
    "Austin, TX, USA",
    "Jacksonville, FL, USA",
    "Fort Worth, TX, USA",
    "Columbus, OH, USA",
    "Charlotte, NC, USA",
    "San Francisco, CA, USA",
    "Indianapolis, IN, USA",
    "Seattle, WA, USA",
    "Denver, CO, USA",
    "Boston, MA, USA",
    "London, UK",
    "Manchester, UK",
    "Birmingham, UK",
    "Leeds, UK",
    "Glasgow, UK",
    "Liverpool, UK",
    "Bristol, UK",
    "Edinburgh, UK",
    "Toronto, ON, Canada",
    "Montreal, QC, Canada",
    "Vancouver, BC, Canada",
    "Calgary, AB, Canada",
    "Ottawa, ON, Canada",
    "Sydney, NSW, Australia",
    "Melbourne, VIC, Australia",
    "Brisbane, QLD, Australia",
    "Perth, WA, Australia",
    "Adelaide, SA, Australia",
    "Berlin, Germany",
    "Hamburg, Germany",
    "Munich, Germany",
    "Frankfurt, Germany",
    "Paris, France",
    "Marseille, France",
    "Lyon, France",
    "Madrid, Spain",
    "Barcelona, Spain",
    "Valencia, Spain",
    "Rome, Italy",
    "Milan, Italy",
    "Florence, Italy",
    "Amsterdam, Netherlands",
    "Rotterdam, Netherlands",
    "Brussels, Belgium",
    "Vienna, Austria",
    "Zurich, Switzerland",
    "Stockholm, Sweden",
    "Copenhagen, Denmark",
    "Oslo, Norway",
    "Dublin, Ireland",
    "Lisbon, Portugal",
    "Tokyo, Japan",
    "Osaka, Japan",
    "Seoul, South Korea",
    "Singapore",
    "Hong Kong",
    "Mumbai, India",
    "Delhi, India",
    "Bangalore, India",
    "Dubai, UAE",
    "São Paulo, Brazil",
    "Rio de Janeiro, Brazil",
    "Mexico City, Mexico",
    "Buenos Aires, Argentina",
    "Cape Town, South Africa",
    "Johannesburg, South Africa",
    "Auckland, New Zealand",
)


class BusinessProfileStore:
    """Reads and writes the user's business profile.

    Profiles are only accepted once every required field is filled in, which
    mirrors the onboarding flow refusing to advance.
    """

    def __init__(self, state_repository: UserStateRepository):
        self._state = state_repository

    async def set(self, user_id: str, profile: BusinessProfile) -> BusinessProfile:
        missing = profile.missing_fields()
        if missing:
            raise ProfileIncompleteError(missing)

        await self._state.set(user_id, BUSINESS_PROFILE_KEY, json.dumps(profile.to_dict()))
        await self._state.set(user_id, ONBOARDING_COMPLETED_KEY, "true")
        logger.info("Stored business profile for user %s (%s)", user_id, profile.name)
        return profile

    async def get(self, user_id: str) -> BusinessProfile | None:
        raw = await self._state.get(user_id, BUSINESS_PROFILE_KEY)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored business profile for user %s is unreadable", user_id)
            return None
        if not isinstance(data, dict):
            logger.warning("Stored business profile for user %s is not an object", user_id)
            return None
        return BusinessProfile.from_dict(data)

    async def is_onboarded(self, user_id: str) -> bool:
        return await self._state.get(user_id, ONBOARDING_COMPLETED_KEY) == "true"

    @staticmethod
    def suggest_locations(query: str, limit: int = 5) -> list[str]:
        """Cities containing ``query`` (case-insensitive); empty below two characters."""
        needle = (query or "").strip().lower()
        if len(needle) < MIN_LOCATION_QUERY:
            return []
        return [city for city in WORLD_CITIES if needle in city.lower()][:limit]
