"""Unit tests for the BusinessProfileStore and location suggestions."""

import pytest

from sitebuilder.application.services import BusinessProfileStore
from sitebuilder.application.services.persistence_facade import BUSINESS_PROFILE_KEY
from sitebuilder.domain.entities import BusinessProfile
from sitebuilder.domain.exceptions import ProfileIncompleteError

from fakes import FakeUserStateRepository

USER = "user-1"


@pytest.fixture
def repo() -> FakeUserStateRepository:
    return FakeUserStateRepository()


@pytest.fixture
def store(repo) -> BusinessProfileStore:
    return BusinessProfileStore(repo)


@pytest.mark.asyncio
async def test_set_and_get_profile(store: BusinessProfileStore):
    profile = BusinessProfile(name="Pinewood Dental", type="Dental clinic", location="Denver, CO, USA")
    await store.set(USER, profile)

    assert await store.get(USER) == profile
    assert await store.is_onboarded(USER) is True


@pytest.mark.asyncio
async def test_incomplete_profile_is_rejected(store: BusinessProfileStore):
    with pytest.raises(ProfileIncompleteError) as exc_info:
        await store.set(USER, BusinessProfile(name="Pinewood", type="  ", location=""))

    assert exc_info.value.missing == ["type", "location"]
    assert await store.is_onboarded(USER) is False
    assert await store.get(USER) is None


@pytest.mark.asyncio
async def test_unreadable_profile_reads_as_missing(store: BusinessProfileStore, repo):
    await repo.set(USER, BUSINESS_PROFILE_KEY, "[broken")
    assert await store.get(USER) is None

    await repo.set(USER, BUSINESS_PROFILE_KEY, '["a list"]')
    assert await store.get(USER) is None


def test_suggest_locations_matches_substring():
    suggestions = BusinessProfileStore.suggest_locations("san")
    assert suggestions
    assert len(suggestions) <= 5
    assert all("san" in s.lower() for s in suggestions)


def test_suggest_locations_needs_two_characters():
    assert BusinessProfileStore.suggest_locations("l") == []
    assert BusinessProfileStore.suggest_locations("  ") == []


def test_suggest_locations_is_case_insensitive():
    assert BusinessProfileStore.suggest_locations("DENVER") == ["Denver, CO, USA"]
