"""Unit tests for the stock-photo query builder."""

from sitebuilder.application.services.image_query_builder import (
    QUERY_SUFFIX,
    ImageQueryBuilder,
)

from fakes import seeded_rng


def test_business_keywords_prefers_longest_match():
    assert ImageQueryBuilder.business_keywords("Dental clinic") == ("dental clinic", "dentist")


def test_business_keywords_falls_back_to_first_two_words():
    assert ImageQueryBuilder.business_keywords("Artisan candle makers") == (
        "Artisan candle",
        "Artisan candle",
    )


def test_business_keywords_empty_type():
    assert ImageQueryBuilder.business_keywords("") == ("business", "business")


def test_hero_query_contains_keyword_location_and_suffix():
    builder = ImageQueryBuilder(seeded_rng())
    for _ in range(20):
        query = builder.build_query("Dental clinic", "hero", "Denver, CO, USA")
        assert "dental clinic" in query
        assert "Denver, CO, USA" in query
        assert query.endswith(QUERY_SUFFIX)


def test_query_without_location():
    query = ImageQueryBuilder(seeded_rng()).build_query("Bakery", "gallery")
    assert query.endswith(QUERY_SUFFIX)
    assert "  " not in query


def test_unknown_role_uses_default_phrasings():
    query = ImageQueryBuilder(seeded_rng()).build_query("Bakery", "mystery-role", "Paris, France")
    assert "Paris, France" in query


def test_seeded_builders_repeat_their_choices():
    first = ImageQueryBuilder(seeded_rng(3))
    second = ImageQueryBuilder(seeded_rng(3))
    queries = [first.build_query("Yoga studio", "about") for _ in range(5)]
    assert queries == [second.build_query("Yoga studio", "about") for _ in range(5)]
