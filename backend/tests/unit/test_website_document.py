"""Unit tests for the Website document and its structural operations."""

import pytest

from sitebuilder.domain.entities import (
    DEFAULT_THEME,
    BlockType,
    ContentBlock,
    Website,
    theme_for_business_type,
)


def _website(*block_ids: str) -> Website:
    blocks = tuple(
        ContentBlock(id=bid, type=BlockType.ABOUT, content={"title": bid.upper()})
        for bid in block_ids
    )
    return Website(
        id="website-1",
        title="Pinewood Dental Website",
        business_name="Pinewood Dental",
        business_type="Dental clinic",
        location="Denver, CO, USA",
        blocks=blocks,
    )


# ── Insert ──


def test_insert_after_existing_block():
    site = _website("a", "b", "c")
    new = ContentBlock(id="x", type=BlockType.CTA)

    updated = site.insert_block(new, after_id="a")

    assert updated.block_ids() == ["a", "x", "b", "c"]
    assert site.block_ids() == ["a", "b", "c"]


def test_insert_with_unknown_anchor_appends():
    site = _website("a", "b")
    updated = site.insert_block(ContentBlock(id="x", type=BlockType.CTA), after_id="missing")
    assert updated.block_ids() == ["a", "b", "x"]


def test_insert_without_anchor_appends():
    site = _website("a")
    updated = site.insert_block(ContentBlock(id="x", type=BlockType.CTA))
    assert updated.block_ids() == ["a", "x"]


# ── Content and styles ──


def test_update_block_content_merges_one_field():
    site = _website("a")
    updated = site.update_block_content("a", "subtitle", "Hello")

    block = updated.find_block("a")
    assert block.content == {"title": "A", "subtitle": "Hello"}
    assert site.find_block("a").content == {"title": "A"}


def test_patch_block_content_is_shallow():
    site = _website("a").update_block_content("a", "highlights", ["one"])
    updated = site.patch_block_content("a", {"highlights": ["two", "three"], "title": "New"})
    assert updated.find_block("a").content == {"title": "New", "highlights": ["two", "three"]}


def test_update_block_style_merges():
    site = _website("a").update_block_style("a", {"padding": "8px"})
    updated = site.update_block_style("a", {"color": "red"})
    assert updated.find_block("a").styles == {"padding": "8px", "color": "red"}


def test_operations_on_missing_block_return_same_document():
    site = _website("a")
    assert site.update_block_content("gone", "title", "x") is site
    assert site.update_block_style("gone", {"x": 1}) is site
    assert site.remove_block("gone") is site
    assert site.move_block("gone", "up") is site


# ── Move and remove ──


def test_move_up_and_down_swap_neighbours():
    site = _website("a", "b", "c")
    assert site.move_block("b", "up").block_ids() == ["b", "a", "c"]
    assert site.move_block("b", "down").block_ids() == ["a", "c", "b"]


def test_move_at_boundaries_is_noop():
    site = _website("a", "b")
    assert site.move_block("a", "up") is site
    assert site.move_block("b", "down") is site


def test_move_rejects_unknown_direction():
    with pytest.raises(ValueError):
        _website("a", "b").move_block("a", "sideways")


def test_remove_block():
    updated = _website("a", "b", "c").remove_block("b")
    assert updated.block_ids() == ["a", "c"]


# ── Serialization ──


def test_to_dict_from_dict_preserves_document():
    site = _website("a", "b").update_block_style("b", {"padding": "4px"})
    restored = Website.from_dict(site.to_dict())
    assert restored == site


def test_from_dict_rejects_malformed_blocks():
    data = _website("a").to_dict()
    data["blocks"] = "not-a-list"
    with pytest.raises(TypeError):
        Website.from_dict(data)


def test_from_dict_rejects_unknown_block_type():
    data = _website("a").to_dict()
    data["blocks"][0]["type"] = "carousel"
    with pytest.raises(ValueError):
        Website.from_dict(data)


def test_known_content_ignores_foreign_fields():
    block = ContentBlock(id="h", type=BlockType.HERO, content={"title": "Hi", "testimonials": []})
    assert block.known_content() == {"title": "Hi"}


# ── Theme ──


def test_theme_lookup_is_case_insensitive_substring():
    assert theme_for_business_type("Family DENTAL Clinic") is theme_for_business_type("dental")
    assert theme_for_business_type("Dental clinic") is not DEFAULT_THEME


def test_unknown_business_type_gets_default_theme():
    assert theme_for_business_type("Underwater basket weaving") is DEFAULT_THEME
    assert theme_for_business_type(None) is DEFAULT_THEME
