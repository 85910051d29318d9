"""
Tests for application cache keys.

Keys address cache rows by structural equality, so equal keys must produce
equal canonical text and different keys must not.
"""
import json
from decimal import Decimal
import typing

import pytest

from core.cache.keys import (
    CacheKey,
    MetadataSearch,
    ProgressUpdateCache,
    TmdbSettings,
    UserCollectionsList,
    canonical_key,
    parse_cache_key,
)
from core.enums import MediaLot, MediaSource
from core.media_models import MetadataSearchInput, SearchInput
from tests.fixtures.cache_fixtures import SAMPLE_CACHE_KEYS


def cache_key_variants():
    union, _ = typing.get_args(CacheKey)
    return typing.get_args(union)


def test_fixtures_cover_every_variant():
    assert set(SAMPLE_CACHE_KEYS) == set(cache_key_variants())


def test_structural_equality():
    first = MetadataSearch(
        user_id="usr_1",
        input=MetadataSearchInput(search=SearchInput(query="dune"), lot=MediaLot.BOOK, source=MediaSource.OPENLIBRARY),
    )
    second = MetadataSearch(
        user_id="usr_1",
        input=MetadataSearchInput(search=SearchInput(query="dune"), lot=MediaLot.BOOK, source=MediaSource.OPENLIBRARY),
    )

    assert first == second
    assert hash(first) == hash(second)
    assert canonical_key(first) == canonical_key(second)


def test_different_fields_give_different_keys():
    assert UserCollectionsList(user_id="usr_1") != UserCollectionsList(user_id="usr_2")
    assert canonical_key(UserCollectionsList(user_id="usr_1")) != canonical_key(UserCollectionsList(user_id="usr_2"))


def test_canonical_key_is_sorted_compact_json():
    key = ProgressUpdateCache(user_id="usr_1", metadata_id="met_1", show_season_number=1)
    raw = canonical_key(key)

    assert " " not in raw
    decoded = json.loads(raw)
    assert decoded["kind"] == "ProgressUpdateCache"
    assert list(decoded) == sorted(decoded)


def test_equal_chapter_numbers_share_canonical_text():
    one = ProgressUpdateCache(user_id="usr_1", metadata_id="met_1", manga_chapter_number=Decimal("1.0"))
    other = ProgressUpdateCache(user_id="usr_1", metadata_id="met_1", manga_chapter_number=Decimal("1.00"))

    assert one == other
    assert canonical_key(one) == canonical_key(other)
    assert json.loads(canonical_key(one))["manga_chapter_number"] == "1"


def test_chapter_numbers_keep_significant_digits():
    half = ProgressUpdateCache(user_id="usr_1", metadata_id="met_1", manga_chapter_number=Decimal("12.50"))
    tenth = ProgressUpdateCache(user_id="usr_1", metadata_id="met_1", manga_chapter_number=Decimal("10"))

    assert json.loads(canonical_key(half))["manga_chapter_number"] == "12.5"
    assert json.loads(canonical_key(tenth))["manga_chapter_number"] == "10"
    assert parse_cache_key(canonical_key(half)) == half


def test_parameterless_keys_share_nothing():
    raws = {canonical_key(SAMPLE_CACHE_KEYS[cls]) for cls in SAMPLE_CACHE_KEYS}
    assert len(raws) == len(SAMPLE_CACHE_KEYS)


@pytest.mark.parametrize("key", list(SAMPLE_CACHE_KEYS.values()), ids=lambda k: str(k))
def test_parse_cache_key_restores_key(key):
    assert parse_cache_key(canonical_key(key)) == key


def test_str_is_variant_name():
    assert str(TmdbSettings()) == "TmdbSettings"


def test_keys_are_immutable():
    key = UserCollectionsList(user_id="usr_1")
    with pytest.raises(Exception):
        key.user_id = "usr_2"
