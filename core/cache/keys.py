"""Application cache keys.

A cache key is one variant of a closed union. Keys compare structurally:
two keys address the same cache row iff their variant and every carried
field are equal. ``canonical_key`` turns a key into the text stored in the
``application_cache.key`` column.
"""
import json
from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_serializer

from core.enums import EntityLot
from core.media_models import (
    ApplicationDateRange,
    MetadataGroupSearchInput,
    MetadataSearchInput,
    PeopleSearchInput,
    UserAnalyticsInput,
)


class _CacheKeyBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return self.kind  # type: ignore[attr-defined]


class IgdbSettings(_CacheKeyBase):
    kind: Literal["IgdbSettings"] = "IgdbSettings"


class ListennotesSettings(_CacheKeyBase):
    kind: Literal["ListennotesSettings"] = "ListennotesSettings"


class TmdbSettings(_CacheKeyBase):
    kind: Literal["TmdbSettings"] = "TmdbSettings"


class CoreDetails(_CacheKeyBase):
    kind: Literal["CoreDetails"] = "CoreDetails"


class PeopleSearch(_CacheKeyBase):
    kind: Literal["PeopleSearch"] = "PeopleSearch"
    user_id: str
    input: PeopleSearchInput


class MetadataSearch(_CacheKeyBase):
    kind: Literal["MetadataSearch"] = "MetadataSearch"
    user_id: str
    input: MetadataSearchInput


class MetadataGroupSearch(_CacheKeyBase):
    kind: Literal["MetadataGroupSearch"] = "MetadataGroupSearch"
    user_id: str
    input: MetadataGroupSearchInput


class MetadataRecentlyConsumed(_CacheKeyBase):
    kind: Literal["MetadataRecentlyConsumed"] = "MetadataRecentlyConsumed"
    user_id: str
    entity_id: str
    entity_lot: EntityLot


class UserAnalytics(_CacheKeyBase):
    kind: Literal["UserAnalytics"] = "UserAnalytics"
    user_id: str
    input: UserAnalyticsInput


class UserCollectionsList(_CacheKeyBase):
    kind: Literal["UserCollectionsList"] = "UserCollectionsList"
    user_id: str


class UserAnalyticsParameters(_CacheKeyBase):
    kind: Literal["UserAnalyticsParameters"] = "UserAnalyticsParameters"
    user_id: str
    input: ApplicationDateRange


class ProgressUpdateCache(_CacheKeyBase):
    kind: Literal["ProgressUpdateCache"] = "ProgressUpdateCache"
    user_id: str
    metadata_id: str
    show_season_number: Optional[int] = None
    show_episode_number: Optional[int] = None
    podcast_episode_number: Optional[int] = None
    anime_episode_number: Optional[int] = None
    manga_chapter_number: Optional[Decimal] = None
    manga_volume_number: Optional[int] = None

    @field_serializer("manga_chapter_number", when_used="json")
    def normalize_chapter_number(self, value: Optional[Decimal]) -> Optional[str]:
        # 1.0 and 1.00 are equal keys and must share one row
        if value is None:
            return None
        normalized = value.normalize()
        if normalized == normalized.to_integral_value():
            normalized = normalized.quantize(Decimal(1))
        return str(normalized)


CacheKey = Annotated[
    Union[
        IgdbSettings,
        ListennotesSettings,
        TmdbSettings,
        CoreDetails,
        PeopleSearch,
        MetadataSearch,
        MetadataGroupSearch,
        MetadataRecentlyConsumed,
        UserAnalytics,
        UserCollectionsList,
        UserAnalyticsParameters,
        ProgressUpdateCache,
    ],
    Field(discriminator="kind"),
]

CACHE_KEY_ADAPTER: TypeAdapter[CacheKey] = TypeAdapter(CacheKey)


def canonical_key(key: CacheKey) -> str:
    """Stable text form of a key; equal keys always produce equal text."""
    return json.dumps(key.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))


def parse_cache_key(raw: str) -> CacheKey:
    return CACHE_KEY_ADAPTER.validate_json(raw)
