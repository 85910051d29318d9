"""Media domain inputs and events.

These models are passed through the cache (as key parameters) and the
background queue (as job payloads) without being interpreted there. They are
frozen so that cache keys built from them stay hashable.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.enums import EntityLot, ImportSource, MediaLot, MediaSource, SeenState


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchInput(FrozenModel):
    query: Optional[str] = None
    page: Optional[int] = None
    take: Optional[int] = None


class PeopleSearchInput(FrozenModel):
    search: SearchInput
    source: MediaSource
    is_anilist_studio: Optional[bool] = None
    is_tmdb_company: Optional[bool] = None


class MetadataSearchInput(FrozenModel):
    search: SearchInput
    lot: MediaLot
    source: MediaSource


class MetadataGroupSearchInput(FrozenModel):
    search: SearchInput
    lot: MediaLot
    source: MediaSource


class ApplicationDateRange(FrozenModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class UserAnalyticsInput(FrozenModel):
    date_range: ApplicationDateRange
    group_by: Optional[str] = None


class ProgressUpdateInput(FrozenModel):
    metadata_id: str
    progress_date: Optional[date] = None
    progress: Optional[Decimal] = None
    change_state: Optional[SeenState] = None
    provider_watched_on: Optional[str] = None
    show_season_number: Optional[int] = None
    show_episode_number: Optional[int] = None
    podcast_episode_number: Optional[int] = None
    anime_episode_number: Optional[int] = None
    manga_chapter_number: Optional[Decimal] = None
    manga_volume_number: Optional[int] = None


class ReviewPostedEvent(FrozenModel):
    obj_id: str
    obj_title: str
    username: str
    review_id: str
    entity_lot: EntityLot


class SeenRecord(FrozenModel):
    """A single consumption record of a piece of media."""
    id: str
    user_id: str
    metadata_id: str
    state: SeenState
    progress: Decimal = Decimal("0")
    started_on: Optional[date] = None
    finished_on: Optional[date] = None
    last_updated_on: datetime
    provider_watched_on: Optional[str] = None
    review_id: Optional[str] = None
    show_season_number: Optional[int] = None
    show_episode_number: Optional[int] = None
    podcast_episode_number: Optional[int] = None
    anime_episode_number: Optional[int] = None
    manga_chapter_number: Optional[Decimal] = None
    manga_volume_number: Optional[int] = None


class GithubExerciseAttributes(FrozenModel):
    level: str
    category: str
    force: Optional[str] = None
    mechanic: Optional[str] = None
    equipment: Optional[str] = None
    primary_muscles: List[str] = Field(default_factory=list)
    secondary_muscles: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class GithubExercise(FrozenModel):
    identifier: str
    name: str
    attributes: GithubExerciseAttributes


class DeployImportJobInput(FrozenModel):
    source: ImportSource
    url: Optional[str] = None
    api_key: Optional[str] = None
    file_path: Optional[str] = None
    collection_to_entity_id: Optional[UUID] = None
