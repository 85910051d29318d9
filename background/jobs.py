"""
Background job taxonomy.

Two closed unions of job kinds plus a typed fire time for recurring jobs:

- CoreApplicationJob: jobs that are always admitted (never throttled or
  deduplicated).
- ApplicationJob: jobs deployed by the application; the queue may
  deduplicate or schedule them.
- ScheduledJob: the instant (with timezone) at which a cron-style job fires.

Payloads carry only the data needed to redo the work, never live handles.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from core.enums import MediaLot, MediaSource
from core.media_models import (
    DeployImportJobInput,
    GithubExercise,
    ProgressUpdateInput,
    ReviewPostedEvent,
    SeenRecord,
)


class _JobBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return self.kind  # type: ignore[attr-defined]


# The background jobs which cannot be throttled.

class CoreSyncIntegrationsData(_JobBase):
    kind: Literal["SyncIntegrationsData"] = "SyncIntegrationsData"
    user_id: str


class ReviewPosted(_JobBase):
    kind: Literal["ReviewPosted"] = "ReviewPosted"
    event: ReviewPostedEvent


class BulkProgressUpdate(_JobBase):
    kind: Literal["BulkProgressUpdate"] = "BulkProgressUpdate"
    user_id: str
    updates: List[ProgressUpdateInput]


CoreApplicationJob = Annotated[
    Union[CoreSyncIntegrationsData, ReviewPosted, BulkProgressUpdate],
    Field(discriminator="kind"),
]


# The background jobs which can be deployed by the application.

class UpdatePerson(_JobBase):
    kind: Literal["UpdatePerson"] = "UpdatePerson"
    person_id: str


class SyncIntegrationsData(_JobBase):
    kind: Literal["SyncIntegrationsData"] = "SyncIntegrationsData"


class UpdateExerciseLibrary(_JobBase):
    kind: Literal["UpdateExerciseLibrary"] = "UpdateExerciseLibrary"


class PerformExport(_JobBase):
    kind: Literal["PerformExport"] = "PerformExport"
    user_id: str


class PerformBackgroundTasks(_JobBase):
    kind: Literal["PerformBackgroundTasks"] = "PerformBackgroundTasks"


class RecalculateCalendarEvents(_JobBase):
    kind: Literal["RecalculateCalendarEvents"] = "RecalculateCalendarEvents"


class ReviseUserWorkouts(_JobBase):
    kind: Literal["ReviseUserWorkouts"] = "ReviseUserWorkouts"
    user_id: str


class UpdateMetadataGroup(_JobBase):
    kind: Literal["UpdateMetadataGroup"] = "UpdateMetadataGroup"
    metadata_group_id: str


class UpdateMetadata(_JobBase):
    kind: Literal["UpdateMetadata"] = "UpdateMetadata"
    metadata_id: str
    force_update: bool


class HandleOnSeenComplete(_JobBase):
    kind: Literal["HandleOnSeenComplete"] = "HandleOnSeenComplete"
    seen_id: str


class HandleAfterMediaSeenTasks(_JobBase):
    kind: Literal["HandleAfterMediaSeenTasks"] = "HandleAfterMediaSeenTasks"
    seen: SeenRecord


class UpdateGithubExerciseJob(_JobBase):
    kind: Literal["UpdateGithubExerciseJob"] = "UpdateGithubExerciseJob"
    exercise: GithubExercise


class HandleEntityAddedToCollectionEvent(_JobBase):
    kind: Literal["HandleEntityAddedToCollectionEvent"] = "HandleEntityAddedToCollectionEvent"
    collection_to_entity_id: UUID


class RecalculateUserActivitiesAndSummary(_JobBase):
    kind: Literal["RecalculateUserActivitiesAndSummary"] = "RecalculateUserActivitiesAndSummary"
    user_id: str
    calculate_from_beginning: bool


class AssociateGroupWithMetadata(_JobBase):
    kind: Literal["AssociateGroupWithMetadata"] = "AssociateGroupWithMetadata"
    lot: MediaLot
    source: MediaSource
    identifier: str


class ImportFromExternalSource(_JobBase):
    kind: Literal["ImportFromExternalSource"] = "ImportFromExternalSource"
    user_id: str
    input: DeployImportJobInput


ApplicationJob = Annotated[
    Union[
        UpdatePerson,
        SyncIntegrationsData,
        UpdateExerciseLibrary,
        PerformExport,
        PerformBackgroundTasks,
        RecalculateCalendarEvents,
        ReviseUserWorkouts,
        UpdateMetadataGroup,
        UpdateMetadata,
        HandleOnSeenComplete,
        HandleAfterMediaSeenTasks,
        UpdateGithubExerciseJob,
        HandleEntityAddedToCollectionEvent,
        RecalculateUserActivitiesAndSummary,
        AssociateGroupWithMetadata,
        ImportFromExternalSource,
    ],
    Field(discriminator="kind"),
]

CORE_JOB_ADAPTER: TypeAdapter[CoreApplicationJob] = TypeAdapter(CoreApplicationJob)
APPLICATION_JOB_ADAPTER: TypeAdapter[ApplicationJob] = TypeAdapter(ApplicationJob)


def dump_job(job: Union[CoreApplicationJob, ApplicationJob]) -> Dict[str, Any]:
    """JSON-compatible payload for a job, including its ``kind`` tag."""
    return job.model_dump(mode="json")


def load_core_job(payload: Dict[str, Any]) -> CoreApplicationJob:
    return CORE_JOB_ADAPTER.validate_python(payload)


def load_application_job(payload: Dict[str, Any]) -> ApplicationJob:
    return APPLICATION_JOB_ADAPTER.validate_python(payload)


# Cron Jobs

@dataclass(frozen=True)
class ScheduledJob:
    """Fire time of a recurring job."""
    fire_at: datetime

    def __post_init__(self):
        if self.fire_at.tzinfo is None or self.fire_at.utcoffset() is None:
            raise ValueError("ScheduledJob requires a timezone-aware datetime")

    @classmethod
    def from_datetime(cls, value: datetime) -> "ScheduledJob":
        return cls(value)

    def __str__(self) -> str:
        return self.fire_at.isoformat()
