"""
Job Dispatcher - hands background jobs to the Redis Queue.

Core jobs are always enqueued. Application jobs get a deterministic job id
so that an identical job still waiting in the queue is not enqueued twice.
Scheduled jobs are registered with the RQ scheduler for their fire time.

Usage:
    from background.dispatcher import JobDispatcher
    from background.jobs import UpdateMetadata

    dispatcher = JobDispatcher(redis_url="redis://localhost:6379/0")
    dispatcher.perform_application_job(UpdateMetadata(metadata_id="met_1", force_update=False))
"""

import hashlib
import json
import logging
import os
from typing import Optional, Union

from redis import Redis
from redis.exceptions import RedisError
from rq import Queue, Retry
from rq.job import JobStatus

from background.jobs import ApplicationJob, CoreApplicationJob, ScheduledJob, dump_job
from background.tasks import process_application_job, process_core_job

logger = logging.getLogger(__name__)

CORE_QUEUE = 'core'
APPLICATION_QUEUE = 'application'

PENDING_STATUSES = {
    JobStatus.QUEUED,
    JobStatus.SCHEDULED,
    JobStatus.DEFERRED,
    JobStatus.STARTED,
}


def job_id_for(job: Union[CoreApplicationJob, ApplicationJob]) -> str:
    """Deterministic queue id: same kind and payload give the same id."""
    payload = json.dumps(dump_job(job), sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(payload.encode('utf-8')).hexdigest()[:32]
    return f"{job.kind}-{digest}"


class JobDispatcher:
    """
    Enqueues background jobs.

    Falls back to running jobs in-process when the queue is disabled or
    Redis is unreachable.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        use_async_queue: bool = True,
        job_timeout: str = '10m',
        result_ttl: int = 86400
    ):
        self.redis_url = redis_url or os.environ.get(
            'REDIS_URL',
            'redis://localhost:6379/0'
        )
        self.job_timeout = job_timeout
        self.result_ttl = result_ttl
        self.redis_conn: Optional[Redis] = None
        self.core_queue: Optional[Queue] = None
        self.application_queue: Optional[Queue] = None
        self.async_mode = False

        if not use_async_queue:
            logger.info("Async queue disabled via config. Using sync mode.")
            return

        try:
            self.redis_conn = Redis.from_url(self.redis_url)
            self.redis_conn.ping()
            self.core_queue = Queue(CORE_QUEUE, connection=self.redis_conn)
            self.application_queue = Queue(APPLICATION_QUEUE, connection=self.redis_conn)
            self.async_mode = True
            logger.info("Job dispatcher connected to Redis")
        except (RedisError, ValueError) as e:
            logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
            self.redis_conn = None
            self.core_queue = None
            self.application_queue = None

    def perform_core_job(self, job: CoreApplicationJob) -> Optional[str]:
        """Enqueue a core job; these are never deduplicated."""
        payload = dump_job(job)
        if not self.async_mode:
            process_core_job(payload)
            return None

        queued = self.core_queue.enqueue(
            process_core_job,
            payload,
            job_timeout=self.job_timeout,
            result_ttl=self.result_ttl,
        )
        logger.info(f"Queued core job {job} as {queued.id}")
        return queued.id

    def perform_application_job(self, job: ApplicationJob) -> Optional[str]:
        """
        Enqueue an application job unless an identical one is still pending.

        Returns:
            Queue job id (the existing one for a duplicate), None in sync mode
        """
        payload = dump_job(job)
        if not self.async_mode:
            process_application_job(payload)
            return None

        job_id = job_id_for(job)
        existing = self.application_queue.fetch_job(job_id)
        if existing is not None and existing.get_status() in PENDING_STATUSES:
            logger.info(f"Skipping duplicate application job {job} ({job_id})")
            return existing.id

        queued = self.application_queue.enqueue(
            process_application_job,
            payload,
            job_id=job_id,
            job_timeout=self.job_timeout,
            result_ttl=self.result_ttl,
            retry=Retry(max=3, interval=[30, 60, 120]),
        )
        logger.info(f"Queued application job {job} as {queued.id}")
        return queued.id

    def schedule_application_job(self, scheduled: ScheduledJob, job: ApplicationJob) -> Optional[str]:
        """Register ``job`` to run at ``scheduled.fire_at``."""
        if not self.async_mode:
            logger.warning(f"Cannot schedule {job} for {scheduled} in sync mode")
            return None

        queued = self.application_queue.enqueue_at(
            scheduled.fire_at,
            process_application_job,
            dump_job(job),
            job_timeout=self.job_timeout,
            result_ttl=self.result_ttl,
        )
        logger.info(f"Scheduled application job {job} at {scheduled} as {queued.id}")
        return queued.id
