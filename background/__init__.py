"""
Background Module

The job taxonomy and its Redis Queue dispatcher.

Usage:
    from background import JobDispatcher, PerformExport

    dispatcher = JobDispatcher()
    dispatcher.perform_application_job(PerformExport(user_id="usr_1"))
"""

from background.jobs import (
    ApplicationJob,
    CoreApplicationJob,
    ScheduledJob,
    dump_job,
    load_application_job,
    load_core_job,
)

from background.tasks import (
    JobHandlerNotFound,
    process_application_job,
    process_core_job,
    register_application_handler,
    register_core_handler,
)

from background.dispatcher import JobDispatcher

__all__ = [
    # Taxonomy
    'ApplicationJob',
    'CoreApplicationJob',
    'ScheduledJob',
    'dump_job',
    'load_application_job',
    'load_core_job',
    # Tasks
    'JobHandlerNotFound',
    'process_application_job',
    'process_core_job',
    'register_application_handler',
    'register_core_handler',
    # Dispatch
    'JobDispatcher',
]
