"""
Job handler registry and the task entry points executed by RQ workers.

Handlers are registered per job kind by the application:

    @register_application_handler("UpdatePerson")
    async def update_person(job: UpdatePerson) -> None:
        ...

Handlers may be plain functions or coroutines. Coroutines are run to
completion before the entry point returns, also when the caller is itself
running an event loop.
"""
import asyncio
import inspect
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict

from background.jobs import load_application_job, load_core_job

logger = logging.getLogger(__name__)

JobHandler = Callable[[Any], Any]

_core_handlers: Dict[str, JobHandler] = {}
_application_handlers: Dict[str, JobHandler] = {}


class JobHandlerNotFound(LookupError):
    """Raised when a job kind has no registered handler."""
    pass


def register_core_handler(kind: str) -> Callable[[JobHandler], JobHandler]:
    def decorator(handler: JobHandler) -> JobHandler:
        _core_handlers[kind] = handler
        return handler
    return decorator


def register_application_handler(kind: str) -> Callable[[JobHandler], JobHandler]:
    def decorator(handler: JobHandler) -> JobHandler:
        _application_handlers[kind] = handler
        return handler
    return decorator


def clear_handlers() -> None:
    _core_handlers.clear()
    _application_handlers.clear()


def _run_to_completion(awaitable: Any) -> Any:
    async def _await() -> Any:
        return await awaitable
    return asyncio.run(_await())


def _run(handler: JobHandler, job: Any) -> Any:
    result = handler(job)
    if not inspect.isawaitable(result):
        return result

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _run_to_completion(result)

    # Called from inside an event loop (sync dispatch from async code):
    # finish the coroutine on its own loop in a helper thread.
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="job-handler") as executor:
        return executor.submit(_run_to_completion, result).result()


def process_core_job(payload: Dict[str, Any]) -> Any:
    """Decode and run a core job (called by RQ worker)."""
    job = load_core_job(payload)
    handler = _core_handlers.get(job.kind)
    if handler is None:
        raise JobHandlerNotFound(f"No handler registered for core job {job}")
    logger.info(f"Processing core job {job}")
    return _run(handler, job)


def process_application_job(payload: Dict[str, Any]) -> Any:
    """Decode and run an application job (called by RQ worker)."""
    job = load_application_job(payload)
    handler = _application_handlers.get(job.kind)
    if handler is None:
        raise JobHandlerNotFound(f"No handler registered for application job {job}")
    logger.info(f"Processing application job {job}")
    return _run(handler, job)
