"""Tests for job handler registration and the worker task entry points."""
import unittest

from background.jobs import PerformExport, ReviewPosted, dump_job
from background.tasks import (
    JobHandlerNotFound,
    clear_handlers,
    process_application_job,
    process_core_job,
    register_application_handler,
    register_core_handler,
)
from tests.fixtures.cache_fixtures import SAMPLE_CORE_JOBS


class TestTasks(unittest.TestCase):

    def setUp(self):
        clear_handlers()

    def tearDown(self):
        clear_handlers()

    def test_application_handler_receives_decoded_job(self):
        received = []

        @register_application_handler("PerformExport")
        def perform_export(job):
            received.append(job)
            return "exported"

        result = process_application_job(dump_job(PerformExport(user_id="usr_1")))

        self.assertEqual(result, "exported")
        self.assertEqual(received, [PerformExport(user_id="usr_1")])

    def test_async_handler_is_awaited(self):
        @register_core_handler("ReviewPosted")
        async def review_posted(job):
            return job.event.review_id

        job = SAMPLE_CORE_JOBS[ReviewPosted]
        self.assertEqual(process_core_job(dump_job(job)), "rev_1")

    def test_missing_handler_raises(self):
        with self.assertRaises(JobHandlerNotFound):
            process_application_job(dump_job(PerformExport(user_id="usr_1")))

    def test_core_and_application_registries_are_separate(self):
        @register_application_handler("SyncIntegrationsData")
        def sync_all(job):
            return "all"

        with self.assertRaises(JobHandlerNotFound):
            process_core_job({"kind": "SyncIntegrationsData", "user_id": "usr_1"})
        self.assertEqual(process_application_job({"kind": "SyncIntegrationsData"}), "all")


class TestTasksInsideEventLoop(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        clear_handlers()

    def tearDown(self):
        clear_handlers()

    async def test_async_handler_runs_when_caller_has_a_loop(self):
        received = []

        @register_application_handler("PerformExport")
        async def perform_export(job):
            received.append(job)
            return "exported"

        result = process_application_job(dump_job(PerformExport(user_id="usr_1")))

        self.assertEqual(result, "exported")
        self.assertEqual(received, [PerformExport(user_id="usr_1")])

    async def test_handler_errors_propagate(self):
        @register_core_handler("ReviewPosted")
        async def review_posted(job):
            raise ValueError("bad review")

        with self.assertRaises(ValueError):
            process_core_job(dump_job(SAMPLE_CORE_JOBS[ReviewPosted]))


if __name__ == '__main__':
    unittest.main()
