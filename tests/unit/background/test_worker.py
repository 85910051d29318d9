import unittest
from unittest.mock import patch

from redis.exceptions import ConnectionError as RedisConnectionError

from background.worker import DEFAULT_QUEUES, start_worker


class TestWorker(unittest.TestCase):

    @patch('background.worker.Worker')
    @patch('background.worker.Redis')
    def test_start_worker_listens_on_both_queues(self, mock_redis_class, mock_worker_class):
        start_worker("redis://localhost:6379/0", burst=True)

        mock_redis_class.from_url.assert_called_once_with("redis://localhost:6379/0")
        mock_worker_class.assert_called_once_with(DEFAULT_QUEUES, connection=mock_redis_class.from_url.return_value)
        mock_worker_class.return_value.work.assert_called_once_with(burst=True, with_scheduler=True)

    @patch('background.worker.Worker')
    @patch('background.worker.Redis')
    def test_custom_queues(self, mock_redis_class, mock_worker_class):
        start_worker("redis://localhost:6379/0", queues=["core"])

        self.assertEqual(mock_worker_class.call_args[0][0], ["core"])

    @patch('background.worker.Redis')
    def test_exits_when_redis_unreachable(self, mock_redis_class):
        mock_redis_class.from_url.return_value.ping.side_effect = RedisConnectionError("refused")

        with self.assertRaises(SystemExit):
            start_worker("redis://localhost:6379/0")


if __name__ == '__main__':
    unittest.main()
