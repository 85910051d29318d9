#!/usr/bin/env python3
"""
RQ Worker for background jobs.

Processes core and application jobs from the Redis Queue. The scheduler is
enabled so jobs registered with a fire time are moved onto their queue when
due.

Usage:
    python -m background.worker
    python -m background.worker --burst
    python -m background.worker --queues core --verbose
"""

import os
import sys
import argparse
import logging

from redis import Redis
from redis.exceptions import RedisError
from rq import Worker

from background.dispatcher import APPLICATION_QUEUE, CORE_QUEUE

logger = logging.getLogger(__name__)

DEFAULT_QUEUES = [CORE_QUEUE, APPLICATION_QUEUE]


def start_worker(redis_url: str, burst: bool = False, queues: list = None):
    """Start the RQ worker."""
    if queues is None:
        queues = DEFAULT_QUEUES

    logger.info("Starting RQ Worker")
    logger.info(f"Queues: {', '.join(queues)}")
    logger.info(f"Burst mode: {burst}")

    try:
        redis_conn = Redis.from_url(redis_url)
        redis_conn.ping()
        logger.info("Connected to Redis")

        worker = Worker(queues, connection=redis_conn)
        worker.work(burst=burst, with_scheduler=True)
    except KeyboardInterrupt:
        logger.info("Worker stopped")
    except RedisError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def main():
    parser = argparse.ArgumentParser(description='Background job worker')
    parser.add_argument('--burst', action='store_true', help='Process all and exit')
    parser.add_argument('--queues', nargs='+', default=DEFAULT_QUEUES)
    parser.add_argument('--verbose', action='store_true')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    redis_url = os.environ.get('REDIS_URL', 'redis://localhost:6379/0')
    start_worker(redis_url, burst=args.burst, queues=args.queues)


if __name__ == '__main__':
    main()
