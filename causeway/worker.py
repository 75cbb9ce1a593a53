"""RQ Worker for background job processing."""

import redis
from rq import Queue, Worker

from causeway.config import Config


def get_redis_connection(redis_url=None):
    """Get Redis connection; defaults to the configured REDIS_URL."""
    return redis.from_url(redis_url or Config.REDIS_URL)


def setup_queues(redis_conn):
    """Setup RQ queues; audit entries are drained before link checks."""
    return {
        'audit': Queue('audit', connection=redis_conn),
        'default': Queue(connection=redis_conn),
    }


def main():
    redis_conn = get_redis_connection()
    queues = setup_queues(redis_conn)

    worker = Worker([queues['audit'], queues['default']], connection=redis_conn)

    print("Starting RQ worker...")
    print(f"Listening on queues: {list(queues.keys())}")
    try:
        worker.work()
    except KeyboardInterrupt:
        print("\nWorker stopped by user")


if __name__ == '__main__':
    main()
