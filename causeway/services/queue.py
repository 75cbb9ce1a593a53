"""Queue service for background jobs using RQ."""

import redis
from flask import current_app
from rq import Queue

from causeway.services.jobs import run_link_check_job, write_audit_entry_job


class QueueService:
    """Service for managing background job queues."""

    def __init__(self, redis_url=None):
        self.redis_url = redis_url
        self._connections = {}

    @property
    def redis_conn(self):
        """Redis connection for the configured URL, opened on first use."""
        redis_url = self.redis_url or current_app.config['REDIS_URL']
        if redis_url not in self._connections:
            self._connections[redis_url] = redis.from_url(redis_url)
        return self._connections[redis_url]

    @property
    def audit_queue(self):
        return Queue('audit', connection=self.redis_conn)

    @property
    def default_queue(self):
        return Queue(connection=self.redis_conn)

    def enqueue_audit_entry(self, entry):
        """Queue an audit entry to be written by the worker."""
        return self.audit_queue.enqueue(write_audit_entry_job, entry)

    def enqueue_link_check(self):
        """Queue a link check run over published resources."""
        return self.default_queue.enqueue(run_link_check_job, job_timeout=1800)


# Global queue service instance
queue_service = QueueService()
