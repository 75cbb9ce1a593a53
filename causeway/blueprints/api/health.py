"""Health and link-check endpoints."""

from __future__ import annotations

from flask import current_app, jsonify, request

from causeway.auth import admin_required, admin_view_context
from causeway.extensions import limiter
from causeway.schemas import LinkCheckRequest, parse_payload
from causeway.security import api_rate_limit
from causeway.services.health import HealthService, serialize_link_check

from . import api_bp
from .helpers import success


@api_bp.route('/health', methods=['GET'])
def health():
    """Database reachability; the admin view adds content statistics."""
    if not HealthService.database_ok():
        return jsonify({
            'status': 'error',
            'database': False,
            'error': 'Database connection failed',
        }), 503

    if admin_view_context() is None:
        return jsonify({'status': 'ok', 'database': True})
    return success(HealthService.detailed_report())


@api_bp.route('/health', methods=['POST'])
@limiter.limit(api_rate_limit)
@admin_required
def run_link_check(auth):
    """Run the link check now, or queue it with ``{"background": true}``."""
    options = parse_payload(LinkCheckRequest, request.get_json(silent=True) or {})
    if options.background:
        from causeway.services.queue import queue_service
        job = queue_service.enqueue_link_check()
        current_app.logger.info(f"Queued link check job {job.id} for user {auth.user_id}")
        return success({'queued': True, 'jobId': job.id}, 202)
    return success(HealthService.run_link_check())


@api_bp.route('/health/links', methods=['GET'])
@admin_required
def list_link_checks(auth):
    checks = HealthService.list_link_checks()
    return success([serialize_link_check(check) for check in checks])
