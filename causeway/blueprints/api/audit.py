"""Audit log endpoint."""

from __future__ import annotations

from flask import jsonify, request

from causeway.auth import admin_required
from causeway.models import AuditAction
from causeway.services.audit import list_audit_logs, serialize_audit_log
from causeway.services.pagination import MAX_LIMIT, PageParams, page_envelope

from . import api_bp
from .helpers import enum_arg

AUDIT_PAGE_SIZE = 50


@api_bp.route('/audit', methods=['GET'])
@admin_required
def list_audit(auth):
    """Paginated audit log, newest first, filterable by entityType, userId and action."""
    params = PageParams.from_args(request.args, default_limit=AUDIT_PAGE_SIZE, max_limit=MAX_LIMIT)
    logs, total = list_audit_logs(
        params,
        entity_type=request.args.get('entityType') or None,
        user_id=request.args.get('userId') or None,
        action=enum_arg(AuditAction, 'action'),
    )
    return jsonify(page_envelope([serialize_audit_log(log) for log in logs], total, params))
