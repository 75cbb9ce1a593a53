"""Audit logging for mutating actions.

Writes are fire-and-forget: :func:`record_action` hands the entry to a
dispatcher and never raises. With ``AUDIT_DISPATCH = "rq"`` the entry is
queued for the worker; otherwise it is written in-process.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import current_app, has_request_context, request
from sqlalchemy import select
from sqlalchemy.orm import joinedload

from causeway.extensions import db
from causeway.models import AuditAction, AuditLog
from causeway.services.pagination import PageParams, paginate


def _request_ip() -> str | None:
    if has_request_context():
        return request.remote_addr
    return None


def build_entry(
    action: AuditAction | str,
    entity_type: str,
    entity_id: str | None = None,
    user_id: str | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> dict[str, Any]:
    """Plain, queue-safe representation of an audit entry."""
    return {
        'action': action.value if isinstance(action, AuditAction) else str(action),
        'entity_type': entity_type,
        'entity_id': entity_id,
        'user_id': user_id,
        'details': details or {},
        'ip_address': ip_address or _request_ip(),
    }


def write_entry(entry: dict[str, Any]) -> AuditLog:
    """Persist one audit entry built by :func:`build_entry`."""
    log = AuditLog(
        action=AuditAction(entry['action']),
        entity_type=entry['entity_type'],
        entity_id=entry.get('entity_id'),
        user_id=entry.get('user_id'),
        details=entry.get('details') or {},
        ip_address=entry.get('ip_address'),
        created_at=datetime.now(timezone.utc),
    )
    db.session.add(log)
    db.session.commit()
    return log


def record_action(
    action: AuditAction | str,
    entity_type: str,
    entity_id: str | None = None,
    user_id: str | None = None,
    details: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> None:
    """
    Record a mutating action against an entity.

    Args:
        action: One of :class:`AuditAction`
        entity_type: Type of entity affected (e.g. "Resource")
        entity_id: ID of entity affected
        user_id: Acting user, None for system actions
        details: Summary of the change; field names rather than values for updates
        ip_address: Defaults to request.remote_addr
    """
    try:
        entry = build_entry(action, entity_type, entity_id, user_id, details, ip_address)
        if current_app.config.get('AUDIT_DISPATCH') == 'rq':
            from causeway.services.queue import queue_service
            queue_service.enqueue_audit_entry(entry)
        else:
            write_entry(entry)
    except Exception as e:
        # Don't fail the request if audit logging fails
        db.session.rollback()
        current_app.logger.error(f"Failed to write audit log: {e}")


def list_audit_logs(
    params: PageParams,
    entity_type: str | None = None,
    user_id: str | None = None,
    action: AuditAction | None = None,
) -> tuple[list[AuditLog], int]:
    """Audit entries, newest first."""
    stmt = select(AuditLog).options(joinedload(AuditLog.user))
    if entity_type:
        stmt = stmt.where(AuditLog.entity_type == entity_type)
    if user_id:
        stmt = stmt.where(AuditLog.user_id == user_id)
    if action:
        stmt = stmt.where(AuditLog.action == action)
    stmt = stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
    return paginate(stmt, params)


def recent_activity(limit: int = 10) -> list[AuditLog]:
    stmt = (
        select(AuditLog)
        .options(joinedload(AuditLog.user))
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
    )
    return list(db.session.execute(stmt).scalars())


def serialize_audit_log(log: AuditLog) -> dict:
    return {
        'id': log.id,
        'action': log.action.value,
        'entityType': log.entity_type,
        'entityId': log.entity_id,
        'userId': log.user_id,
        'user': {'name': log.user.name, 'email': log.user.email} if log.user else None,
        'details': log.details or {},
        'ipAddress': log.ip_address,
        'createdAt': log.created_at.isoformat() if log.created_at else None,
    }


__all__ = [
    'record_action',
    'build_entry',
    'write_entry',
    'list_audit_logs',
    'recent_activity',
    'serialize_audit_log',
]
