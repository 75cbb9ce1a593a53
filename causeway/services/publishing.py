"""Publish state transitions for resources and pages.

Any status can be written from any other; what this module decides is the
side effects of a transition and the audit action it is recorded under.
``published_at`` is stamped on the first transition into PUBLISHED and never
cleared or re-stamped afterwards.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from causeway.models import AuditAction, PublishStatus


class Publishable(Protocol):
    status: PublishStatus
    published_at: datetime | None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _stamp(entity: Publishable, now: datetime | None) -> None:
    if entity.published_at is None:
        entity.published_at = now or utcnow()


def transition_action(previous: PublishStatus | None, new: PublishStatus | None) -> AuditAction:
    """Audit action for moving from ``previous`` to ``new`` (``new=None`` means untouched)."""
    if new is None or previous is new:
        return AuditAction.UPDATE
    if new is PublishStatus.PUBLISHED:
        return AuditAction.PUBLISH
    if new is PublishStatus.DRAFT and previous is PublishStatus.PUBLISHED:
        return AuditAction.UNPUBLISH
    return AuditAction.UPDATE


def apply_status(
    entity: Publishable,
    new_status: PublishStatus | None,
    now: datetime | None = None,
) -> AuditAction:
    """Write ``new_status`` onto an existing entity and return the audit action."""
    previous = entity.status
    action = transition_action(previous, new_status)
    if new_status is None:
        return action

    entity.status = new_status
    if action is AuditAction.PUBLISH:
        _stamp(entity, now)
    return action


def initial_status(
    entity: Publishable,
    status: PublishStatus | None,
    now: datetime | None = None,
) -> list[AuditAction]:
    """Set the status of a new entity; returns CREATE, plus PUBLISH when born published."""
    entity.status = status or PublishStatus.DRAFT
    actions = [AuditAction.CREATE]
    if entity.status is PublishStatus.PUBLISHED:
        _stamp(entity, now)
        actions.append(AuditAction.PUBLISH)
    return actions


__all__ = ['apply_status', 'initial_status', 'transition_action', 'utcnow']
