"""Health reporting and external link checks."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import requests
from flask import current_app
from sqlalchemy import func, or_, select, text

from causeway.extensions import db
from causeway.i18n import completion_score
from causeway.models import Category, LinkCheck, Page, PublishStatus, Resource
from causeway.services.audit import recent_activity, serialize_audit_log

CONNECTION_FAILED = 'Connection failed'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _count(stmt) -> int:
    return db.session.execute(stmt).scalar_one()


def _missing_arabic_title(model) -> int:
    stmt = (
        select(func.count(model.id))
        .where(model.status == PublishStatus.PUBLISHED)
        .where(or_(model.title_ar.is_(None), func.trim(model.title_ar) == ''))
    )
    return _count(stmt)


def serialize_link_check(check: LinkCheck) -> dict[str, Any]:
    return {
        'id': check.id,
        'url': check.url,
        'status': check.status,
        'statusText': check.status_text,
        'sourceType': check.source_type,
        'sourceId': check.source_id,
        'isBroken': check.is_broken,
        'lastChecked': check.last_checked.isoformat() if check.last_checked else None,
    }


class HealthService:
    """Database reachability, content statistics and link checking."""

    @staticmethod
    def database_ok() -> bool:
        try:
            db.session.execute(text('SELECT 1'))
            return True
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Health check database error: {e}")
            return False

    @staticmethod
    def detailed_report() -> dict[str, Any]:
        """Counts, bilingual completeness and recent activity for the dashboard."""
        status_counts = dict(
            db.session.execute(
                select(Resource.status, func.count(Resource.id)).group_by(Resource.status)
            ).all()
        )
        resources = {
            'total': sum(status_counts.values()),
            'draft': status_counts.get(PublishStatus.DRAFT, 0),
            'published': status_counts.get(PublishStatus.PUBLISHED, 0),
            'archived': status_counts.get(PublishStatus.ARCHIVED, 0),
        }
        missing_ar_resources = _missing_arabic_title(Resource)
        missing_ar_pages = _missing_arabic_title(Page)
        missing = missing_ar_resources + missing_ar_pages
        ar_titles = [
            *db.session.execute(
                select(Resource.title_ar).where(Resource.status == PublishStatus.PUBLISHED)
            ).scalars(),
            *db.session.execute(
                select(Page.title_ar).where(Page.status == PublishStatus.PUBLISHED)
            ).scalars(),
        ]
        completeness = completion_score((title or '').strip() for title in ar_titles)

        last_check = _count(select(func.max(LinkCheck.last_checked)))

        return {
            'database': True,
            'resources': resources,
            'categories': _count(select(func.count(Category.id))),
            'pages': _count(select(func.count(Page.id))),
            'brokenLinks': _count(
                select(func.count(LinkCheck.id)).where(LinkCheck.is_broken.is_(True))
            ),
            'missingArResources': missing_ar_resources,
            'missingArPages': missing_ar_pages,
            'missingTranslations': missing,
            'translationCompleteness': completeness,
            'recentActivity': [serialize_audit_log(log) for log in recent_activity(10)],
            'lastCheckAt': last_check.isoformat() if last_check else None,
            'generatedAt': _utcnow().isoformat(),
        }

    @staticmethod
    def _probe(url: str, timeout: float) -> tuple[int, str, bool]:
        """(status, status text, broken) for one URL; connection errors give status 0."""
        try:
            response = requests.head(url, timeout=timeout, allow_redirects=True)
        except requests.RequestException as e:
            current_app.logger.error(f"Link check failed for {url}: {e}")
            return 0, CONNECTION_FAILED, True
        return response.status_code, response.reason or '', not response.ok

    @staticmethod
    def _upsert(resource_id: str, url: str, status: int, status_text: str, broken: bool) -> None:
        check_id = f"{resource_id}-url"
        check = db.session.get(LinkCheck, check_id)
        if check is None:
            check = LinkCheck(id=check_id, source_type='Resource', source_id=resource_id)
            db.session.add(check)
        check.url = url
        check.status = status
        check.status_text = status_text
        check.is_broken = broken
        check.last_checked = _utcnow()
        db.session.commit()

    @staticmethod
    def run_link_check(timeout: float | None = None) -> dict[str, Any]:
        """
        Probe the external URL of every published resource.

        Each result is stored on its own, so one failing URL never aborts
        the run.

        Returns:
            ``{checked, broken, timestamp}``
        """
        if timeout is None:
            timeout = current_app.config.get('LINK_CHECK_TIMEOUT', 10)

        stmt = (
            select(Resource.id, Resource.external_url)
            .where(Resource.status == PublishStatus.PUBLISHED)
            .where(Resource.external_url.is_not(None))
        )
        targets = [(rid, url) for rid, url in db.session.execute(stmt).all() if url]

        checked = 0
        broken = 0
        for resource_id, url in targets:
            status, status_text, is_broken = HealthService._probe(url, timeout)
            try:
                HealthService._upsert(resource_id, url, status, status_text, is_broken)
            except Exception as e:
                db.session.rollback()
                current_app.logger.error(f"Failed to store link check for {resource_id}: {e}")
            checked += 1
            if is_broken:
                broken += 1

        current_app.logger.info(f"Link check finished: {checked} checked, {broken} broken")
        return {'checked': checked, 'broken': broken, 'timestamp': _utcnow().isoformat()}

    @staticmethod
    def list_link_checks() -> list[LinkCheck]:
        """Stored link checks, broken first, then most recently checked."""
        stmt = select(LinkCheck).order_by(
            LinkCheck.is_broken.desc(),
            LinkCheck.last_checked.desc(),
        )
        return list(db.session.execute(stmt).scalars())


__all__ = ['HealthService', 'serialize_link_check', 'CONNECTION_FAILED']
