"""Sitemap entries for the public site."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select

from causeway.extensions import db
from causeway.i18n import LOCALES
from causeway.models import Page, PublishStatus

STATIC_PATHS = ('', '/about', '/services', '/observatory', '/insights', '/contact', '/resources')


def _entry(site_url: str, path: str, locale: str, lastmod: datetime, priority: float) -> dict:
    return {
        'loc': f"{site_url}/{locale}{path}",
        'lastmod': lastmod.strftime('%Y-%m-%d'),
        'changefreq': 'weekly',
        'priority': f"{priority:.1f}",
        'alternates': {alt: f"{site_url}/{alt}{path}" for alt in LOCALES},
    }


def sitemap_entries(site_url: str) -> list[dict]:
    """Static routes and published pages, each once per locale with alternates."""
    site_url = site_url.rstrip('/')
    now = datetime.now(timezone.utc)

    entries = []
    for path in STATIC_PATHS:
        priority = 1.0 if path == '' else 0.8
        for locale in LOCALES:
            entries.append(_entry(site_url, path, locale, now, priority))

    stmt = (
        select(Page)
        .where(Page.status == PublishStatus.PUBLISHED)
        .order_by(Page.sort_order, Page.slug)
    )
    for page in db.session.execute(stmt).scalars():
        # Static routes already cover these slugs
        if f"/{page.slug}" in STATIC_PATHS:
            continue
        lastmod = page.updated_at or now
        for locale in LOCALES:
            entries.append(_entry(site_url, f"/{page.slug}", locale, lastmod, 0.6))

    return entries


__all__ = ['sitemap_entries', 'STATIC_PATHS']
