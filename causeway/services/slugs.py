"""URL slug derivation."""

from __future__ import annotations

import re
import time
import unicodedata

from sqlalchemy import select

from causeway.extensions import db

_BASE36_DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if number < 0:
        raise ValueError('base36 encoding requires a non-negative integer')
    if number == 0:
        return '0'
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return ''.join(reversed(digits))


def timestamp_token(now_ms: int | None = None) -> str:
    """Compact base-36 token for the current millisecond."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return to_base36(now_ms)


def slugify(text: str) -> str:
    """Convert text to URL-friendly slug."""
    text = unicodedata.normalize('NFKD', text or '')
    text = text.encode('ascii', 'ignore').decode('ascii')
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_-]+', '-', text)
    return text.strip('-')


def unique_slug(model, base: str, exclude_id: str | None = None) -> str:
    """
    Return ``base`` if no ``model`` row uses it, else ``base`` plus a timestamp token.

    The suffixed slug is not re-checked.
    """
    stmt = select(model.id).where(model.slug == base)
    if exclude_id:
        stmt = stmt.where(model.id != exclude_id)
    if db.session.execute(stmt).first() is None:
        return base
    return f"{base}-{timestamp_token()}"


def slug_taken(model, slug: str, exclude_id: str | None = None) -> bool:
    stmt = select(model.id).where(model.slug == slug)
    if exclude_id:
        stmt = stmt.where(model.id != exclude_id)
    return db.session.execute(stmt).first() is not None


__all__ = ['slugify', 'unique_slug', 'slug_taken', 'to_base36', 'timestamp_token']
