"""Cross-entity text search over published content."""
from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import or_, select
from sqlalchemy.orm import joinedload

from causeway.errors import ValidationError
from causeway.extensions import db
from causeway.models import Page, PublishStatus, Resource
from causeway.services.pages import serialize_page
from causeway.services.resources import (
    LIKE_ESCAPE,
    contains_pattern,
    search_condition,
    serialize_resource,
)

MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 20
MAX_LIMIT = 50
SEARCH_TYPES = ('all', 'resources', 'pages')


class SearchService:
    """Service for searching resources and pages."""

    # Searchable models and how each is matched, ordered and serialized
    SEARCHABLE_MODELS = {
        'resources': {
            'model': Resource,
            'condition': lambda term: or_(
                search_condition(term),
                Resource.publisher.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
            ),
            'options': [joinedload(Resource.category)],
            'order_by': lambda: (Resource.published_at.desc().nulls_last(), Resource.id),
            'serialize': serialize_resource,
        },
        'pages': {
            'model': Page,
            'condition': lambda term: or_(
                Page.title_en.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
                Page.title_ar.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
                Page.content_en.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
                Page.content_ar.ilike(contains_pattern(term), escape=LIKE_ESCAPE),
            ),
            'options': [],
            'order_by': lambda: (Page.updated_at.desc(), Page.id),
            'serialize': serialize_page,
        },
    }

    @staticmethod
    def parse_limit(raw: Any) -> int:
        try:
            limit = int(raw)
        except (TypeError, ValueError):
            return DEFAULT_LIMIT
        if limit < 1:
            return DEFAULT_LIMIT
        return min(limit, MAX_LIMIT)

    @staticmethod
    def search(query: str | None, search_type: str = 'all', limit: int = DEFAULT_LIMIT) -> Dict[str, List[Dict]]:
        """
        Search published resources and/or pages.

        Args:
            query: Search text, trimmed; at least two characters
            search_type: ``all``, ``resources`` or ``pages``
            limit: Maximum results per type

        Returns:
            Dictionary with serialized results keyed by type
        """
        query = (query or '').strip()
        if len(query) < MIN_QUERY_LENGTH:
            raise ValidationError('Search query must be at least 2 characters')
        if search_type not in SEARCH_TYPES:
            raise ValidationError(f"type: must be one of {', '.join(SEARCH_TYPES)}")

        results = {}
        for name, config in SearchService.SEARCHABLE_MODELS.items():
            if search_type not in ('all', name):
                continue

            model = config['model']
            stmt = (
                select(model)
                .options(*config['options'])
                .where(model.status == PublishStatus.PUBLISHED)
                .where(config['condition'](query))
                .order_by(*config['order_by']())
                .limit(limit)
            )
            items = db.session.execute(stmt).scalars().all()
            results[name] = [config['serialize'](item) for item in items]

        return results


__all__ = ['SearchService', 'MIN_QUERY_LENGTH']
