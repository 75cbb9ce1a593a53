"""Resource listing and management service."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import joinedload

from causeway.errors import NotFoundError, ValidationError
from causeway.extensions import db
from causeway.models import AuditAction, Category, PublishStatus, Resource, ResourceType
from causeway.schemas import ResourceCreate, ResourceUpdate
from causeway.services.audit import record_action
from causeway.services.pagination import PageParams, paginate
from causeway.services.publishing import apply_status, initial_status
from causeway.services.slugs import slugify, unique_slug

SORT_ORDERS = ('latest', 'oldest', 'title')


def _isoformat(value) -> str | None:
    return value.isoformat() if value else None


def _person(user) -> dict | None:
    if user is None:
        return None
    return {'name': user.name, 'email': user.email}


def serialize_category_summary(category: Category | None) -> dict | None:
    if category is None:
        return None
    return {
        'id': category.id,
        'slug': category.slug,
        'nameEn': category.name_en,
        'nameAr': category.name_ar,
        'icon': category.icon,
        'color': category.color,
    }


def serialize_resource(resource: Resource) -> dict[str, Any]:
    return {
        'id': resource.id,
        'slug': resource.slug,
        'titleEn': resource.title_en,
        'titleAr': resource.title_ar,
        'descriptionEn': resource.description_en,
        'descriptionAr': resource.description_ar,
        'contentEn': resource.content_en,
        'contentAr': resource.content_ar,
        'type': resource.type.value,
        'status': resource.status.value,
        'featured': resource.featured,
        'priority': resource.priority,
        'publisher': resource.publisher,
        'publishDate': _isoformat(resource.publish_date),
        'year': resource.year,
        'externalUrl': resource.external_url,
        'tags': list(resource.tags or []),
        'categoryId': resource.category_id,
        'category': serialize_category_summary(resource.category),
        'fileUrl': resource.file_url,
        'fileName': resource.file_name,
        'fileSize': resource.file_size,
        'fileMimeType': resource.file_mime_type,
        'thumbnailUrl': resource.thumbnail_url,
        'metaTitleEn': resource.meta_title_en,
        'metaTitleAr': resource.meta_title_ar,
        'metaDescEn': resource.meta_desc_en,
        'metaDescAr': resource.meta_desc_ar,
        'createdById': resource.created_by_id,
        'updatedById': resource.updated_by_id,
        'createdBy': _person(resource.created_by),
        'updatedBy': _person(resource.updated_by),
        'publishedAt': _isoformat(resource.published_at),
        'createdAt': _isoformat(resource.created_at),
        'updatedAt': _isoformat(resource.updated_at),
    }


LIKE_ESCAPE = '\\'


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` literally anywhere in a value."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )
    return f'%{escaped}%'


def tag_condition(pattern: str):
    """True when any single tag of the resource matches ``pattern``."""
    if db.session.get_bind().dialect.name == 'postgresql':
        elements = func.jsonb_array_elements_text(Resource.tags)
    else:
        elements = func.json_each(Resource.tags)
    tag = elements.table_valued('value').alias('tag')
    return (
        select(tag.c.value)
        .where(tag.c.value.ilike(pattern, escape=LIKE_ESCAPE))
        .correlate(Resource)
        .exists()
    )


def search_condition(term: str):
    """Case-insensitive substring match over titles, descriptions and tags."""
    pattern = contains_pattern(term)
    return or_(
        Resource.title_en.ilike(pattern, escape=LIKE_ESCAPE),
        Resource.title_ar.ilike(pattern, escape=LIKE_ESCAPE),
        Resource.description_en.ilike(pattern, escape=LIKE_ESCAPE),
        Resource.description_ar.ilike(pattern, escape=LIKE_ESCAPE),
        tag_condition(pattern),
    )


class ResourceService:
    """Service for resource management."""

    @staticmethod
    def list_resources(
        params: PageParams,
        admin: bool = False,
        search: str | None = None,
        category: str | None = None,
        resource_type: ResourceType | None = None,
        status: PublishStatus | None = None,
        sort: str = 'latest',
    ) -> tuple[list[Resource], int]:
        """
        Paginated resource listing.

        Public listings only ever see PUBLISHED resources; ``status`` is
        honoured for admin listings only. Featured resources come first,
        then higher priority, then the requested sort order.

        Args:
            params: Page and limit
            admin: Whether the caller is an authenticated admin view
            search: Free-text filter
            category: Category id or slug
            resource_type: Resource type filter
            status: Status filter (admin only)
            sort: One of ``latest``, ``oldest`` or ``title``
        """
        stmt = select(Resource).options(
            joinedload(Resource.category),
            joinedload(Resource.created_by),
            joinedload(Resource.updated_by),
        )

        if not admin:
            stmt = stmt.where(Resource.status == PublishStatus.PUBLISHED)
        elif status:
            stmt = stmt.where(Resource.status == status)

        if category:
            category_ids = select(Category.id).where(
                or_(Category.id == category, Category.slug == category)
            )
            stmt = stmt.where(Resource.category_id.in_(category_ids))

        if resource_type:
            stmt = stmt.where(Resource.type == resource_type)

        if search:
            stmt = stmt.where(search_condition(search))

        if sort == 'oldest':
            sort_key = Resource.published_at.asc().nulls_last()
        elif sort == 'title':
            sort_key = Resource.title_en.asc()
        else:
            sort_key = Resource.published_at.desc().nulls_last()

        stmt = stmt.order_by(
            Resource.featured.desc(),
            Resource.priority.desc(),
            sort_key,
            Resource.created_at.desc(),
            Resource.id,
        )
        return paginate(stmt, params)

    @staticmethod
    def get_resource(id_or_slug: str, public: bool = True) -> Resource:
        """Fetch by id or slug; unpublished resources are hidden from public reads."""
        stmt = (
            select(Resource)
            .options(
                joinedload(Resource.category),
                joinedload(Resource.created_by),
                joinedload(Resource.updated_by),
            )
            .where(or_(Resource.id == id_or_slug, Resource.slug == id_or_slug))
        )
        resource = db.session.execute(stmt).unique().scalars().first()
        if resource is None:
            raise NotFoundError('Resource not found')
        if public and resource.status is not PublishStatus.PUBLISHED:
            raise NotFoundError('Resource not found')
        return resource

    @staticmethod
    def _require_category(category_id: str | None) -> None:
        if category_id and db.session.get(Category, category_id) is None:
            raise ValidationError(f"categoryId: category {category_id} does not exist")

    @staticmethod
    def create_resource(data: ResourceCreate, user_id: str | None) -> Resource:
        """Create a resource; the slug is derived from the English title."""
        fields = data.present_fields()
        status = fields.pop('status', None)
        ResourceService._require_category(fields.get('category_id'))

        fields['tags'] = fields.get('tags') or []
        resource = Resource(
            **fields,
            slug=unique_slug(Resource, slugify(data.title_en)),
            created_by_id=user_id,
            updated_by_id=user_id,
        )
        actions = initial_status(resource, status)

        db.session.add(resource)
        db.session.commit()

        for action in actions:
            record_action(
                action,
                entity_type='Resource',
                entity_id=resource.id,
                user_id=user_id,
                details={'title': resource.title_en},
            )
        return resource

    @staticmethod
    def update_resource(resource_id: str, data: ResourceUpdate, user_id: str | None) -> Resource:
        """Partially update a resource. The slug is kept when the title changes."""
        resource = db.session.get(Resource, resource_id)
        if resource is None:
            raise NotFoundError('Resource not found')

        fields = data.present_fields()
        status = fields.pop('status', None)
        if 'category_id' in fields:
            ResourceService._require_category(fields['category_id'])
        if 'tags' in fields and fields['tags'] is None:
            fields['tags'] = []

        for key, value in fields.items():
            setattr(resource, key, value)
        resource.updated_by_id = user_id
        action = apply_status(resource, status)

        db.session.commit()

        record_action(
            action,
            entity_type='Resource',
            entity_id=resource.id,
            user_id=user_id,
            details={'title': resource.title_en, 'changes': data.changed_keys()},
        )
        return resource

    @staticmethod
    def delete_resource(resource_id: str, user_id: str | None) -> None:
        resource = db.session.get(Resource, resource_id)
        if resource is None:
            raise NotFoundError('Resource not found')

        title = resource.title_en
        db.session.delete(resource)
        db.session.commit()

        record_action(
            AuditAction.DELETE,
            entity_type='Resource',
            entity_id=resource_id,
            user_id=user_id,
            details={'title': title},
        )


__all__ = [
    'ResourceService',
    'serialize_resource',
    'serialize_category_summary',
    'contains_pattern',
    'search_condition',
    'LIKE_ESCAPE',
    'SORT_ORDERS',
]
