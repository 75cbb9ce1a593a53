"""Category management service."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.orm import selectinload

from causeway.errors import NotFoundError, ReferentialConflict, ValidationError
from causeway.extensions import db
from causeway.models import AuditAction, Category, Resource
from causeway.schemas import CategoryCreate, CategoryUpdate
from causeway.services.audit import record_action
from causeway.services.resources import serialize_resource
from causeway.services.slugs import slugify, unique_slug

LATEST_RESOURCES = 20


def resource_counts(category_ids: list[str] | None = None) -> dict[str, int]:
    """Number of resources per category id."""
    stmt = (
        select(Resource.category_id, func.count(Resource.id))
        .where(Resource.category_id.is_not(None))
        .group_by(Resource.category_id)
    )
    if category_ids is not None:
        stmt = stmt.where(Resource.category_id.in_(category_ids))
    return {category_id: count for category_id, count in db.session.execute(stmt).all()}


def serialize_category(
    category: Category,
    counts: dict[str, int] | None = None,
    include_children: bool = True,
) -> dict[str, Any]:
    counts = counts if counts is not None else resource_counts([category.id])
    data = {
        'id': category.id,
        'slug': category.slug,
        'nameEn': category.name_en,
        'nameAr': category.name_ar,
        'descriptionEn': category.description_en,
        'descriptionAr': category.description_ar,
        'icon': category.icon,
        'color': category.color,
        'enabled': category.enabled,
        'sortOrder': category.sort_order,
        'parentId': category.parent_id,
        'resourceCount': counts.get(category.id, 0),
        'createdAt': category.created_at.isoformat() if category.created_at else None,
        'updatedAt': category.updated_at.isoformat() if category.updated_at else None,
    }
    if include_children:
        data['children'] = [
            serialize_category(child, counts, include_children=False)
            for child in category.children
        ]
    return data


class CategoryService:
    """Service for category management."""

    @staticmethod
    def list_categories(include_disabled: bool = False) -> list[dict[str, Any]]:
        """All categories ordered by sort_order, each with its children and resource count."""
        stmt = select(Category).options(selectinload(Category.children))
        if not include_disabled:
            stmt = stmt.where(Category.enabled.is_(True))
        stmt = stmt.order_by(Category.sort_order, Category.name_en)
        categories = list(db.session.execute(stmt).scalars())

        counts = resource_counts()
        return [serialize_category(category, counts) for category in categories]

    @staticmethod
    def get_category(id_or_slug: str) -> Category:
        stmt = select(Category).where(
            or_(Category.id == id_or_slug, Category.slug == id_or_slug)
        )
        category = db.session.execute(stmt).scalars().first()
        if category is None:
            raise NotFoundError('Category not found')
        return category

    @staticmethod
    def category_detail(category: Category) -> dict[str, Any]:
        """Category with children, resource count and its latest resources."""
        stmt = (
            select(Resource)
            .where(Resource.category_id == category.id)
            .order_by(Resource.published_at.desc().nulls_last(), Resource.created_at.desc())
            .limit(LATEST_RESOURCES)
        )
        data = serialize_category(category)
        data['resources'] = [
            serialize_resource(resource) for resource in db.session.execute(stmt).scalars()
        ]
        return data

    @staticmethod
    def _validate_parent(parent_id: str | None, category: Category | None = None) -> None:
        if not parent_id:
            return
        if category is not None and parent_id == category.id:
            raise ValidationError('parentId: a category cannot be its own parent')

        parent = db.session.get(Category, parent_id)
        if parent is None:
            raise ValidationError(f"parentId: category {parent_id} does not exist")
        if parent.parent_id is not None:
            raise ValidationError('parentId: categories can only be nested one level deep')
        if category is not None and category.children:
            raise ValidationError('parentId: a category with children cannot have a parent')

    @staticmethod
    def create_category(data: CategoryCreate, user_id: str | None) -> Category:
        fields = data.present_fields()
        CategoryService._validate_parent(fields.get('parent_id'))

        category = Category(**fields, slug=unique_slug(Category, slugify(data.name_en)))
        db.session.add(category)
        db.session.commit()

        record_action(
            AuditAction.CREATE,
            entity_type='Category',
            entity_id=category.id,
            user_id=user_id,
            details={'name': category.name_en},
        )
        return category

    @staticmethod
    def update_category(category_id: str, data: CategoryUpdate, user_id: str | None) -> Category:
        category = db.session.get(Category, category_id)
        if category is None:
            raise NotFoundError('Category not found')

        fields = data.present_fields()
        if 'parent_id' in fields:
            CategoryService._validate_parent(fields['parent_id'], category)
        for key, value in fields.items():
            setattr(category, key, value)
        db.session.commit()

        record_action(
            AuditAction.UPDATE,
            entity_type='Category',
            entity_id=category.id,
            user_id=user_id,
            details={'name': category.name_en, 'changes': data.changed_keys()},
        )
        return category

    @staticmethod
    def delete_category(category_id: str, user_id: str | None) -> None:
        """
        Delete a category that no resource references.

        The reference check and the delete run in one transaction with the
        category row locked, so a resource cannot be attached in between.
        Children are detached rather than deleted.
        """
        stmt = select(Category).where(Category.id == category_id).with_for_update()
        category = db.session.execute(stmt).scalar_one_or_none()
        if category is None:
            raise NotFoundError('Category not found')

        count_stmt = (
            select(func.count(Resource.id))
            .where(Resource.category_id == category_id)
        )
        if db.session.execute(count_stmt).scalar_one() > 0:
            db.session.rollback()
            raise ReferentialConflict(
                'Cannot delete category with assigned resources. Reassign resources first.'
            )

        name = category.name_en
        for child in list(category.children):
            child.parent_id = None
        db.session.delete(category)
        db.session.commit()

        record_action(
            AuditAction.DELETE,
            entity_type='Category',
            entity_id=category_id,
            user_id=user_id,
            details={'name': name},
        )

    @staticmethod
    def reorder_categories(ids: list[str], user_id: str | None) -> list[Category]:
        """Rewrite sort_order to follow ``ids`` in a single transaction."""
        if len(set(ids)) != len(ids):
            raise ValidationError('ids: duplicate category ids')

        stmt = select(Category).where(Category.id.in_(ids))
        categories = {category.id: category for category in db.session.execute(stmt).scalars()}
        missing = [category_id for category_id in ids if category_id not in categories]
        if missing:
            raise ValidationError(f"ids: unknown categories {', '.join(missing)}")

        for position, category_id in enumerate(ids):
            categories[category_id].sort_order = position
        db.session.commit()

        record_action(
            AuditAction.REORDER,
            entity_type='Category',
            user_id=user_id,
            details={'ids': ids},
        )
        return [categories[category_id] for category_id in ids]


__all__ = ['CategoryService', 'serialize_category', 'resource_counts']
